"""Shared fixtures for markdown-test-report tests."""

import pytest

_ENV_VARS = (
    "GITHUB_RUN_ID",
    "GITHUB_REPOSITORY",
    "GITHUB_SERVER_URL",
    "MDTR_OUTPUT",
    "MDTR_NO_FRONT_MATTER",
    "MDTR_SUMMARY",
    "MDTR_PRECISE",
    "MDTR_GIT",
    "MDTR_NO_GIT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CI and configuration variables of the host out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


SCENARIO_A = [
    '{"type":"suite","event":"started","test_count":2}',
    '{"type":"test","event":"ok","name":"a","exec_time":1.5}',
    '{"type":"test","event":"failed","name":"b","exec_time":0.2,"stdout":"boom"}',
    '{"type":"suite","event":"failed","passed":1,"failed":1,"allowed_fail":0,'
    '"ignored":0,"filtered_out":0,"exec_time":1.7}',
]


@pytest.fixture
def scenario_a_lines():
    return list(SCENARIO_A)
