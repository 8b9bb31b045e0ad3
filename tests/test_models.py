"""Tests for data models."""

from datetime import timedelta

import pytest

from markdown_test_report.models import (
    Outcome,
    SuiteFailed,
    SuiteFinished,
    SuiteOk,
    SuiteStarted,
    Summary,
    TestFailed,
    TestOk,
    TestStarted,
)


class TestOutcome:
    """Tests for Outcome enum."""

    def test_values(self):
        assert Outcome.OK.value == "ok"
        assert Outcome.FAILED.value == "failed"

    def test_glyphs(self):
        assert Outcome.OK.glyph == "✅"
        assert Outcome.FAILED.glyph == "❌"

    def test_str_is_glyph(self):
        assert str(Outcome.FAILED) == "❌"


class TestSuiteEvents:
    """Tests for suite event dataclasses."""

    def test_started(self):
        assert SuiteStarted(test_count=3).test_count == 3

    def test_finished_outcomes(self):
        fields = dict(passed=1, failed=0, allowed_fail=0, ignored=0, filtered_out=0)
        ok = SuiteOk(exec_time=timedelta(seconds=1), **fields)
        failed = SuiteFailed(exec_time=timedelta(seconds=1), **fields)
        assert ok.outcome is Outcome.OK
        assert failed.outcome is Outcome.FAILED
        assert isinstance(ok, SuiteFinished)
        assert isinstance(failed, SuiteFinished)

    def test_frozen(self):
        event = SuiteStarted(test_count=1)
        with pytest.raises(AttributeError):
            event.test_count = 2


class TestTestEvents:
    """Tests for test event dataclasses."""

    def test_started_has_no_outcome(self):
        assert not hasattr(TestStarted(name="a"), "outcome")

    def test_ok(self):
        event = TestOk(name="a", exec_time=timedelta(seconds=1.5))
        assert event.outcome is Outcome.OK
        assert event.exec_time == timedelta(seconds=1, microseconds=500000)

    def test_failed_stdout_defaults_to_empty(self):
        event = TestFailed(name="b", exec_time=timedelta(0))
        assert event.stdout == ""
        assert event.outcome is Outcome.FAILED

    def test_equality(self):
        assert TestOk("a", timedelta(1)) == TestOk("a", timedelta(1))


class TestSummary:
    """Tests for Summary dataclass."""

    def test_success(self):
        summary = Summary(Outcome.OK, 2, 0, 0, 0, timedelta(0))
        assert summary.success is True

    def test_failure(self):
        summary = Summary(Outcome.FAILED, 1, 1, 0, 0, timedelta(0))
        assert summary.success is False
