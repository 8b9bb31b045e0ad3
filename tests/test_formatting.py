"""Tests for anchor and duration formatting."""

from datetime import timedelta

import pytest

from markdown_test_report.reporting.formatting import (
    human_duration,
    make_anchor,
    precise_duration,
    readable_duration,
)


class TestMakeAnchor:
    """Tests for make_anchor function."""

    def test_empty(self):
        assert make_anchor("") == ""

    def test_collapses_spaces(self):
        assert make_anchor("foo  bar") == "foo-bar"

    def test_emoji_heading(self):
        assert (
            make_anchor("✅ tests::registry::test_registry_create_and_delete")
            == "-testsregistrytest_registry_create_and_delete"
        )

    def test_leading_glyph_then_words(self):
        assert make_anchor("❌ some test name") == "-some-test-name"

    def test_mixed_spaces_and_dashes_collapse(self):
        assert make_anchor("a - -b") == "a-b"

    def test_leading_space_kept_as_dash(self):
        assert make_anchor(" a") == "-a"

    def test_trailing_separator_kept(self):
        assert make_anchor("a -") == "a-"

    def test_underscore_resets_dash(self):
        assert make_anchor("a _ b") == "a-_-b"

    def test_dropped_character_does_not_reset_dash(self):
        assert make_anchor("a -::- b") == "a-b"

    def test_case_preserved(self):
        assert make_anchor("FooBar") == "FooBar"

    def test_unicode_alphanumeric_kept(self):
        assert make_anchor("größe 2") == "größe-2"

    def test_other_whitespace_dropped(self):
        assert make_anchor("a\tb") == "ab"

    def test_deterministic(self):
        assert make_anchor("x::y z") == make_anchor("x::y z")


class TestPreciseDuration:
    """Tests for precise_duration function."""

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (timedelta(0), "0s"),
            (timedelta(seconds=1.5), "1.5s"),
            (timedelta(seconds=2), "2s"),
            (timedelta(seconds=1.7), "1.7s"),
            (timedelta(seconds=0.2), "200ms"),
            (timedelta(microseconds=1234), "1.234ms"),
            (timedelta(microseconds=12), "12µs"),
            (timedelta(seconds=90, microseconds=5), "90.000005s"),
        ],
    )
    def test_format(self, duration, expected):
        assert precise_duration(duration) == expected


class TestHumanDuration:
    """Tests for human_duration function."""

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (timedelta(0), "0s"),
            (timedelta(seconds=0.9), "0s"),
            (timedelta(seconds=5), "5s"),
            (timedelta(seconds=5.99), "5s"),
            (timedelta(seconds=90), "1m 30s"),
            (timedelta(hours=1, seconds=1), "1h 1s"),
            (timedelta(days=1), "1day"),
            (timedelta(days=2, hours=3), "2days 3h"),
            (timedelta(days=365, hours=6), "1year"),
        ],
    )
    def test_format(self, duration, expected):
        assert human_duration(duration) == expected


class TestReadableDuration:
    """Tests for readable_duration function."""

    def test_default_truncates(self):
        assert readable_duration(timedelta(seconds=1.7)) == "1s"

    def test_precise(self):
        assert readable_duration(timedelta(seconds=1.7), precise=True) == "1.7s"

    def test_stable_for_same_input(self):
        first = readable_duration(timedelta(seconds=0.2), precise=True)
        second = readable_duration(timedelta(seconds=0.2), precise=True)
        assert first == second == "200ms"
