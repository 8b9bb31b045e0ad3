"""Tests for custom exceptions."""

from markdown_test_report.exceptions import (
    AddonError,
    EventDecodeError,
    ReportError,
    ReportStateError,
)


class TestReportError:
    """Tests for base exception."""

    def test_is_exception(self):
        assert issubclass(ReportError, Exception)

    def test_message(self):
        assert str(ReportError("report error")) == "report error"


class TestEventDecodeError:
    """Tests for decode error."""

    def test_inherits(self):
        assert issubclass(EventDecodeError, ReportError)
        assert issubclass(EventDecodeError, ValueError)

    def test_attributes(self):
        err = EventDecodeError("{bad", "invalid JSON")
        assert err.line == "{bad"
        assert err.reason == "invalid JSON"
        assert "invalid JSON" in str(err)


class TestAddonError:
    """Tests for addon error."""

    def test_attributes(self):
        orig = RuntimeError("not a repository")
        err = AddonError("git", orig)
        assert err.addon_name == "git"
        assert err.original_error is orig
        assert str(err) == "Addon 'git' failed: not a repository"


class TestReportStateError:
    """Tests for state error."""

    def test_inherits_from_base(self):
        assert issubclass(ReportStateError, ReportError)
