"""
Custom exceptions for markdown-test-report.
"""


class ReportError(Exception):
    """Base exception for report generation errors."""

    pass


class EventDecodeError(ReportError, ValueError):
    """Raised when an input line is not a recognised test event."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Unable to decode event: {reason}")


class AddonError(ReportError):
    """Raised when a metadata addon fails to render."""

    def __init__(self, addon_name: str, original_error: Exception):
        self.addon_name = addon_name
        self.original_error = original_error
        super().__init__(f"Addon '{addon_name}' failed: {original_error}")


class ReportStateError(ReportError):
    """Raised when the processor is used after it has been finished."""

    pass
