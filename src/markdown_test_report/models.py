"""
Data models for test events and the aggregated report summary.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import ClassVar, Union


class Outcome(Enum):
    """Outcome of a suite, a test or the whole report."""

    OK = "ok"
    FAILED = "failed"

    @property
    def glyph(self) -> str:
        return "✅" if self is Outcome.OK else "❌"

    def __str__(self) -> str:
        return self.glyph


@dataclass(frozen=True)
class SuiteStarted:
    """A test suite started running."""

    test_count: int


@dataclass(frozen=True)
class SuiteFinished:
    """Counters reported when a test suite completes."""

    passed: int
    failed: int
    allowed_fail: int
    ignored: int
    filtered_out: int
    exec_time: timedelta

    outcome: ClassVar[Outcome] = Outcome.OK


@dataclass(frozen=True)
class SuiteOk(SuiteFinished):
    """A test suite completed without failures."""

    outcome: ClassVar[Outcome] = Outcome.OK


@dataclass(frozen=True)
class SuiteFailed(SuiteFinished):
    """A test suite completed with at least one failure."""

    outcome: ClassVar[Outcome] = Outcome.FAILED


@dataclass(frozen=True)
class TestStarted:
    """A single test started running."""

    __test__ = False

    name: str


@dataclass(frozen=True)
class TestOk:
    """A single test passed."""

    __test__ = False

    name: str
    exec_time: timedelta

    outcome: ClassVar[Outcome] = Outcome.OK


@dataclass(frozen=True)
class TestFailed:
    """A single test failed, with its captured output."""

    __test__ = False

    name: str
    exec_time: timedelta
    stdout: str = ""

    outcome: ClassVar[Outcome] = Outcome.FAILED


SuiteEvent = Union[SuiteStarted, SuiteOk, SuiteFailed]
TestEvent = Union[TestStarted, TestOk, TestFailed]
Event = Union[SuiteEvent, TestEvent]


@dataclass(frozen=True)
class Summary:
    """Aggregated result of every completed suite in the input."""

    outcome: Outcome
    passed: int
    failed: int
    ignored: int
    filtered_out: int
    exec_time: timedelta

    @property
    def success(self) -> bool:
        """Return True if no suite reported a failure."""
        return self.outcome is Outcome.OK
