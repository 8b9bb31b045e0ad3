"""
Event aggregation and report finalization.
"""

import logging
from typing import Iterable, List, Optional, TextIO

from .config import CiEnvironment, ReportOptions
from .events import decode_event
from .exceptions import EventDecodeError, ReportStateError
from .models import (
    Event,
    SuiteFinished,
    SuiteStarted,
    Summary,
    TestEvent,
    TestFailed,
    TestOk,
    TestStarted,
)
from .reporting.markdown import MarkdownRenderer
from .results import aggregate_summaries

logger = logging.getLogger(__name__)


class ReportProcessor:
    """Collect test events and render them as a Markdown report.

    Events are ingested one at a time; nothing is written until
    :meth:`finish` is called. Used as a context manager, the report is
    rendered when the ``with`` block exits normally::

        with ReportProcessor(out, options) as processor:
            for event in read_events(lines):
                processor.ingest(event)
    """

    def __init__(
        self,
        write: TextIO,
        options: Optional[ReportOptions] = None,
        environment: Optional[CiEnvironment] = None,
    ):
        self.write = write
        self.options = options or ReportOptions()
        self.environment = environment or CiEnvironment()
        self.tests: List[TestEvent] = []
        self.test_count: Optional[int] = None
        self.suites: List[SuiteFinished] = []
        self.finished = False

    @property
    def summary(self) -> Optional[Summary]:
        """Merged result of every completed suite, or None if none completed."""
        return aggregate_summaries(self.suites)

    def __enter__(self) -> "ReportProcessor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # An error inside the block is not masked by a render attempt
        if exc_type is None and not self.finished:
            self.finish()

    def ingest(self, event: Event) -> None:
        """
        Record one decoded event.

        Raises:
            ReportStateError: If the report has already been finished
        """
        if self.finished:
            raise ReportStateError("Cannot ingest events after the report was finished")

        logger.debug("Record: %r", event)

        if isinstance(event, (TestStarted, TestOk, TestFailed)):
            self.tests.append(event)
        elif isinstance(event, SuiteStarted):
            self.test_count = (self.test_count or 0) + event.test_count
        elif isinstance(event, SuiteFinished):
            self.suites.append(event)
        else:
            raise TypeError(f"Unsupported event: {event!r}")

    def ingest_all(self, events: Iterable[Event]) -> None:
        for event in events:
            self.ingest(event)

    def line(self, line: str) -> None:
        """Decode and record one input line, ignoring lines that are not events."""
        try:
            event = decode_event(line)
        except EventDecodeError as e:
            logger.debug("Ignoring line: %s -> %s", e.reason, line)
            return
        self.ingest(event)

    def finish(self) -> None:
        """
        Render the report to the output stream.

        Raises:
            ReportStateError: If the report has already been finished
            AddonError: If a required addon fails
            OSError: If writing the report fails
        """
        if self.finished:
            raise ReportStateError("Report has already been finished")
        self.finished = True
        summary = self.summary

        logger.info(
            "Rendering report: %d test events, summary %s",
            len(self.tests),
            "present" if summary else "missing",
        )
        renderer = MarkdownRenderer(self.write, self.options, self.environment)
        renderer.render(summary, self.test_count, self.tests)
        self.write.flush()
