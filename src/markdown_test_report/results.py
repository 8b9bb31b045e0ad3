"""
Summary aggregation across suite completion events.
"""

import logging
from datetime import timedelta
from typing import Iterable, Optional

from .models import Outcome, SuiteFinished, Summary

logger = logging.getLogger(__name__)


def _add_exec_time(total: timedelta, exec_time: timedelta) -> timedelta:
    """Add two durations, saturating at ``timedelta.max``."""
    try:
        return total + exec_time
    except OverflowError:
        logger.warning("Total execution time exceeds %s, clamping", timedelta.max)
        return timedelta.max


def merge_summary(summary: Optional[Summary], event: SuiteFinished) -> Summary:
    """
    Merge a suite completion event into the running summary.

    Counters and execution time are summed. The outcome starts at the first
    suite's outcome and, once failed, stays failed.

    Args:
        summary: Summary so far, or None before the first completed suite
        event: A ``SuiteOk`` or ``SuiteFailed`` event

    Returns:
        A new Summary including the event
    """
    if summary is None:
        return Summary(
            outcome=event.outcome,
            passed=event.passed,
            failed=event.failed,
            ignored=event.ignored,
            filtered_out=event.filtered_out,
            exec_time=event.exec_time,
        )

    outcome = summary.outcome
    if event.outcome is Outcome.FAILED:
        outcome = Outcome.FAILED

    return Summary(
        outcome=outcome,
        passed=summary.passed + event.passed,
        failed=summary.failed + event.failed,
        ignored=summary.ignored + event.ignored,
        filtered_out=summary.filtered_out + event.filtered_out,
        exec_time=_add_exec_time(summary.exec_time, event.exec_time),
    )


def aggregate_summaries(events: Iterable[SuiteFinished]) -> Optional[Summary]:
    """
    Fold suite completion events into a single summary.

    Returns:
        The merged Summary, or None if no suite completed
    """
    summary: Optional[Summary] = None
    for event in events:
        summary = merge_summary(summary, event)
    return summary
