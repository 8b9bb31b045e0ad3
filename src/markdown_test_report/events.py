"""
Decoding of newline-delimited JSON test events.

Each input line is one JSON object tagged by ``type`` (``suite`` or ``test``)
and ``event`` (``started``, ``ok`` or ``failed``), as written by
``cargo test -- -Z unstable-options --format json``.
"""

import json
import logging
import math
from datetime import timedelta
from typing import Any, Callable, Dict, Iterable, Iterator, Tuple

from .exceptions import EventDecodeError
from .models import (
    Event,
    SuiteFailed,
    SuiteOk,
    SuiteStarted,
    TestFailed,
    TestOk,
    TestStarted,
)

logger = logging.getLogger(__name__)

_COUNTERS = ("passed", "failed", "allowed_fail", "ignored", "filtered_out")
_U64_MAX = 2**64 - 1


def _unsigned(line: str, data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    # bool is a subclass of int, but true/false is not a counter
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventDecodeError(line, f"'{key}' must be an unsigned integer, got: {value!r}")
    if value < 0:
        raise EventDecodeError(line, f"'{key}' must not be negative, got: {value}")
    if value > _U64_MAX:
        raise EventDecodeError(line, f"'{key}' is out of range, got: {value}")
    return value


def _string(line: str, data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise EventDecodeError(line, f"'{key}' must be a string, got: {value!r}")
    return value


def _duration(line: str, data: Dict[str, Any], key: str) -> timedelta:
    """Convert a number of seconds into a timedelta."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EventDecodeError(line, f"'{key}' must be a number of seconds, got: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise EventDecodeError(line, f"'{key}' is not a valid duration: {value!r}")
    try:
        return timedelta(seconds=value)
    except OverflowError:
        raise EventDecodeError(line, f"'{key}' is out of range: {value!r}")


def _suite_started(line: str, data: Dict[str, Any]) -> Event:
    return SuiteStarted(test_count=_unsigned(line, data, "test_count"))


def _suite_ok(line: str, data: Dict[str, Any]) -> Event:
    counters = {key: _unsigned(line, data, key) for key in _COUNTERS}
    return SuiteOk(exec_time=_duration(line, data, "exec_time"), **counters)


def _suite_failed(line: str, data: Dict[str, Any]) -> Event:
    counters = {key: _unsigned(line, data, key) for key in _COUNTERS}
    return SuiteFailed(exec_time=_duration(line, data, "exec_time"), **counters)


def _test_started(line: str, data: Dict[str, Any]) -> Event:
    return TestStarted(name=_string(line, data, "name"))


def _test_ok(line: str, data: Dict[str, Any]) -> Event:
    return TestOk(name=_string(line, data, "name"), exec_time=_duration(line, data, "exec_time"))


def _test_failed(line: str, data: Dict[str, Any]) -> Event:
    stdout = data.get("stdout", "")
    if not isinstance(stdout, str):
        raise EventDecodeError(line, f"'stdout' must be a string, got: {stdout!r}")
    return TestFailed(
        name=_string(line, data, "name"),
        exec_time=_duration(line, data, "exec_time"),
        stdout=stdout,
    )


_DECODERS: Dict[Tuple[str, str], Callable[[str, Dict[str, Any]], Event]] = {
    ("suite", "started"): _suite_started,
    ("suite", "ok"): _suite_ok,
    ("suite", "failed"): _suite_failed,
    ("test", "started"): _test_started,
    ("test", "ok"): _test_ok,
    ("test", "failed"): _test_failed,
}


def decode_event(line: str) -> Event:
    """
    Decode one line of harness output into an event.

    Args:
        line: A single line of JSON text

    Returns:
        The decoded suite or test event

    Raises:
        EventDecodeError: If the line is not JSON or not a known event shape
    """
    try:
        data = json.loads(line)
    except ValueError as e:
        raise EventDecodeError(line, f"invalid JSON: {e}")

    if not isinstance(data, dict):
        raise EventDecodeError(line, "expected a JSON object")

    kind = data.get("type")
    event = data.get("event")
    decoder = None
    if isinstance(kind, str) and isinstance(event, str):
        decoder = _DECODERS.get((kind, event))
    if decoder is None:
        raise EventDecodeError(line, f"unknown event type={kind!r} event={event!r}")

    return decoder(line, data)


def read_events(lines: Iterable[str]) -> Iterator[Event]:
    """
    Decode every recognised event from an iterable of lines.

    Lines that cannot be decoded are logged at debug level and skipped.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            yield decode_event(line)
        except EventDecodeError as e:
            logger.debug("Ignoring line: %s -> %s", e.reason, line)
