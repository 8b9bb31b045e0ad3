"""
Anchor and duration formatting helpers for Markdown output.
"""

from datetime import timedelta
from typing import List, Tuple

_MICROS_PER_SECOND = 1_000_000

# Calendar units follow the usual "humantime" conventions
_UNITS: Tuple[Tuple[str, int, bool], ...] = (
    ("year", 31_557_600, True),
    ("month", 2_630_016, True),
    ("day", 86_400, True),
    ("h", 3_600, False),
    ("m", 60, False),
    ("s", 1, False),
)


def make_anchor(text: str) -> str:
    """
    Turn a heading or test name into an in-document link target.

    Underscores and alphanumeric characters are kept as they are, runs of
    spaces and dashes collapse into a single dash and everything else is
    dropped.

    Examples:
        >>> make_anchor("foo  bar")
        'foo-bar'
        >>> make_anchor("✅ tests::registry::test_create")
        '-testsregistrytest_create'
    """
    out: List[str] = []
    was_dash = False
    for c in text:
        if c == "_":
            out.append(c)
            was_dash = False
        elif c == " " or c == "-":
            # only a literal space, Markdown renderers ignore other whitespace
            if not was_dash:
                was_dash = True
                out.append("-")
        elif c.isalnum():
            out.append(c)
            was_dash = False
    return "".join(out)


def _total_micros(duration: timedelta) -> int:
    return (duration.days * 86_400 + duration.seconds) * _MICROS_PER_SECOND + duration.microseconds


def _with_fraction(whole: int, fraction: int, width: int, suffix: str) -> str:
    digits = f"{fraction:0{width}d}".rstrip("0")
    if digits:
        return f"{whole}.{digits}{suffix}"
    return f"{whole}{suffix}"


def precise_duration(duration: timedelta) -> str:
    """Render a duration exactly, in the largest of s, ms or µs that fits."""
    micros = _total_micros(duration)
    if micros == 0:
        return "0s"
    if micros >= _MICROS_PER_SECOND:
        return _with_fraction(*divmod(micros, _MICROS_PER_SECOND), 6, "s")
    if micros >= 1_000:
        return _with_fraction(*divmod(micros, 1_000), 3, "ms")
    return f"{micros}µs"


def human_duration(duration: timedelta) -> str:
    """Render a duration truncated to whole seconds, e.g. ``1m 30s``."""
    remaining = _total_micros(duration) // _MICROS_PER_SECOND
    if remaining == 0:
        return "0s"

    parts: List[str] = []
    for name, size, plural in _UNITS:
        value, remaining = divmod(remaining, size)
        if not value:
            continue
        suffix = "s" if plural and value > 1 else ""
        parts.append(f"{value}{name}{suffix}")
    return " ".join(parts)


def readable_duration(duration: timedelta, precise: bool = False) -> str:
    """
    Make a readable duration.

    Args:
        duration: Duration to render
        precise: Keep sub-second precision instead of whole seconds

    Returns:
        The formatted duration
    """
    if precise:
        return precise_duration(duration)
    return human_duration(duration)
