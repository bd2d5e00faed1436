"""Log timestamp parsing and session duration formatting."""
from __future__ import annotations

import re
from datetime import datetime, timedelta

from mailsessions.errors import TimestampParseError

# 2021-01-01T10:00:00 with an optional fraction; digits past nanoseconds are dropped.
_TIMESTAMP_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?", re.ASCII)
_SECOND = timedelta(seconds=1)
_SECOND_NS = 1_000_000_000
_DAY_NS = 24 * 60 * 60 * _SECOND_NS


def _parse_parts(value: str) -> tuple[datetime, int]:
    """Split a timestamp into its whole-second datetime and nanoseconds."""
    match = _TIMESTAMP_RE.fullmatch(value or "")
    if not match:
        raise TimestampParseError(value)
    year, month, day, hour, minute, second, fraction = match.groups()
    nanos = int((fraction or "")[:9].ljust(9, "0"))
    try:
        whole = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second))
    except ValueError as exc:
        raise TimestampParseError(value) from exc
    return whole, nanos


def parse_log_timestamp(value: str) -> datetime:
    """Parse a zone-less ``YYYY-MM-DDTHH:MM:SS[.fffffffff]`` timestamp to microseconds."""
    whole, nanos = _parse_parts(value)
    return whole.replace(microsecond=nanos // 1000)


def format_clock(total_us: int) -> str:
    """Render microseconds as ``HH:MM:SS`` plus a trimmed fraction when non-zero."""
    seconds, micros = divmod(total_us, 1_000_000)
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    text = f"{hours:02d}:{minutes:02d}:{secs:02d}"
    if micros:
        text += "." + f"{micros:06d}".rstrip("0")
    return text


def _difference_ns(start: str, end: str) -> int:
    start_dt, start_ns = _parse_parts(start)
    end_dt, end_ns = _parse_parts(end)
    return (end_dt - start_dt) // _SECOND * _SECOND_NS + (end_ns - start_ns)


def compute_duration(start: str, end: str, order: str = "elapsed") -> str:
    """Format the time between ``start`` and ``end``.

    The difference is taken in nanoseconds and the printed fraction is cut,
    not rounded, to microseconds.
    ``elapsed`` gives the absolute difference, hours unbounded.
    ``legacy`` reproduces the historical output: ``start - end`` laid on a
    24 hour clock, so a status 5s after the client reads ``23:59:55``.
    """
    diff_ns = _difference_ns(start, end)
    if order == "legacy":
        return format_clock(((-diff_ns) % _DAY_NS) // 1000)
    return format_clock(abs(diff_ns) // 1000)
