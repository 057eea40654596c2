"""Time helpers shared by the message schemas and the canonical encoder."""

from __future__ import annotations

from datetime import UTC, datetime

NANOSECONDS_PER_MICROSECOND = 1_000


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def format_rfc3339(value: datetime, nanoseconds: int = 0) -> str:
    """Format a datetime as RFC 3339 with nanosecond precision.

    The layout matches Go's ``time.RFC3339Nano``: the fractional part is
    trimmed of trailing zeros and dropped entirely when zero, a zero UTC offset
    is written as ``Z`` and any other offset as ``+HH:MM``/``-HH:MM``. The
    original offset is kept, not converted to UTC. Naive values are treated
    as UTC.

    Args:
        value: The instant to format.
        nanoseconds: Sub-microsecond digits (0-999) not representable by
            ``datetime``.
    """
    offset = value.utcoffset()
    offset_seconds = int(offset.total_seconds()) if offset is not None else 0

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    fraction = value.microsecond * NANOSECONDS_PER_MICROSECOND + nanoseconds
    if fraction:
        text += "." + f"{fraction:09d}".rstrip("0")

    if offset_seconds == 0:
        return text + "Z"
    sign = "-" if offset_seconds < 0 else "+"
    minutes = abs(offset_seconds) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"
