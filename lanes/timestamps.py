"""Timestamp coercion for START_TIME/END_TIME cell values.

Values arrive from the query layer as numbers, ISO-8601 strings, or already
parsed date objects. All of them are normalized to integer epoch
milliseconds; anything else is rejected rather than turned into an invalid
timestamp.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, time, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def to_epoch_millis(value: object) -> int:
    """Coerce a cell value to epoch milliseconds.

    Numbers are taken as epoch milliseconds and truncated toward zero.
    Naive datetimes and ISO strings without an offset are read as UTC.

    Args:
        value: Raw cell value.

    Returns:
        Milliseconds since 1970-01-01T00:00:00Z.

    Raises:
        ValueError: When the value cannot be interpreted as a point in time.
    """

    if value is None or isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}.")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Not a finite timestamp: {value!r}.")
        return int(value)
    if isinstance(value, datetime):
        return _datetime_millis(value)
    if isinstance(value, date):
        return _datetime_millis(datetime.combine(value, time.min))
    if isinstance(value, str):
        return _datetime_millis(_parse_iso(value))
    raise ValueError(f"Unsupported timestamp type: {type(value).__name__}.")


def _parse_iso(raw: str) -> datetime:
    """Parse an ISO-8601 date or datetime string."""

    text = raw.strip()
    if not text:
        raise ValueError("Empty timestamp string.")
    if text[-1] in "zZ":
        text = f"{text[:-1]}+00:00"
    return datetime.fromisoformat(text)


def _datetime_millis(value: datetime) -> int:
    """Return exact epoch milliseconds for a datetime, assuming UTC when naive."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - EPOCH) // _ONE_MS
