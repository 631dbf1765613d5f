"""Timezone-aware timestamp helpers for display."""

from __future__ import annotations

import math
from datetime import datetime, timezone

INVALID_TIMESTAMP = "--:--:--.---"


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the system local timezone.

    Treats naive datetimes as UTC (all producer timestamps are UTC).
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone()


def from_unix_nanos(timestamp_ns: int | float) -> datetime | None:
    """Return an aware UTC datetime, or None for missing or invalid values."""
    try:
        seconds = float(timestamp_ns) / 1_000_000_000
    except (TypeError, ValueError):
        return None
    if math.isnan(seconds) or seconds <= 0:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def format_timestamp(timestamp_ns: int | float) -> str:
    """Render a producer timestamp as local ``HH:MM:SS.mmm``.

    Never fails: anything that is not a positive, representable time
    renders as :data:`INVALID_TIMESTAMP`.
    """
    dt = from_unix_nanos(timestamp_ns)
    if dt is None:
        return INVALID_TIMESTAMP
    local = to_local(dt)
    return f"{local:%H:%M:%S}.{local.microsecond // 1000:03d}"
