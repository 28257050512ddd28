"""Date utilities."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

MAX_HISTORY_DAYS = 30
DEFAULT_HISTORY_DAYS = 7


def to_unix(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def from_unix(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def format_timestamp(timestamp: int) -> str:
    """Render a unix timestamp as e.g. ``Mar 04, 03:00 PM`` (UTC)."""
    return from_unix(timestamp).strftime("%b %d, %I:%M %p")


def default_history_range(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    end = now or datetime.now(timezone.utc)
    return end - timedelta(days=DEFAULT_HISTORY_DAYS), end


def historical_window(
    start: datetime,
    end: datetime,
    max_days: int = MAX_HISTORY_DAYS,
) -> Tuple[int, int]:
    """Validate a history request and return it as unix timestamps.

    The span limit counts calendar days, so a whole end day is allowed.
    """
    start_unix, end_unix = to_unix(start), to_unix(end)
    if start_unix > end_unix:
        raise ValueError("Start date must be before end date")
    if (from_unix(end_unix).date() - from_unix(start_unix).date()).days > max_days:
        raise ValueError(f"Historical data retrieval is limited to {max_days} days")
    return start_unix, end_unix
