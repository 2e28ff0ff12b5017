"""
Epoch-millisecond helpers for schedule timestamps.

Scheduled calls are stored and exchanged as Unix epoch milliseconds (UTC).
This module provides the single conversion point between those integers
and tz-aware datetimes.
"""

from datetime import datetime, timedelta, timezone, tzinfo

UTC = timezone.utc
MS_PER_MINUTE = 60_000

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def ensure_utc(ts: datetime) -> datetime:
    """Validate that a datetime is tz-aware and convert to UTC.

    Args:
        ts: A timezone-aware datetime (any timezone).

    Returns:
        The same instant as a UTC-aware datetime.

    Raises:
        ValueError: If ts is naive (no tzinfo).
    """
    if ts.tzinfo is None:
        raise ValueError(
            "ensure_utc requires a tz-aware datetime, got naive. "
            "Hint: use datetime(..., tzinfo=timezone.utc) for UTC timestamps."
        )
    return ts.astimezone(UTC)


def to_epoch_ms(ts: datetime) -> int:
    """Convert a tz-aware datetime to epoch milliseconds.

    Integer arithmetic on the timedelta avoids float rounding at ms scale.
    """
    delta = ensure_utc(ts) - _EPOCH
    return delta // timedelta(milliseconds=1)


def from_epoch_ms(instant_ms: int) -> datetime:
    """Convert epoch milliseconds to a UTC-aware datetime."""
    return _EPOCH + timedelta(milliseconds=instant_ms)


def utc_offset_minutes(zone: tzinfo, instant_ms: int) -> int:
    """Offset of *zone* from UTC at *instant_ms*, in minutes (local minus UTC).

    >>> from zoneinfo import ZoneInfo
    >>> utc_offset_minutes(ZoneInfo("Asia/Kolkata"), 0)
    330
    """
    offset = from_epoch_ms(instant_ms).astimezone(zone).utcoffset()
    return offset // timedelta(minutes=1)
