"""Strict parsing of picker values and zone identifiers.

Form inputs arrive as ``YYYY-MM-DD`` (date picker) and ``HH:MM`` (time
picker). Anything else fails fast; nothing is defaulted.
"""

import re
from datetime import date, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from callcat.services.scheduling.errors import InvalidInputFormatError, UnknownZoneError

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


def parse_date_value(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date."""
    match = _DATE_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidInputFormatError(
            f"Invalid date {value!r}: expected YYYY-MM-DD", {"date": value}
        )
    year, month, day = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidInputFormatError(
            f"Invalid date {value!r}: {e}", {"date": value}
        ) from e


def parse_time_value(value: str) -> time:
    """Parse an ``HH:MM`` string into a clock time (seconds are always 0)."""
    match = _TIME_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidInputFormatError(
            f"Invalid time {value!r}: expected HH:MM", {"time": value}
        )
    hour, minute = (int(g) for g in match.groups())
    try:
        return time(hour, minute)
    except ValueError as e:
        raise InvalidInputFormatError(
            f"Invalid time {value!r}: {e}", {"time": value}
        ) from e


def get_zone(name: str) -> ZoneInfo:
    """Resolve an IANA identifier, raising UnknownZoneError if it is not known.

    ZoneInfo caches instances itself, so repeated lookups are cheap.
    """
    if not isinstance(name, str) or not name:
        raise UnknownZoneError(str(name))
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise UnknownZoneError(name) from e
