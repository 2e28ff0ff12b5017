"""Timezone selector options and display helpers.

The zone list is a constant. Labels and offsets depend on the date (DST),
so they are recomputed for the instant passed in and never cached.
"""

from typing import Optional

import structlog

from callcat.services.scheduling.errors import UnknownZoneError
from callcat.services.scheduling.parsing import get_zone
from callcat.services.scheduling.types import TimezoneOption
from callcat.utils.time import from_epoch_ms, utc_offset_minutes

logger = structlog.get_logger(__name__)

FALLBACK_TIMEZONE = "UTC"

# Curated selector entries: zone id -> human name
CURATED_ZONES: dict[str, str] = {
    "UTC": "Coordinated Universal Time",
    "Pacific/Honolulu": "Hawaii Time",
    "America/Anchorage": "Alaska Time",
    "America/Los_Angeles": "Pacific Time",
    "America/Phoenix": "Arizona Time",
    "America/Denver": "Mountain Time",
    "America/Chicago": "Central Time",
    "America/New_York": "Eastern Time",
    "America/Sao_Paulo": "Brasilia Time",
    "Europe/London": "London Time",
    "Europe/Paris": "Central European Time",
    "Europe/Berlin": "Central European Time",
    "Asia/Dubai": "Gulf Standard Time",
    "Asia/Kolkata": "India Standard Time",
    "Asia/Singapore": "Singapore Time",
    "Asia/Shanghai": "China Standard Time",
    "Asia/Tokyo": "Japan Standard Time",
    "Australia/Sydney": "Australian Eastern Time",
    "Pacific/Auckland": "New Zealand Time",
}

# English regardless of the process locale
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_offset(offset_minutes: int) -> str:
    """Format a UTC offset as ``GMT+HH:MM``.

    >>> format_offset(-240)
    'GMT-04:00'
    >>> format_offset(330)
    'GMT+05:30'
    """
    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


def zone_display_name(zone: str) -> str:
    """Human name for a zone: curated name, else the city part of the id."""
    if zone in CURATED_ZONES:
        return CURATED_ZONES[zone]
    return zone.rsplit("/", 1)[-1].replace("_", " ")


def timezone_options(now_ms: int) -> list[TimezoneOption]:
    """Selector entries for the curated zones, as of *now_ms*.

    Sorted by offset (west to east), then label; the zone id breaks any
    remaining tie so the order is stable.
    """
    options = []
    for zone in CURATED_ZONES:
        offset = utc_offset_minutes(get_zone(zone), now_ms)
        options.append(
            TimezoneOption(
                zone=zone,
                label=f"{zone_display_name(zone)} ({format_offset(offset)})",
                offset_minutes=offset,
            )
        )
    options.sort(key=lambda o: (o.offset_minutes, o.label, o.zone))
    return options


def timezone_display_name(zone: str, now_ms: int) -> str:
    """Abbreviation plus offset for the hint under the selector, e.g. ``EDT (GMT-04:00)``."""
    tz = get_zone(zone)
    local = from_epoch_ms(now_ms).astimezone(tz)
    short_name = local.tzname() or zone
    return f"{short_name} ({format_offset(utc_offset_minutes(tz, now_ms))})"


def format_instant(instant_ms: int, zone: str) -> str:
    """Readable schedule time for call cards, e.g. ``Jul 1, 2024, 06:00 PM EDT``."""
    local = from_epoch_ms(instant_ms).astimezone(get_zone(zone))
    hour_12 = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{_MONTH_ABBR[local.month - 1]} {local.day}, {local.year}, "
        f"{hour_12:02d}:{local.minute:02d} {meridiem} {local.tzname() or zone}"
    )


def resolve_timezone(
    candidate: Optional[str], fallback: str = FALLBACK_TIMEZONE
) -> str:
    """Pick the zone to schedule in.

    Uses the user's saved or browser-reported *candidate* when the tz
    database knows it, else *fallback*, else UTC.
    """
    for zone in (candidate, fallback):
        if not zone:
            continue
        try:
            get_zone(zone)
            return zone
        except UnknownZoneError:
            logger.warning("timezone_candidate_rejected", zone=zone)
    return FALLBACK_TIMEZONE
