"""Submit-time checks on a requested call schedule."""

from datetime import datetime

from callcat.services.scheduling.errors import (
    SCHEDULED_IN_PAST,
    SCHEDULED_TOO_FAR,
    InvalidInputFormatError,
    ScheduleValidationError,
)
from callcat.services.scheduling.parsing import (
    get_zone,
    parse_date_value,
    parse_time_value,
)
from callcat.utils.time import UTC, MS_PER_MINUTE

DEFAULT_MAX_ADVANCE_DAYS = 30

_MS_PER_DAY = 24 * 60 * MS_PER_MINUTE


def is_nonexistent_local(date_value: str, time_value: str, zone: str) -> bool:
    """True if the wall clock is skipped in *zone* (spring-forward gap).

    Asks the tz database directly: a wall clock that exists survives a trip
    through UTC unchanged; a skipped one comes back shifted by the gap.
    """
    naive = datetime.combine(parse_date_value(date_value), parse_time_value(time_value))
    tz = get_zone(zone)
    try:
        round_trip = naive.replace(tzinfo=tz).astimezone(UTC).astimezone(tz)
    except OverflowError as e:
        raise InvalidInputFormatError(
            f"{date_value} {time_value} is out of range in {zone}",
            {"date": date_value, "time": time_value, "zone": zone},
        ) from e
    return round_trip.replace(tzinfo=None) != naive


def validate_scheduled_for(
    instant_ms: int,
    now_ms: int,
    max_advance_days: int = DEFAULT_MAX_ADVANCE_DAYS,
) -> None:
    """Reject schedule instants that are not in the future or too far ahead.

    Raises:
        ScheduleValidationError: with code SCHEDULED_IN_PAST or
            SCHEDULED_TOO_FAR.
    """
    if instant_ms <= now_ms:
        raise ScheduleValidationError(
            "Scheduled time must be in the future",
            SCHEDULED_IN_PAST,
            {"instant_ms": instant_ms, "now_ms": now_ms},
        )

    latest = now_ms + max_advance_days * _MS_PER_DAY
    if instant_ms > latest:
        raise ScheduleValidationError(
            f"Cannot schedule calls more than {max_advance_days} days in advance",
            SCHEDULED_TOO_FAR,
            {"instant_ms": instant_ms, "latest_ms": latest},
        )
