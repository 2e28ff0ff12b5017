"""
Scheduling time converter.

Maps between what the call form shows (a date picker, a time picker and a
zone selector) and the epoch-millisecond instant stored as a call's
``scheduledFor``. Also derives the picker guardrails (minimum and default
values) so a call cannot be scheduled in the past.

Local-to-instant uses render-and-correct rather than asking the tz database
for the inverse mapping:

1. Read the requested wall clock as if it were UTC (first guess).
2. Render the guess in the target zone.
3. Subtract the rendered-minus-requested delta from the guess.

Offsets are piecewise constant, so one pass is exact unless a DST
transition lies between the guess and the answer; a second pass covers
that case. Inside a spring-forward gap the passes never settle and the
last guess is returned as-is (logged, not raised). Inside a fall-back
overlap the first occurrence that a pass lands on is returned. Callers that
must reject gap times use ``is_nonexistent_local`` or ``check_schedulable``.
"""

import time
from datetime import datetime, timedelta
from typing import Callable, Optional

import structlog

from callcat.services.scheduling.errors import (
    NONEXISTENT_LOCAL_TIME,
    InvalidInputFormatError,
    ScheduleValidationError,
)
from callcat.services.scheduling.parsing import (
    get_zone,
    parse_date_value,
    parse_time_value,
)
from callcat.services.scheduling.types import (
    MinimumSchedulable,
    TimezoneOption,
    WallClock,
)
from callcat.services.scheduling.validation import (
    DEFAULT_MAX_ADVANCE_DAYS,
    is_nonexistent_local,
    validate_scheduled_for,
)
from callcat.services.scheduling.zones import timezone_options
from callcat.utils.time import MS_PER_MINUTE, UTC, from_epoch_ms, to_epoch_ms

logger = structlog.get_logger(__name__)

Clock = Callable[[], int]

DEFAULT_MIN_BUFFER_MINUTES = 2
DEFAULT_LEAD_MINUTES = 60
DEFAULT_FLOOR_MINUTES = 10

_MAX_CORRECTION_PASSES = 2
_ONE_MS = timedelta(milliseconds=1)


def system_clock() -> int:
    """Current wall-clock instant in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def fixed_clock(instant_ms: int) -> Clock:
    """Clock frozen at *instant_ms*."""
    return lambda: instant_ms


def _render(instant_ms: int, tz) -> datetime:
    """Naive wall clock that *tz* shows at *instant_ms*."""
    try:
        return from_epoch_ms(instant_ms).astimezone(tz).replace(tzinfo=None)
    except (OverflowError, TypeError) as e:
        raise InvalidInputFormatError(
            f"Invalid instant {instant_ms!r}: {e}", {"instant_ms": instant_ms}
        ) from e


class SchedulingTimeConverter:
    """Converts between picker values and epoch-ms instants.

    The clock is read at most once per public call, so a single operation
    is internally consistent even if it straddles a clock tick.
    """

    def __init__(
        self,
        clock: Clock = system_clock,
        min_buffer_minutes: int = DEFAULT_MIN_BUFFER_MINUTES,
        default_lead_minutes: int = DEFAULT_LEAD_MINUTES,
        default_floor_minutes: int = DEFAULT_FLOOR_MINUTES,
        max_advance_days: int = DEFAULT_MAX_ADVANCE_DAYS,
    ):
        self._clock = clock
        self.min_buffer_minutes = min_buffer_minutes
        self.default_lead_minutes = default_lead_minutes
        self.default_floor_minutes = default_floor_minutes
        self.max_advance_days = max_advance_days

    def now(self) -> int:
        return self._clock()

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def local_to_instant(self, date_value: str, time_value: str, zone: str) -> int:
        """Instant at which *zone* shows *date_value* *time_value*.

        Raises:
            InvalidInputFormatError: date/time not YYYY-MM-DD / HH:MM.
            UnknownZoneError: zone not in the tz database.
        """
        requested = datetime.combine(
            parse_date_value(date_value), parse_time_value(time_value)
        )
        tz = get_zone(zone)

        guess = to_epoch_ms(requested.replace(tzinfo=UTC))
        for _ in range(_MAX_CORRECTION_PASSES):
            delta = _render(guess, tz) - requested
            if not delta:
                return guess
            guess -= delta // _ONE_MS

        if _render(guess, tz) != requested:
            logger.warning(
                "local_time_unresolved",
                date=date_value,
                time=time_value,
                zone=zone,
                instant_ms=guess,
            )
        return guess

    def instant_to_local(self, instant_ms: int, zone: str) -> WallClock:
        """Render *instant_ms* in *zone* at minute resolution."""
        if isinstance(instant_ms, bool) or not isinstance(instant_ms, int):
            raise InvalidInputFormatError(
                f"Invalid instant {instant_ms!r}: expected integer milliseconds",
                {"instant_ms": instant_ms},
            )
        rendered = _render(instant_ms, get_zone(zone))
        return WallClock(
            date=rendered.date(),
            time=rendered.time().replace(second=0, microsecond=0),
            zone=zone,
        )

    def is_future_local(self, date_value: str, time_value: str, zone: str) -> bool:
        return self.local_to_instant(date_value, time_value, zone) > self.now()

    # -------------------------------------------------------------------------
    # Picker guardrails
    # -------------------------------------------------------------------------

    def minimum_schedulable(self, zone: str) -> MinimumSchedulable:
        """Earliest selectable date (and time, when that date is today)."""
        now = self.now()
        earliest = self.instant_to_local(
            now + self.min_buffer_minutes * MS_PER_MINUTE, zone
        )
        today = self.instant_to_local(now, zone)
        return MinimumSchedulable(
            min_date=earliest.date_value,
            min_time=earliest.time_value if earliest.date == today.date else None,
        )

    def default_schedulable(self, zone: str) -> WallClock:
        """Pre-filled picker values: now plus the default lead time."""
        return self._default_at(self.now(), zone)

    def _default_at(self, now: int, zone: str) -> WallClock:
        default_at = now + self.default_lead_minutes * MS_PER_MINUTE
        floor_at = now + self.default_floor_minutes * MS_PER_MINUTE
        if default_at < floor_at:
            # Clock-skew guard; unreachable while lead >= floor.
            logger.warning(
                "default_schedule_below_floor",
                zone=zone,
                default_at=default_at,
                floor_at=floor_at,
            )
            default_at = now + self.default_lead_minutes * MS_PER_MINUTE
        return self.instant_to_local(default_at, zone)

    def timezone_options(self) -> list[TimezoneOption]:
        return timezone_options(self.now())

    # -------------------------------------------------------------------------
    # Form helpers
    # -------------------------------------------------------------------------

    def rezone(
        self, date_value: str, time_value: str, from_zone: str, to_zone: str
    ) -> WallClock:
        """Carry the picker values over when the user switches zones.

        The same instant is re-rendered in *to_zone*. If it is no longer in
        the future, *to_zone*'s default is returned instead.
        """
        now = self.now()
        instant = self.local_to_instant(date_value, time_value, from_zone)
        if instant > now:
            return self.instant_to_local(instant, to_zone)

        logger.debug(
            "rezone_reset_to_default",
            from_zone=from_zone,
            to_zone=to_zone,
            instant_ms=instant,
        )
        return self._default_at(now, to_zone)

    def check_schedulable(
        self,
        date_value: str,
        time_value: str,
        zone: str,
        max_advance_days: Optional[int] = None,
    ) -> int:
        """Validate picker values on submit and return ``scheduledFor``.

        Raises:
            ScheduleValidationError: gap time, past time, or too far ahead.
        """
        if is_nonexistent_local(date_value, time_value, zone):
            raise ScheduleValidationError(
                f"{date_value} {time_value} does not exist in {zone} "
                "(skipped by a daylight saving change)",
                NONEXISTENT_LOCAL_TIME,
                {"date": date_value, "time": time_value, "zone": zone},
            )
        instant = self.local_to_instant(date_value, time_value, zone)
        validate_scheduled_for(
            instant,
            now_ms=self.now(),
            max_advance_days=(
                self.max_advance_days if max_advance_days is None else max_advance_days
            ),
        )
        return instant
