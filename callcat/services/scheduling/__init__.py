"""Timezone-aware call scheduling: picker values <-> epoch-ms instants."""

from callcat.services.scheduling.converter import (
    Clock,
    SchedulingTimeConverter,
    fixed_clock,
    system_clock,
)
from callcat.services.scheduling.errors import (
    InvalidInputFormatError,
    ScheduleValidationError,
    SchedulingError,
    UnknownZoneError,
)
from callcat.services.scheduling.types import (
    MinimumSchedulable,
    TimezoneOption,
    WallClock,
)
from callcat.services.scheduling.validation import (
    is_nonexistent_local,
    validate_scheduled_for,
)
from callcat.services.scheduling.zones import (
    format_instant,
    format_offset,
    resolve_timezone,
    timezone_display_name,
    timezone_options,
)

__all__ = [
    "Clock",
    "SchedulingTimeConverter",
    "fixed_clock",
    "system_clock",
    "InvalidInputFormatError",
    "ScheduleValidationError",
    "SchedulingError",
    "UnknownZoneError",
    "MinimumSchedulable",
    "TimezoneOption",
    "WallClock",
    "is_nonexistent_local",
    "validate_scheduled_for",
    "format_instant",
    "format_offset",
    "resolve_timezone",
    "timezone_display_name",
    "timezone_options",
]
