"""
Scheduling endpoints for the call form.

Gives the dashboard's date/time pickers their bounds and defaults, and
converts between picker values and the epoch-ms ``scheduledFor`` the call
backend stores.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from callcat.config import Settings, get_settings
from callcat.schemas.common import ErrorResponse
from callcat.schemas.scheduling import (
    InstantResponse,
    LocalDateTimeRequest,
    LocalTimeResponse,
    RezoneRequest,
    ScheduleDefaultsResponse,
    TimezoneInfoResponse,
    TimezoneListResponse,
    TimezoneOptionResponse,
    ValidateScheduleRequest,
    ValidateScheduleResponse,
    WallClockResponse,
)
from callcat.services.scheduling import (
    SchedulingError,
    SchedulingTimeConverter,
    format_instant,
    resolve_timezone,
    timezone_display_name,
)
from callcat.services.scheduling.parsing import get_zone
from callcat.utils.time import from_epoch_ms, utc_offset_minutes

router = APIRouter(prefix="/scheduling", tags=["scheduling"])
logger = structlog.get_logger(__name__)

_ERROR_RESPONSES = {
    422: {
        "model": ErrorResponse,
        "description": "Malformed date/time, unknown timezone, or rejected schedule",
        "content": {
            "application/json": {
                "example": {
                    "detail": {
                        "error": "Unknown timezone: 'Mars/Olympus'",
                        "code": "UNKNOWN_ZONE",
                        "details": {"zone": "Mars/Olympus"},
                    }
                }
            }
        },
    },
}


def get_converter(settings: Settings = Depends(get_settings)) -> SchedulingTimeConverter:
    """Converter configured from settings, reading the system clock."""
    return SchedulingTimeConverter(
        min_buffer_minutes=settings.schedule_min_buffer_minutes,
        default_lead_minutes=settings.schedule_default_lead_minutes,
        default_floor_minutes=settings.schedule_default_floor_minutes,
        max_advance_days=settings.schedule_max_advance_days,
    )


def _unprocessable(e: SchedulingError) -> HTTPException:
    logger.info("scheduling_input_rejected", code=e.code, error=e.message)
    return HTTPException(
        status_code=422,
        detail={"error": e.message, "code": e.code, "details": e.details},
    )


@router.get("/timezones", response_model=TimezoneListResponse)
async def list_timezones(
    converter: SchedulingTimeConverter = Depends(get_converter),
) -> TimezoneListResponse:
    """Timezone selector options with offsets as of now."""
    as_of = converter.now()
    options = converter.timezone_options()
    return TimezoneListResponse(
        timezones=[TimezoneOptionResponse.from_option(o) for o in options],
        as_of_ms=as_of,
    )


@router.get(
    "/timezones/{zone:path}",
    response_model=TimezoneInfoResponse,
    responses=_ERROR_RESPONSES,
)
async def get_timezone(
    zone: str,
    converter: SchedulingTimeConverter = Depends(get_converter),
) -> TimezoneInfoResponse:
    """Display name and current offset for one zone."""
    now = converter.now()
    try:
        return TimezoneInfoResponse(
            timezone=zone,
            display_name=timezone_display_name(zone, now),
            offset_minutes=utc_offset_minutes(get_zone(zone), now),
        )
    except SchedulingError as e:
        raise _unprocessable(e)


@router.get(
    "/defaults",
    response_model=ScheduleDefaultsResponse,
    summary="Picker defaults and bounds",
)
async def get_defaults(
    timezone: Optional[str] = Query(
        None, description="Preferred zone; falls back to the configured default"
    ),
    converter: SchedulingTimeConverter = Depends(get_converter),
    settings: Settings = Depends(get_settings),
) -> ScheduleDefaultsResponse:
    """
    Initial values for a new call.

    An unknown or missing ``timezone`` is not an error here: the form falls
    back to the configured default zone, the same way it does when the user
    has no saved preference.
    """
    zone = resolve_timezone(timezone, settings.default_timezone)
    default = converter.default_schedulable(zone)
    minimum = converter.minimum_schedulable(zone)
    return ScheduleDefaultsResponse(
        timezone=zone,
        display_name=timezone_display_name(zone, converter.now()),
        default=WallClockResponse.from_wall_clock(default),
        min_date=minimum.min_date,
        min_time=minimum.min_time,
    )


@router.post("/to-instant", response_model=InstantResponse, responses=_ERROR_RESPONSES)
async def to_instant(
    request: LocalDateTimeRequest,
    converter: SchedulingTimeConverter = Depends(get_converter),
) -> InstantResponse:
    """Convert picker values to an epoch-ms instant."""
    try:
        instant = converter.local_to_instant(request.date, request.time, request.timezone)
    except SchedulingError as e:
        raise _unprocessable(e)

    return InstantResponse(
        instant_ms=instant,
        utc=from_epoch_ms(instant).isoformat().replace("+00:00", "Z"),
        is_future=instant > converter.now(),
    )


@router.get("/to-local", response_model=LocalTimeResponse, responses=_ERROR_RESPONSES)
async def to_local(
    instant_ms: int = Query(..., description="Epoch milliseconds (UTC)"),
    timezone: str = Query(..., description="IANA timezone identifier"),
    converter: SchedulingTimeConverter = Depends(get_converter),
) -> LocalTimeResponse:
    """Render a stored instant as picker values, e.g. to reschedule a call."""
    try:
        wall = converter.instant_to_local(instant_ms, timezone)
    except SchedulingError as e:
        raise _unprocessable(e)
    return LocalTimeResponse.for_instant(wall, instant_ms)


@router.post("/rezone", response_model=WallClockResponse, responses=_ERROR_RESPONSES)
async def rezone(
    request: RezoneRequest,
    converter: SchedulingTimeConverter = Depends(get_converter),
) -> WallClockResponse:
    """Adjust picker values after the user picks a different zone."""
    try:
        wall = converter.rezone(
            request.date, request.time, request.from_timezone, request.to_timezone
        )
    except SchedulingError as e:
        raise _unprocessable(e)
    return WallClockResponse.from_wall_clock(wall)


@router.post(
    "/validate",
    response_model=ValidateScheduleResponse,
    responses=_ERROR_RESPONSES,
)
async def validate_schedule(
    request: ValidateScheduleRequest,
    converter: SchedulingTimeConverter = Depends(get_converter),
) -> ValidateScheduleResponse:
    """Check picker values on submit and return the ``scheduledFor`` instant."""
    try:
        instant = converter.check_schedulable(
            request.date,
            request.time,
            request.timezone,
            max_advance_days=request.max_advance_days,
        )
    except SchedulingError as e:
        raise _unprocessable(e)

    logger.debug(
        "schedule_validated",
        timezone=request.timezone,
        scheduled_for=instant,
    )
    return ValidateScheduleResponse(
        scheduled_for=instant,
        display=format_instant(instant, request.timezone),
    )
