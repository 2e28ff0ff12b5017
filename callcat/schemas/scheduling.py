"""Request/response schemas for the scheduling endpoints."""

from typing import Optional

from pydantic import BaseModel, Field

from callcat.services.scheduling import TimezoneOption, WallClock, format_instant


class LocalDateTimeRequest(BaseModel):
    """Picker values as the call form holds them."""

    date: str = Field(..., description="Date picker value (YYYY-MM-DD)", examples=["2024-07-01"])
    time: str = Field(..., description="Time picker value (HH:MM)", examples=["18:00"])
    timezone: str = Field(
        ..., description="IANA timezone identifier", examples=["America/New_York"]
    )

    model_config = {"extra": "forbid"}


class ValidateScheduleRequest(LocalDateTimeRequest):
    """Picker values submitted with a new call."""

    max_advance_days: Optional[int] = Field(
        None, ge=1, description="Override for the scheduling horizon in days"
    )


class RezoneRequest(BaseModel):
    """Picker values plus the zone the user switched to."""

    date: str = Field(..., description="Date picker value (YYYY-MM-DD)")
    time: str = Field(..., description="Time picker value (HH:MM)")
    from_timezone: str = Field(..., description="Zone the values were entered in")
    to_timezone: str = Field(..., description="Newly selected zone")

    model_config = {"extra": "forbid"}


class InstantResponse(BaseModel):
    """An absolute schedule instant."""

    instant_ms: int = Field(..., description="Epoch milliseconds (UTC)")
    utc: str = Field(..., description="ISO 8601 UTC rendering")
    is_future: bool = Field(..., description="True if later than now")


class WallClockResponse(BaseModel):
    """Picker values for one zone."""

    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM")
    timezone: str = Field(..., description="IANA timezone identifier")

    @classmethod
    def from_wall_clock(cls, wall: WallClock) -> "WallClockResponse":
        return cls(date=wall.date_value, time=wall.time_value, timezone=wall.zone)


class LocalTimeResponse(WallClockResponse):
    """Rendering of an instant for display and editing."""

    display: str = Field(..., description="Human-readable date and time")

    @classmethod
    def for_instant(cls, wall: WallClock, instant_ms: int) -> "LocalTimeResponse":
        return cls(
            date=wall.date_value,
            time=wall.time_value,
            timezone=wall.zone,
            display=format_instant(instant_ms, wall.zone),
        )


class ScheduleDefaultsResponse(BaseModel):
    """Initial values and bounds for the date/time pickers."""

    timezone: str = Field(..., description="Zone the values are expressed in")
    display_name: str = Field(..., description="Abbreviation and offset, e.g. EDT (GMT-04:00)")
    default: WallClockResponse = Field(..., description="Pre-filled picker values")
    min_date: str = Field(..., description="Earliest selectable date")
    min_time: Optional[str] = Field(
        None, description="Earliest selectable time; only set when min_date is today"
    )


class TimezoneOptionResponse(BaseModel):
    """One entry of the timezone selector."""

    value: str = Field(..., description="IANA timezone identifier")
    label: str = Field(..., description="Display label including GMT offset")
    offset_minutes: int = Field(..., description="Local minus UTC, in minutes")

    @classmethod
    def from_option(cls, option: TimezoneOption) -> "TimezoneOptionResponse":
        return cls(
            value=option.zone, label=option.label, offset_minutes=option.offset_minutes
        )


class TimezoneListResponse(BaseModel):
    """Timezone selector contents."""

    timezones: list[TimezoneOptionResponse]
    as_of_ms: int = Field(..., description="Instant the offsets were computed for")


class TimezoneInfoResponse(BaseModel):
    """Display details for a single zone."""

    timezone: str
    display_name: str
    offset_minutes: int


class ValidateScheduleResponse(BaseModel):
    """Accepted schedule."""

    scheduled_for: int = Field(..., description="Epoch milliseconds to send as scheduledFor")
    display: str = Field(..., description="Human-readable confirmation text")
