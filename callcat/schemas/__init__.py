"""Pydantic models for request/response validation."""

from callcat.schemas.common import ErrorDetail, ErrorResponse, HealthResponse
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

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "InstantResponse",
    "LocalDateTimeRequest",
    "LocalTimeResponse",
    "RezoneRequest",
    "ScheduleDefaultsResponse",
    "TimezoneInfoResponse",
    "TimezoneListResponse",
    "TimezoneOptionResponse",
    "ValidateScheduleRequest",
    "ValidateScheduleResponse",
    "WallClockResponse",
]
