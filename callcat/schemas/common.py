"""Common schemas: health checks, error responses."""

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health endpoint."""

    status: str = Field(..., description="Overall service status")
    version: str = Field(..., description="Service version")
    default_timezone: str = Field(..., description="Configured fallback timezone")
    tzdata_ok: bool = Field(..., description="True if the timezone database loads")


class ErrorDetail(BaseModel):
    """Structured error detail."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Stable error code")
    details: Optional[dict] = Field(None, description="Offending values")


class ErrorResponse(BaseModel):
    """Error response body."""

    detail: ErrorDetail
