"""Errors raised by the scheduling converter and validators."""

from typing import Optional


class SchedulingError(ValueError):
    """Base exception for scheduling input problems.

    Carries a stable ``code`` so the HTTP layer can surface a field-level
    message without string matching.
    """

    code = "SCHEDULING_ERROR"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInputFormatError(SchedulingError):
    """Date or time string does not parse into calendar fields."""

    code = "INVALID_INPUT_FORMAT"


class UnknownZoneError(SchedulingError):
    """Zone identifier is not present in the timezone database."""

    code = "UNKNOWN_ZONE"

    def __init__(self, zone: str):
        super().__init__(f"Unknown timezone: {zone!r}", {"zone": zone})
        self.zone = zone


class ScheduleValidationError(SchedulingError):
    """A well-formed schedule time that cannot be accepted for a call."""

    def __init__(self, message: str, code: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.code = code


# Validation codes
SCHEDULED_IN_PAST = "SCHEDULED_IN_PAST"
SCHEDULED_TOO_FAR = "SCHEDULED_TOO_FAR"
NONEXISTENT_LOCAL_TIME = "NONEXISTENT_LOCAL_TIME"
