"""Health check endpoint."""

import structlog
from fastapi import APIRouter, Depends

from callcat import __version__
from callcat.config import Settings, get_settings
from callcat.schemas import HealthResponse
from callcat.services.scheduling import UnknownZoneError
from callcat.services.scheduling.parsing import get_zone

router = APIRouter()
logger = structlog.get_logger(__name__)

# A zone with DST rules; UTC alone would not prove tzdata is installed.
_PROBE_ZONE = "America/New_York"


def check_tzdata() -> bool:
    """Check that the IANA timezone database can be loaded."""
    try:
        get_zone(_PROBE_ZONE)
        return True
    except UnknownZoneError as e:
        logger.error("tzdata_unavailable", zone=_PROBE_ZONE, error=str(e))
        return False


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Service status and timezone database availability."""
    tzdata_ok = check_tzdata()
    return HealthResponse(
        status="ok" if tzdata_ok else "degraded",
        version=__version__,
        default_timezone=settings.default_timezone,
        tzdata_ok=tzdata_ok,
    )
