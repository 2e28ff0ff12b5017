"""Root conftest for test suite.

Time is frozen through the converter's injected clock; nothing here
patches the system clock.
"""

from datetime import datetime

import pytest

from callcat.services.scheduling import SchedulingTimeConverter, fixed_clock
from callcat.utils.time import to_epoch_ms


def _utc_ms(iso: str) -> int:
    return to_epoch_ms(datetime.fromisoformat(iso.replace("Z", "+00:00")))


@pytest.fixture
def utc_ms():
    """Convert an ISO 8601 UTC string (``...Z``) to epoch milliseconds."""
    return _utc_ms


@pytest.fixture
def converter_at():
    """Build a converter whose clock is frozen at an ISO 8601 UTC instant."""

    def _build(iso: str, **kwargs) -> SchedulingTimeConverter:
        return SchedulingTimeConverter(clock=fixed_clock(_utc_ms(iso)), **kwargs)

    return _build
