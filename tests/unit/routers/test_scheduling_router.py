"""Unit tests for scheduling API endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from callcat.config import Settings, get_settings
from callcat.routers.scheduling import get_converter, router
from callcat.services.scheduling import SchedulingTimeConverter, fixed_clock
from callcat.services.scheduling.zones import CURATED_ZONES

NOW = 1_717_243_200_000  # 2024-06-01T12:00:00Z


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def app():
    """Create test FastAPI app with a frozen clock."""
    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_converter] = lambda: SchedulingTimeConverter(
        clock=fixed_clock(NOW)
    )
    app.dependency_overrides[get_settings] = lambda: Settings(
        _env_file=None, default_timezone="UTC"
    )
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


def _error_code(response) -> str:
    return response.json()["detail"]["code"]


# =============================================================================
# Timezones
# =============================================================================


class TestTimezones:
    """Tests for GET /scheduling/timezones."""

    def test_lists_curated_zones(self, client):
        response = client.get("/scheduling/timezones")

        assert response.status_code == 200
        data = response.json()
        assert data["as_of_ms"] == NOW
        assert {tz["value"] for tz in data["timezones"]} == set(CURATED_ZONES)

    def test_sorted_by_offset(self, client):
        offsets = [
            tz["offset_minutes"]
            for tz in client.get("/scheduling/timezones").json()["timezones"]
        ]
        assert offsets == sorted(offsets)

    def test_single_zone(self, client):
        response = client.get("/scheduling/timezones/America/New_York")

        assert response.status_code == 200
        assert response.json() == {
            "timezone": "America/New_York",
            "display_name": "EDT (GMT-04:00)",
            "offset_minutes": -240,
        }

    def test_unknown_zone(self, client):
        response = client.get("/scheduling/timezones/Mars/Olympus")

        assert response.status_code == 422
        assert _error_code(response) == "UNKNOWN_ZONE"


# =============================================================================
# Defaults
# =============================================================================


class TestDefaults:
    """Tests for GET /scheduling/defaults."""

    def test_defaults_in_zone(self, client):
        response = client.get(
            "/scheduling/defaults", params={"timezone": "America/New_York"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "timezone": "America/New_York",
            "display_name": "EDT (GMT-04:00)",
            "default": {
                "date": "2024-06-01",
                "time": "09:00",
                "timezone": "America/New_York",
            },
            "min_date": "2024-06-01",
            "min_time": "08:02",
        }

    def test_unknown_zone_falls_back(self, client):
        response = client.get("/scheduling/defaults", params={"timezone": "Mars/Olympus"})

        assert response.status_code == 200
        data = response.json()
        assert data["timezone"] == "UTC"
        assert data["default"]["time"] == "13:00"

    def test_missing_zone_uses_configured_default(self, app, client):
        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, default_timezone="Asia/Tokyo"
        )
        data = client.get("/scheduling/defaults").json()

        assert data["timezone"] == "Asia/Tokyo"
        assert data["default"] == {
            "date": "2024-06-01",
            "time": "22:00",
            "timezone": "Asia/Tokyo",
        }
        assert data["min_time"] == "21:02"


# =============================================================================
# Conversion
# =============================================================================


class TestToInstant:
    """Tests for POST /scheduling/to-instant."""

    def test_converts(self, client):
        response = client.post(
            "/scheduling/to-instant",
            json={"date": "2024-07-01", "time": "18:00", "timezone": "America/New_York"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "instant_ms": 1719871200000,
            "utc": "2024-07-01T22:00:00Z",
            "is_future": True,
        }

    def test_past_is_flagged(self, client):
        response = client.post(
            "/scheduling/to-instant",
            json={"date": "2024-06-01", "time": "07:30", "timezone": "America/New_York"},
        )

        assert response.status_code == 200
        assert response.json()["is_future"] is False

    def test_bad_date(self, client):
        response = client.post(
            "/scheduling/to-instant",
            json={"date": "07/01/2024", "time": "18:00", "timezone": "UTC"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "INVALID_INPUT_FORMAT"
        assert response.json()["detail"]["details"] == {"date": "07/01/2024"}

    def test_unknown_zone(self, client):
        response = client.post(
            "/scheduling/to-instant",
            json={"date": "2024-07-01", "time": "18:00", "timezone": "Mars/Olympus"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "UNKNOWN_ZONE"

    def test_missing_field(self, client):
        response = client.post(
            "/scheduling/to-instant", json={"date": "2024-07-01", "time": "18:00"}
        )

        assert response.status_code == 422

    def test_rejects_extra_fields(self, client):
        response = client.post(
            "/scheduling/to-instant",
            json={
                "date": "2024-07-01",
                "time": "18:00",
                "timezone": "UTC",
                "seconds": "30",
            },
        )

        assert response.status_code == 422


class TestToLocal:
    """Tests for GET /scheduling/to-local."""

    def test_renders(self, client):
        response = client.get(
            "/scheduling/to-local",
            params={"instant_ms": 1719871200000, "timezone": "Asia/Tokyo"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "date": "2024-07-02",
            "time": "07:00",
            "timezone": "Asia/Tokyo",
            "display": "Jul 2, 2024, 07:00 AM JST",
        }

    def test_out_of_range_instant(self, client):
        response = client.get(
            "/scheduling/to-local",
            params={"instant_ms": 10**15, "timezone": "UTC"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "INVALID_INPUT_FORMAT"


class TestRezone:
    """Tests for POST /scheduling/rezone."""

    def test_keeps_future_instant(self, client):
        response = client.post(
            "/scheduling/rezone",
            json={
                "date": "2024-06-01",
                "time": "18:00",
                "from_timezone": "America/New_York",
                "to_timezone": "Asia/Tokyo",
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "date": "2024-06-02",
            "time": "07:00",
            "timezone": "Asia/Tokyo",
        }

    def test_resets_past_instant(self, client):
        response = client.post(
            "/scheduling/rezone",
            json={
                "date": "2024-06-01",
                "time": "07:00",
                "from_timezone": "America/New_York",
                "to_timezone": "Europe/London",
            },
        )

        assert response.status_code == 200
        assert response.json()["time"] == "14:00"


# =============================================================================
# Validation
# =============================================================================


class TestValidate:
    """Tests for POST /scheduling/validate."""

    def test_accepts(self, client):
        response = client.post(
            "/scheduling/validate",
            json={"date": "2024-06-01", "time": "09:00", "timezone": "America/New_York"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "scheduled_for": 1717246800000,
            "display": "Jun 1, 2024, 09:00 AM EDT",
        }

    def test_past(self, client):
        response = client.post(
            "/scheduling/validate",
            json={"date": "2024-06-01", "time": "07:30", "timezone": "America/New_York"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "SCHEDULED_IN_PAST"

    def test_too_far(self, client):
        response = client.post(
            "/scheduling/validate",
            json={"date": "2024-08-01", "time": "09:00", "timezone": "UTC"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "SCHEDULED_TOO_FAR"

    def test_horizon_override(self, client):
        response = client.post(
            "/scheduling/validate",
            json={
                "date": "2024-08-01",
                "time": "09:00",
                "timezone": "UTC",
                "max_advance_days": 90,
            },
        )

        assert response.status_code == 200

    def test_gap_time(self, client):
        response = client.post(
            "/scheduling/validate",
            json={"date": "2025-03-09", "time": "02:30", "timezone": "America/New_York"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "NONEXISTENT_LOCAL_TIME"

    def test_out_of_range_date(self, client):
        response = client.post(
            "/scheduling/validate",
            json={"date": "9999-12-31", "time": "23:59", "timezone": "America/New_York"},
        )

        assert response.status_code == 422
        assert _error_code(response) == "INVALID_INPUT_FORMAT"
