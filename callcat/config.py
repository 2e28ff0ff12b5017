"""Configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from callcat.services.scheduling.parsing import get_zone


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service Configuration
    service_host: str = Field(default="0.0.0.0", description="Service host")
    service_port: int = Field(default=8000, description="Service port")
    log_level: str = Field(default="INFO", description="Logging level")
    docs_enabled: bool = Field(
        default=True, description="Serve /docs, /redoc and /openapi.json"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed origins, or * for any",
    )

    # Scheduling
    default_timezone: str = Field(
        default="UTC",
        description="IANA zone used when the user has no usable preference",
    )
    schedule_min_buffer_minutes: int = Field(
        default=2,
        ge=0,
        description="Earliest selectable time is now plus this many minutes",
    )
    schedule_default_lead_minutes: int = Field(
        default=60,
        ge=0,
        description="Pre-filled schedule time is now plus this many minutes",
    )
    schedule_default_floor_minutes: int = Field(
        default=10,
        ge=0,
        description="Pre-filled schedule time must be at least this far ahead",
    )
    schedule_max_advance_days: int = Field(
        default=30,
        ge=1,
        description="Calls cannot be scheduled further ahead than this",
    )

    @field_validator("default_timezone")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        get_zone(v)
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        """Parsed CORS allowlist."""
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
