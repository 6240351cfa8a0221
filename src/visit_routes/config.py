"""Application configuration and settings management."""

from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="VISIT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Field Visit Route Planner API"
    api_prefix: str = "/api"
    osrm_base_url: str = Field(
        default="https://router.project-osrm.org",
        description="Base URL for the OSRM routing service (e.g., http://localhost:5000).",
    )
    osrm_profile: Literal["driving", "walking", "cycling"] = Field(
        default="driving",
        description="OSRM profile used for route requests.",
    )
    osrm_timeout_seconds: float = Field(default=30.0, gt=0.0)
    geolocation_timeout_seconds: int = Field(
        default=15,
        ge=1,
        description="Timeout clients must use when requesting the device position.",
    )
    refine_tolerance_meters: float = Field(default=1.0, ge=0.0)
    refine_max_passes: int = Field(default=100, ge=1)
    default_start_time: str = Field(default="08:00", pattern=r"^\d{2}:\d{2}$")
    default_visit_duration_minutes: int = Field(default=30, ge=0)
    travel_buffer_minutes: int = Field(default=15, ge=0)
    preserve_manual_overrides: bool = Field(
        default=False,
        description="Keep hand-edited stop times when the schedule is recomputed.",
    )
    max_google_waypoints: int = Field(default=23, ge=0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("osrm_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> str:
        return str(value).rstrip("/")

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
