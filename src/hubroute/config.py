"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="HUBROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Hub Route Engine API"
    api_prefix: str = "/api"
    hub_connection_count: int = Field(
        default=3,
        ge=1,
        description="Number of nearest hubs linked to the synthetic ORIGIN and DESTINATION nodes.",
    )
    cost_rate_per_km: float = Field(default=1.5, ge=0.0, description="Base transport cost per kilometre.")
    currency: str = Field(default="CNY", description="Currency of generated edge costs.")
    balanced_time_weight: float = Field(default=0.6, ge=0.0, le=1.0)
    balanced_cost_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    route_cache_max_entries: int = Field(
        default=1024,
        ge=1,
        description="Upper bound on memoised routes per strategy before least-recently-used eviction.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

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

    @field_validator("currency", mode="after")
    @classmethod
    def _normalise_currency(cls, value: str) -> str:
        return value.strip().upper()


settings = Settings()
