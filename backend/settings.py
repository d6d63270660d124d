"""
Centralized settings configuration using Pydantic BaseSettings.

Part of FSE-110: Introduce settings.py with Pydantic BaseSettings

All environment variables are defined here with types, defaults, and validation.
Use get_settings() wherever engine components are wired together.

Usage:
    from backend.settings import get_settings, Settings

    # Engine factory (defaults from environment / .env)
    settings = get_settings()
    print(settings.plate_increment)

    # Tests with explicit values
    settings = Settings(environment="test", default_sets=4, _env_file=None)
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SESSION_ENGINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for the engine (DEBUG shows every decision)",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking (completion sink failures)",
    )

    # -------------------------------------------------------------------------
    # Loads
    # -------------------------------------------------------------------------
    weight_unit: Literal["lbs", "kg"] = Field(
        default="lbs",
        description="Unit shown in agent messages",
    )
    plate_increment: float = Field(
        default=2.5,
        gt=0,
        description="Every adjusted load is rounded to a multiple of this value",
    )

    # -------------------------------------------------------------------------
    # Movement Memory
    # -------------------------------------------------------------------------
    history_limit: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Number of recent non-warmup sets read per exercise",
    )

    # -------------------------------------------------------------------------
    # Queue Builder Defaults (used when movement memory is missing)
    # -------------------------------------------------------------------------
    default_sets: int = Field(default=3, ge=1, description="Sets per exercise")
    default_reps: int = Field(default=8, ge=1, description="Prescribed reps per set")
    default_rpe: float = Field(default=7, ge=1, le=10, description="Prescribed RPE per set")

    # -------------------------------------------------------------------------
    # Modification intents that delegate to life events
    # -------------------------------------------------------------------------
    travel_default_days: int = Field(
        default=3,
        ge=1,
        description="Duration assumed when a user reports travel mid-session",
    )
    sickness_default_days: int = Field(
        default=3,
        ge=1,
        description="Duration assumed when a user reports feeling sick mid-session",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one the logging module knows."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Engine settings instance
    """
    return Settings()
