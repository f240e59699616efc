"""Configuration settings for fitness insights."""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (FITNESS_INSIGHTS_*)."""

    model_config = SettingsConfigDict(
        env_prefix="FITNESS_INSIGHTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Workout log admission
    max_workout_duration_minutes: float = Field(default=1440.0, gt=0)

    # Health provider
    weekly_summary_days: int = Field(default=7, ge=1)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )
