"""
Runtime configuration using Pydantic Settings.

Values come from ``CALENDAR_ENGINE_*`` environment variables or a local ``.env``.
Library functions take explicit arguments; only entry points and the board read these.
"""

from datetime import time, tzinfo
from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from calendar_engine.temporal import resolve_timezone


class Settings(BaseSettings):
    """Calendar engine settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="CALENDAR_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Week-start convention for month padding and week views
    week_starts_on: Literal["monday", "sunday"] = "monday"

    # Time of day given to a task that is dropped on the calendar without a due date
    default_task_time: time = time(9, 0)

    # IANA zone used for day keys and today comparisons; unset keeps each timestamp's own offset
    timezone: Optional[str] = None

    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: Optional[str]) -> Optional[str]:
        resolve_timezone(value)
        return value or None

    def zone(self) -> Optional[tzinfo]:
        return resolve_timezone(self.timezone)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
