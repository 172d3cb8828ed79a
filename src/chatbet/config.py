"""Environment-driven configuration for the chat bet parser."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parser defaults loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="CHATBET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    default_price: float = Field(default=-110.0)
    default_series_length: int = Field(default=3, ge=1)

    max_rotation_number: int = Field(default=9999, ge=1)
    max_game_number: int = Field(default=10, ge=1)
    max_inning: int = Field(default=15, ge=1)
    max_team_name_length: int = Field(default=50, ge=1)

    min_description_length: int = Field(default=10, ge=1)
    max_description_length: int = Field(default=255, ge=1)

    to_win_precision: int = Field(default=2, ge=0, le=6)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached parser settings."""

    return Settings()  # type: ignore[call-arg]
