"""Settings for the offline seeding command."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SeedSettings(BaseSettings):
    """Seed data location and connection retry policy.

    Environment variables use SEED_ prefix.
    Example: SEED_DATA_DIR=/srv/seed, SEED_RETRY_ATTEMPTS=10
    """

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding authors.json, books.json and reviews.json",
    )
    retry_attempts: int = Field(
        default=30,
        ge=1,
        le=500,
        description="Attempts to reach each store before seeding fails",
    )
    retry_delay: float = Field(
        default=2.0,
        ge=0.0,
        le=60.0,
        description="Fixed delay (seconds) between connection attempts",
    )

    model_config = SettingsConfigDict(
        env_prefix="SEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
