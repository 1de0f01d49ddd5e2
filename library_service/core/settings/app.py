"""Application settings for FastAPI configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "staging", "production", "test"]


class AppSettings(BaseSettings):
    """FastAPI application settings.

    Environment variables use APP_ prefix, except ``PORT`` which is read
    unprefixed so container platforms can inject it.
    Example: APP_DEBUG=true, APP_ENVIRONMENT=production, PORT=4000
    """

    service_name: str = Field(
        default="library-service",
        min_length=1,
        max_length=100,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Service name for logging (lowercase, hyphens allowed)",
    )
    title: str = Field(
        default="Library Service API",
        min_length=1,
        max_length=200,
        description="API title displayed in documentation",
    )
    version: str = Field(
        default="0.1.0",
        min_length=1,
        max_length=50,
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$",
        description="API version (semver format)",
    )
    environment: Environment = Field(
        default="development",
        description="Environment: development|staging|production|test",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Bind address for the HTTP server")
    port: int = Field(
        default=4000,
        ge=1,
        le=65535,
        validation_alias="PORT",
        description="HTTP port (read from the unprefixed PORT variable)",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def is_production(self) -> bool:
        """Whether the service runs with production error masking."""
        return self.environment == "production"
