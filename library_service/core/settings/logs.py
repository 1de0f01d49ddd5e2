"""Logging configuration settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Where log records go and in which shape.

    JSON Lines on stderr by default; set LOG_JSON=false for readable text
    while developing. LOG_FILE adds a size-rotated file next to the console.

    Environment variables use LOG_ prefix.
    Example: LOG_LEVEL=DEBUG, LOG_JSON=false, LOG_FILE=logs/library-service.jsonl
    """

    service_name: str = Field(
        default="library-service",
        description="Value of the static 'service' field on JSON records",
    )
    level: LogLevel = Field(default="INFO", description="Root logger level")
    json_logs: bool = Field(
        default=True,
        validation_alias=AliasChoices("LOG_JSON", "json", "json_logs"),
        description="JSON Lines when true, plain text when false",
    )
    console_enabled: bool = Field(default=True, description="Write records to stderr")
    file: Path | None = Field(
        default=None,
        description="Also write records to this file, rotating by size",
    )
    file_max_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        description="Rotate the log file once it reaches this size",
    )
    file_backup_count: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Rotated log files kept on disk",
    )
    include_context: bool = Field(
        default=True,
        description="Copy per-request context (correlation_id) onto every record",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    def to_logging_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`configure_logging`."""
        return {
            "service_name": self.service_name,
            "log_level": self.level,
            "json_logs": self.json_logs,
            "console_enabled": self.console_enabled,
            "file_path": self.file,
            "file_max_bytes": self.file_max_bytes,
            "file_backup_count": self.file_backup_count,
            "include_context": self.include_context,
        }
