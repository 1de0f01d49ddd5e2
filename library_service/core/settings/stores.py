"""Connection settings for the three backing stores.

Each store is owned by a different team and configured independently:

- Authors live in PostgreSQL (``PG*`` variables, or a full ``DATABASE_URL``).
- Books live in MySQL/MariaDB (``MYSQL_*`` variables).
- Reviews live in an embedded SQLite file (``SQLITE_*`` variables).

The variable names follow the conventions of each store's own client tools so
the same environment can drive the service, the seeder and ad-hoc ``psql`` /
``mysql`` / ``sqlite3`` sessions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from urllib.parse import quote_plus, urlparse, urlunparse

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettingsBase(BaseSettings):
    """Settings shared by every store: startup retry and SQL echo."""

    echo: bool = Field(
        default=False,
        description="Echo SQL statements to logs (debug only).",
    )
    startup_retry_attempts: int = Field(
        default=5,
        ge=1,
        le=60,
        description="Connection attempts before startup gives up on this store.",
    )
    startup_retry_delay: float = Field(
        default=1.0,
        ge=0.1,
        le=60.0,
        description="Initial delay (seconds) between startup connection attempts.",
    )
    startup_retry_timeout: float = Field(
        default=60.0,
        ge=1.0,
        le=600.0,
        description="Maximum total time (seconds) spent retrying at startup.",
    )

    @property
    def url(self) -> str:
        """SQLAlchemy async URL for this store."""
        raise NotImplementedError

    def sqlalchemy_engine_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``create_async_engine``."""
        raise NotImplementedError


class AuthorStoreSettings(StoreSettingsBase):
    """PostgreSQL settings for the author store.

    Environment variables use the libpq names: PGHOST, PGPORT, PGUSER,
    PGPASSWORD, PGDATABASE, PGSSLMODE. DATABASE_URL, when set, wins over the
    individual components.
    """

    dsn: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "dsn"),
        description="Optional complete PostgreSQL URL.",
    )
    host: str = Field(default="localhost", min_length=1, max_length=255)
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = Field(default="postgres", min_length=1, max_length=100)
    password: SecretStr = Field(default=SecretStr("postgres"))
    database: str = Field(default="postgres", min_length=1, max_length=100)
    sslmode: str | None = Field(
        default=None,
        description="libpq sslmode (e.g. 'require'); omitted when unset.",
    )

    pool_size: int = Field(default=10, ge=1, le=100)
    max_overflow: int = Field(default=0, ge=0, le=100)
    pool_timeout: float = Field(default=30.0, ge=0.1, le=300.0)
    pool_recycle: int = Field(default=1800, ge=0, le=86400)
    pool_pre_ping: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_prefix="PG",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def url(self) -> str:
        """SQLAlchemy URL using the psycopg (v3) async driver."""
        if self.dsn:
            parsed = urlparse(self.dsn)
            scheme = parsed.scheme.split("+", 1)[0]
            if scheme in {"postgres", "postgresql"}:
                return urlunparse(parsed._replace(scheme="postgresql+psycopg"))
            return self.dsn

        safe_password = quote_plus(self.password.get_secret_value())
        base = (
            f"postgresql+psycopg://{quote_plus(self.user)}:{safe_password}"
            f"@{self.host}:{self.port}/{self.database}"
        )
        if self.sslmode:
            return f"{base}?sslmode={quote_plus(self.sslmode.lower())}"
        return base

    def sqlalchemy_engine_kwargs(self) -> dict[str, Any]:
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": self.pool_pre_ping,
            "echo": self.echo,
        }


class BookStoreSettings(StoreSettingsBase):
    """MySQL/MariaDB settings for the book store.

    Environment variables use MYSQL_ prefix. MYSQL_CONNECTION_LIMIT bounds the
    pool; callers wait for a free connection rather than opening extra ones.
    """

    host: str = Field(default="localhost", min_length=1, max_length=255)
    port: int = Field(default=3306, ge=1, le=65535)
    user: str = Field(default="appuser", min_length=1, max_length=100)
    password: SecretStr = Field(default=SecretStr("apppass"))
    database: str = Field(default="appdb", min_length=1, max_length=100)
    connection_limit: int = Field(default=10, ge=1, le=100)
    pool_timeout: float = Field(default=30.0, ge=0.1, le=300.0)
    pool_recycle: int = Field(default=1800, ge=0, le=86400)

    model_config = SettingsConfigDict(
        env_prefix="MYSQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def url(self) -> str:
        safe_password = quote_plus(self.password.get_secret_value())
        return (
            f"mysql+aiomysql://{quote_plus(self.user)}:{safe_password}"
            f"@{self.host}:{self.port}/{self.database}?charset=utf8mb4"
        )

    def sqlalchemy_engine_kwargs(self) -> dict[str, Any]:
        return {
            "pool_size": self.connection_limit,
            "max_overflow": 0,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
            "echo": self.echo,
        }


class ReviewStoreSettings(StoreSettingsBase):
    """SQLite settings for the embedded review store.

    SQLITE_PATH names the database file directly. Otherwise the file
    SQLITE_DB_FILE is placed in SQLITE_MOUNT_PATH (or SQLITE_DIR).
    """

    path: str | None = Field(default=None, max_length=1000)
    directory: str = Field(
        default=".",
        validation_alias=AliasChoices("SQLITE_MOUNT_PATH", "SQLITE_DIR", "directory"),
    )
    db_file: str = Field(default="reviews.db", min_length=1, max_length=255)
    busy_timeout: float = Field(
        default=5.0,
        ge=0.0,
        le=120.0,
        description="Seconds SQLite waits on a locked database file.",
    )

    model_config = SettingsConfigDict(
        env_prefix="SQLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def resolved_path(self) -> Path:
        """Absolute path of the review database file."""
        if self.path:
            return Path(self.path).expanduser().resolve()
        return (Path(self.directory).expanduser() / self.db_file).resolve()

    @property
    def url(self) -> str:
        return f"sqlite+aiosqlite:///{self.resolved_path}"

    def sqlalchemy_engine_kwargs(self) -> dict[str, Any]:
        # The embedded store is single-writer: one pooled connection, no overflow.
        return {
            "pool_size": 1,
            "max_overflow": 0,
            "connect_args": {"timeout": self.busy_timeout},
            "echo": self.echo,
        }
