"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the
process.

Testing:
    In tests, clear the cache to force reload:
    get_app_settings.cache_clear()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .graphql import GraphQLSettings
from .logs import LoggingSettings
from .seed import SeedSettings
from .stores import AuthorStoreSettings, BookStoreSettings, ReviewStoreSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_author_store_settings() -> AuthorStoreSettings:
    """Get cached PostgreSQL settings for the author store."""
    return AuthorStoreSettings()


@lru_cache(maxsize=1)
def get_book_store_settings() -> BookStoreSettings:
    """Get cached MySQL settings for the book store."""
    return BookStoreSettings()


@lru_cache(maxsize=1)
def get_review_store_settings() -> ReviewStoreSettings:
    """Get cached SQLite settings for the review store."""
    return ReviewStoreSettings()


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Get cached GraphQL settings."""
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_seed_settings() -> SeedSettings:
    """Get cached seeding settings."""
    return SeedSettings()


def clear_settings_cache() -> None:
    """Drop every cached settings instance (tests and CLI overrides)."""
    for loader in (
        get_app_settings,
        get_author_store_settings,
        get_book_store_settings,
        get_review_store_settings,
        get_graphql_settings,
        get_logging_settings,
        get_seed_settings,
    ):
        loader.cache_clear()
