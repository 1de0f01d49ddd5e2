"""Modular Pydantic Settings v2 configuration.

One frozen settings model per concern, each read from environment variables
(and an optional .env file) and cached by its loader:

    from library_service.core.settings import get_author_store_settings

    settings = get_author_store_settings()
    print(settings.url)
"""

from __future__ import annotations

from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_author_store_settings,
    get_book_store_settings,
    get_graphql_settings,
    get_logging_settings,
    get_review_store_settings,
    get_seed_settings,
)

__all__ = [
    "clear_settings_cache",
    "get_app_settings",
    "get_author_store_settings",
    "get_book_store_settings",
    "get_graphql_settings",
    "get_logging_settings",
    "get_review_store_settings",
    "get_seed_settings",
]
