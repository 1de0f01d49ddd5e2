"""Pytest configuration and shared fixtures.

The three stores are backed by temporary SQLite files so the suite runs
without PostgreSQL or MySQL:

    - ``stores``: empty StoreRegistry with schemas created
    - ``seeded_stores``: the same registry with a small library loaded
    - ``loaders`` / ``orchestrator``: request-scoped objects over ``stores``
"""

from __future__ import annotations

import os
from datetime import date
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from library_service.core.settings import clear_settings_cache
from library_service.infra.stores import AuthorStore, BookStore, ReviewStore, StoreRegistry

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Iterator
    from pathlib import Path

    from library_service.features.catalog.service import MutationOrchestrator
    from library_service.features.graphql.dataloaders import DataLoaders

os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")


AUTHOR_ROWS = [
    {
        "id": 1,
        "firstname": "Ada",
        "lastname": "Lovelace",
        "birthdate": date(1815, 12, 10),
        "deathdate": date(1852, 11, 27),
        "favoritecolor": "purple",
        "bio": "Wrote the first published algorithm.",
        "nationality": "British",
        "datecreated": date(2024, 1, 1),
    },
    {
        "id": 2,
        "firstname": "Mary",
        "lastname": "Shelley",
        "birthdate": date(1797, 8, 30),
        "deathdate": date(1851, 2, 1),
        "favoritecolor": None,
        "bio": None,
        "nationality": "British",
        "datecreated": date(2024, 1, 2),
    },
]

BOOK_ROWS = [
    {
        "id": 1,
        "author_id": 1,
        "title": "Notes on the Analytical Engine",
        "synopsis": None,
        "isbn": "978-0000000001",
        "publicationdate": date(1843, 10, 1),
    },
    {
        "id": 2,
        "author_id": 1,
        "title": "Letters",
        "synopsis": "Collected correspondence.",
        "isbn": None,
        "publicationdate": None,
    },
    {
        "id": 3,
        "author_id": 2,
        "title": "Frankenstein",
        "synopsis": "A scientist creates life.",
        "isbn": "978-0000000003",
        "publicationdate": date(1818, 1, 1),
    },
]

REVIEW_ROWS = [
    {"id": 1, "book_id": 1, "reviewername": "Bob", "rating": 5, "comment": "great"},
    {"id": 2, "book_id": 1, "reviewername": "Eve", "rating": 3, "comment": "dense"},
    {"id": 3, "book_id": 3, "reviewername": "Bob", "rating": 4, "comment": "spooky"},
]


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    clear_settings_cache()
    yield
    clear_settings_cache()


def build_sqlite_registry(directory: Path) -> StoreRegistry:
    """Three SQLite-backed stores in ``directory``, one file each."""

    def _engine(name: str):
        return create_async_engine(f"sqlite+aiosqlite:///{directory / name}")

    return StoreRegistry(
        authors=AuthorStore(_engine("authors.db")),
        books=BookStore(_engine("books.db")),
        reviews=ReviewStore(_engine("reviews.db")),
    )


@pytest.fixture
async def stores(tmp_path: Path) -> AsyncGenerator[StoreRegistry]:
    registry = build_sqlite_registry(tmp_path)
    await registry.create_schemas()
    yield registry
    await registry.dispose()


@pytest.fixture
async def seeded_stores(stores: StoreRegistry) -> StoreRegistry:
    await stores.authors.upsert_many(AUTHOR_ROWS)
    await stores.books.upsert_many(BOOK_ROWS)
    await stores.reviews.upsert_many(REVIEW_ROWS)
    return stores


@pytest.fixture
def loaders(stores: StoreRegistry) -> DataLoaders:
    from library_service.features.graphql.dataloaders import create_dataloaders

    return create_dataloaders(stores)


@pytest.fixture
def orchestrator(stores: StoreRegistry, loaders: DataLoaders) -> MutationOrchestrator:
    from library_service.features.catalog.service import MutationOrchestrator

    return MutationOrchestrator(stores, loaders, today=lambda: date(2025, 6, 1))
