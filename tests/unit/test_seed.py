"""Tests for the offline seeder."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from library_service.core.settings.seed import SeedSettings
from library_service.features.catalog.seed import Seeder, load_seed_data

if TYPE_CHECKING:
    from pathlib import Path

    from library_service.infra.stores import StoreRegistry

AUTHORS = [
    {
        "id": 1,
        "firstname": "Ada",
        "lastname": "Lovelace",
        "birthdate": "1815-12-10T00:00:00.000Z",
        "deathdate": "1852-11-27",
        "favoritecolor": "purple",
        "bio": None,
        "nationality": "British",
        "datecreated": "2024-01-01",
    },
    {"id": 5, "firstname": "Mary", "lastname": "Shelley"},
]
BOOKS = [
    {"id": 1, "authorId": 1, "title": "Notes", "publicationdate": "1843-10-01"},
    {"id": 9, "authorId": 5, "title": "Frankenstein", "isbn": "978-0000000003"},
]
REVIEWS = [
    {"id": 1, "bookId": 1, "reviewername": "Bob", "rating": 5, "comment": "great"},
    {"id": 2, "bookId": 9, "reviewername": "Eve", "rating": 4, "comment": "spooky"},
]


def write_seed_files(directory: Path, reviews: list[dict] | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "authors.json").write_text(json.dumps(AUTHORS))
    (directory / "books.json").write_text(json.dumps(BOOKS))
    (directory / "reviews.json").write_text(json.dumps(REVIEWS if reviews is None else reviews))
    return directory


@pytest.fixture
def seed_settings(tmp_path: Path) -> SeedSettings:
    data_dir = write_seed_files(tmp_path / "seed")
    return SeedSettings(data_dir=data_dir, retry_attempts=2, retry_delay=0.0)


def test_load_seed_data_reads_store_field_names(seed_settings: SeedSettings) -> None:
    data = load_seed_data(seed_settings.data_dir)

    assert [author.id for author in data.authors] == [1, 5]
    assert data.authors[0].birthdate.isoformat() == "1815-12-10"
    assert data.books[1].author_id == 5
    assert data.reviews[1].book_id == 9


def test_load_seed_data_rejects_bad_rating(tmp_path: Path) -> None:
    bad = [{"id": 1, "bookId": 1, "reviewername": "Bob", "rating": 9, "comment": "x"}]
    data_dir = write_seed_files(tmp_path / "bad", reviews=bad)

    with pytest.raises(ValidationError):
        load_seed_data(data_dir)


def test_load_seed_data_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_seed_data(tmp_path)


async def test_seeder_loads_every_store(stores: StoreRegistry, seed_settings: SeedSettings) -> None:
    report = await Seeder(stores, seed_settings).run()

    assert report.counts == {"authors": 2, "books": 2, "reviews": 2}
    author = (await stores.authors.fetch_by_ids([1]))[0]
    assert author.favoritecolor == "purple"
    assert [row.id for row in await stores.books.fetch_by_author_ids([5])] == [9]


async def test_seeder_is_idempotent(stores: StoreRegistry, seed_settings: SeedSettings) -> None:
    seeder = Seeder(stores, seed_settings)

    await seeder.run()
    first = [tuple(row) for row in await stores.books.fetch_all()]
    await seeder.run()

    assert [tuple(row) for row in await stores.books.fetch_all()] == first
    assert await stores.authors.count() == 2
    assert await stores.reviews.count() == 2


async def test_seeder_overwrites_changed_records(
    stores: StoreRegistry,
    seed_settings: SeedSettings,
    tmp_path: Path,
) -> None:
    await Seeder(stores, seed_settings).run()

    changed = [dict(REVIEWS[0], rating=1, comment="changed my mind"), REVIEWS[1]]
    data_dir = write_seed_files(tmp_path / "changed", reviews=changed)
    await Seeder(stores, seed_settings.model_copy(update={"data_dir": data_dir})).run()

    review = await stores.reviews.fetch_by_id(1)
    assert review.rating == 1
    assert await stores.reviews.count() == 2


async def test_ids_continue_after_seeded_rows(
    stores: StoreRegistry,
    seed_settings: SeedSettings,
) -> None:
    await Seeder(stores, seed_settings).run()

    row = await stores.authors.insert({"firstname": "Jane", "lastname": "Austen"})

    assert row.id == 6
