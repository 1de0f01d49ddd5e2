"""Offline bulk loading of the three stores from JSON files.

The data directory holds ``authors.json``, ``books.json`` and
``reviews.json``, each a JSON array using the stores' own field names.
Every record is upserted by id, so running the seeder twice with the same
files leaves the stores unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from library_service.infra.logging import log_context
from library_service.infra.stores import wait_for_store
from library_service.utils.retry import Backoff

if TYPE_CHECKING:
    from pathlib import Path

    from library_service.core.settings.seed import SeedSettings
    from library_service.infra.stores import BaseStore, StoreRegistry

logger = logging.getLogger(__name__)


def _date_part(value: object) -> object:
    if isinstance(value, str):
        return value[:10] or None
    return value


SeedDate = Annotated[date | None, BeforeValidator(_date_part)]


class _SeedRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(by_alias=False)


class AuthorRecord(_SeedRecord):
    id: int
    firstname: str
    lastname: str
    birthdate: SeedDate = None
    deathdate: SeedDate = None
    favoritecolor: str | None = None
    bio: str | None = None
    nationality: str | None = None
    datecreated: SeedDate = None


class BookRecord(_SeedRecord):
    id: int
    author_id: int = Field(validation_alias="authorId")
    title: str
    synopsis: str | None = None
    isbn: str | None = None
    publicationdate: SeedDate = None


class ReviewRecord(_SeedRecord):
    id: int
    book_id: int = Field(validation_alias="bookId")
    reviewername: str
    rating: int = Field(ge=1, le=5)
    comment: str


@dataclass
class SeedData:
    authors: list[AuthorRecord]
    books: list[BookRecord]
    reviews: list[ReviewRecord]


@dataclass
class SeedReport:
    counts: dict[str, int] = field(default_factory=dict)


def load_seed_data(data_dir: Path) -> SeedData:
    """Read and validate the three seed files.

    Raises:
        FileNotFoundError: A seed file is missing.
        pydantic.ValidationError: A record is malformed.
    """

    R = TypeVar("R", bound=_SeedRecord)

    def _read(name: str, record: type[R]) -> list[R]:
        path = data_dir / name
        return TypeAdapter(list[record]).validate_json(path.read_bytes())

    return SeedData(
        authors=_read("authors.json", AuthorRecord),
        books=_read("books.json", BookRecord),
        reviews=_read("reviews.json", ReviewRecord),
    )


class Seeder:
    """Upsert seed data into each store in turn: authors, books, reviews."""

    def __init__(self, stores: StoreRegistry, settings: SeedSettings) -> None:
        self.stores = stores
        self.settings = settings

    async def run(self, data: SeedData | None = None) -> SeedReport:
        data = data or load_seed_data(self.settings.data_dir)
        report = SeedReport()
        plan: list[tuple[BaseStore, list[_SeedRecord]]] = [
            (self.stores.authors, list(data.authors)),
            (self.stores.books, list(data.books)),
            (self.stores.reviews, list(data.reviews)),
        ]
        for store, records in plan:
            with log_context(operation="seed", store=store.name):
                report.counts[store.name] = await self._seed_store(store, records)
        return report

    async def _seed_store(self, store: BaseStore, records: list[_SeedRecord]) -> int:
        await wait_for_store(
            store,
            attempts=self.settings.retry_attempts,
            backoff=Backoff.fixed(self.settings.retry_delay),
        )
        await store.create_schema()
        count = await store.upsert_many([record.to_row() for record in records])
        await store.resync_id_sequence()
        logger.info("Seeded store", extra={"records": count})
        return count
