"""DataLoaders for batch-loading books from the book store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from library_service.features.catalog.mappers import map_book_row
from library_service.features.catalog.models import Book
from library_service.features.graphql.dataloaders.base import EdgeLoader

if TYPE_CHECKING:
    from collections.abc import Sequence


class BookByIdLoader(EdgeLoader[Book | None]):
    name = "book_by_id"

    async def batch_load(self, keys: Sequence[int]) -> list[Book | None]:
        rows = await self._stores.books.fetch_by_ids(keys)
        books = {int(row.id): map_book_row(row) for row in rows}
        return [books.get(key) for key in keys]


class BooksByAuthorLoader(EdgeLoader[list[Book]]):
    """Books grouped by author id, each group ordered by book id.

    Maps author_id -> list of books (empty list when the author has none).
    """

    name = "books_by_author"

    async def batch_load(self, keys: Sequence[int]) -> list[list[Book]]:
        rows = await self._stores.books.fetch_by_author_ids(keys)
        books_by_author: dict[int, list[Book]] = {key: [] for key in keys}
        for row in rows:
            books_by_author.setdefault(int(row.author_id), []).append(map_book_row(row))
        return [books_by_author.get(key, []) for key in keys]


__all__ = ["BookByIdLoader", "BooksByAuthorLoader"]
