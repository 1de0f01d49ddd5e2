"""Book store (MySQL/MariaDB)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError

from library_service.core.exceptions import ConflictException
from library_service.infra.stores.base import BaseStore
from library_service.infra.stores.tables import BOOK_COLUMNS, book_metadata, books

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncConnection


class BookStore(BaseStore):
    name = "books"
    metadata = book_metadata
    table = books

    async def fetch_by_ids(self, ids: Sequence[int]) -> list[Row[Any]]:
        if not ids:
            return []
        async with self._operation("fetch_by_ids"), self.engine.connect() as conn:
            result = await conn.execute(select(*BOOK_COLUMNS).where(books.c.id.in_(ids)))
            return list(result.all())

    async def fetch_by_author_ids(self, author_ids: Sequence[int]) -> list[Row[Any]]:
        """Books written by any of ``author_ids``, ordered by book id."""
        if not author_ids:
            return []
        async with self._operation("fetch_by_author_ids"), self.engine.connect() as conn:
            result = await conn.execute(
                select(*BOOK_COLUMNS)
                .where(books.c.author_id.in_(author_ids))
                .order_by(books.c.id)
            )
            return list(result.all())

    async def fetch_all(self) -> list[Row[Any]]:
        async with self._operation("fetch_all"), self.engine.connect() as conn:
            result = await conn.execute(select(*BOOK_COLUMNS).order_by(books.c.id))
            return list(result.all())

    async def exists(self, book_id: int) -> bool:
        async with self._operation("exists"), self.engine.connect() as conn:
            result = await conn.execute(select(books.c.id).where(books.c.id == book_id))
            return result.first() is not None

    async def insert(self, values: Mapping[str, Any]) -> Row[Any]:
        """Insert one book and return the stored row.

        ``values`` may carry an explicit ``id``; the id counter is realigned
        afterwards so later generated ids skip past it.

        Raises:
            ConflictException: The explicit id is already taken.
        """
        explicit_id = values.get("id")
        async with self._operation("insert"), self.engine.begin() as conn:
            try:
                result = await conn.execute(insert(books).values(**values))
            except IntegrityError as exc:
                raise ConflictException(
                    detail=f"Book {explicit_id} already exists",
                    type="book-conflict",
                    extra={"field": "id", "book_id": str(explicit_id)},
                ) from exc
            book_id = explicit_id if explicit_id is not None else result.inserted_primary_key[0]
            if explicit_id is not None:
                await self._resync_id_sequence(conn)
            row = await conn.execute(select(*BOOK_COLUMNS).where(books.c.id == book_id))
            return row.one()

    async def ids_for_author(self, conn: AsyncConnection, author_id: int) -> list[int]:
        """Ids of the author's books, locked for the rest of ``conn``'s transaction."""
        stmt = select(books.c.id).where(books.c.author_id == author_id).order_by(books.c.id)
        if self.dialect != "sqlite":
            stmt = stmt.with_for_update()
        async with self._operation("ids_for_author"):
            result = await conn.execute(stmt)
            return [int(book_id) for book_id in result.scalars()]

    async def delete_ids(self, conn: AsyncConnection, book_ids: Sequence[int]) -> int:
        if not book_ids:
            return 0
        async with self._operation("delete_ids"):
            result = await conn.execute(delete(books).where(books.c.id.in_(book_ids)))
            return result.rowcount
