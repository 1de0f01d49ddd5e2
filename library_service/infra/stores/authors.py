"""Author store (PostgreSQL)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select

from library_service.infra.stores.base import BaseStore
from library_service.infra.stores.tables import AUTHOR_COLUMNS, author_metadata, authors

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import Row


class AuthorStore(BaseStore):
    name = "authors"
    metadata = author_metadata
    table = authors

    async def fetch_by_ids(self, ids: Sequence[int]) -> list[Row[Any]]:
        """Rows for ``ids`` in no particular order; missing ids are skipped."""
        if not ids:
            return []
        async with self._operation("fetch_by_ids"), self.engine.connect() as conn:
            result = await conn.execute(select(*AUTHOR_COLUMNS).where(authors.c.id.in_(ids)))
            return list(result.all())

    async def fetch_all(self) -> list[Row[Any]]:
        async with self._operation("fetch_all"), self.engine.connect() as conn:
            result = await conn.execute(select(*AUTHOR_COLUMNS).order_by(authors.c.id))
            return list(result.all())

    async def insert(self, values: Mapping[str, Any]) -> Row[Any]:
        """Insert one author with a store-generated id and return the stored row.

        The id sequence is realigned first in the same transaction, so rows
        seeded with explicit ids never collide with generated ones.
        """
        async with self._operation("insert"), self.engine.begin() as conn:
            await self._resync_id_sequence(conn)
            result = await conn.execute(insert(authors).values(**values).returning(*AUTHOR_COLUMNS))
            return result.one()

    async def delete(self, author_id: int) -> bool:
        async with self._operation("delete"), self.engine.begin() as conn:
            result = await conn.execute(delete(authors).where(authors.c.id == author_id))
            return result.rowcount > 0
