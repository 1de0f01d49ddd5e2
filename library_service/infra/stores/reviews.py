"""Review store (embedded SQLite).

SQLite allows one writer at a time, so every call goes through the store's
lock and the engine keeps a single pooled connection.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select

from library_service.infra.stores.base import BaseStore
from library_service.infra.stores.tables import REVIEW_COLUMNS, review_metadata, reviews

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import Row


class ReviewStore(BaseStore):
    name = "reviews"
    metadata = review_metadata
    table = reviews
    serialized = True

    async def fetch_by_book_ids(self, book_ids: Sequence[int]) -> list[Row[Any]]:
        if not book_ids:
            return []
        async with self._operation("fetch_by_book_ids"), self.engine.connect() as conn:
            result = await conn.execute(
                select(*REVIEW_COLUMNS)
                .where(reviews.c.book_id.in_(book_ids))
                .order_by(reviews.c.id)
            )
            return list(result.all())

    async def fetch_by_id(self, review_id: int) -> Row[Any] | None:
        async with self._operation("fetch_by_id"), self.engine.connect() as conn:
            result = await conn.execute(select(*REVIEW_COLUMNS).where(reviews.c.id == review_id))
            return result.first()

    async def fetch_all(self) -> list[Row[Any]]:
        async with self._operation("fetch_all"), self.engine.connect() as conn:
            result = await conn.execute(select(*REVIEW_COLUMNS).order_by(reviews.c.id))
            return list(result.all())

    async def insert(self, values: Mapping[str, Any]) -> Row[Any]:
        async with self._operation("insert"), self.engine.begin() as conn:
            result = await conn.execute(insert(reviews).values(**values))
            review_id = result.inserted_primary_key[0]
            row = await conn.execute(select(*REVIEW_COLUMNS).where(reviews.c.id == review_id))
            return row.one()

    async def delete_by_book_ids(self, book_ids: Sequence[int]) -> int:
        if not book_ids:
            return 0
        async with self._operation("delete_by_book_ids"), self.engine.begin() as conn:
            result = await conn.execute(delete(reviews).where(reviews.c.book_id.in_(book_ids)))
            return result.rowcount
