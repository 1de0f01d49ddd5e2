"""DataLoader for batch-loading reviews from the embedded review store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from library_service.features.catalog.mappers import map_review_row
from library_service.features.catalog.models import Review
from library_service.features.graphql.dataloaders.base import EdgeLoader

if TYPE_CHECKING:
    from collections.abc import Sequence


class ReviewsByBookLoader(EdgeLoader[list[Review]]):
    name = "reviews_by_book"

    async def batch_load(self, keys: Sequence[int]) -> list[list[Review]]:
        rows = await self._stores.reviews.fetch_by_book_ids(keys)
        reviews_by_book: dict[int, list[Review]] = {key: [] for key in keys}
        for row in rows:
            reviews_by_book.setdefault(int(row.book_id), []).append(map_review_row(row))
        return [reviews_by_book.get(key, []) for key in keys]


__all__ = ["ReviewsByBookLoader"]
