"""DataLoader for batch-loading authors from the author store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from library_service.features.catalog.mappers import map_author_row
from library_service.features.catalog.models import Author
from library_service.features.graphql.dataloaders.base import EdgeLoader

if TYPE_CHECKING:
    from collections.abc import Sequence


class AuthorByIdLoader(EdgeLoader[Author | None]):
    """Authors by id.

    Usage:
        author = await loaders.author_by_id.load(42)  # None when missing
    """

    name = "author_by_id"

    async def batch_load(self, keys: Sequence[int]) -> list[Author | None]:
        rows = await self._stores.authors.fetch_by_ids(keys)
        authors = {int(row.id): map_author_row(row) for row in rows}
        return [authors.get(key) for key in keys]


__all__ = ["AuthorByIdLoader"]
