"""DataLoader container and factory.

DataLoaders batch and cache store lookups within a single request,
preventing N+1 fetches when resolving nested authors, books and reviews.

Each GraphQL request gets its own DataLoaders instance to ensure proper
batching boundaries and cache isolation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from library_service.features.graphql.dataloaders.authors import AuthorByIdLoader
from library_service.features.graphql.dataloaders.base import EdgeLoader
from library_service.features.graphql.dataloaders.books import BookByIdLoader, BooksByAuthorLoader
from library_service.features.graphql.dataloaders.reviews import ReviewsByBookLoader

if TYPE_CHECKING:
    from library_service.infra.stores import StoreRegistry


@dataclass
class DataLoaders:
    """Container for all DataLoader instances.

    One instance created per GraphQL request.

    Usage in resolver:
        ctx = info.context
        author = await ctx.loaders.author_by_id.load(author_id)
    """

    author_by_id: AuthorByIdLoader
    books_by_author: BooksByAuthorLoader
    book_by_id: BookByIdLoader
    reviews_by_book: ReviewsByBookLoader


def create_dataloaders(stores: StoreRegistry) -> DataLoaders:
    """Factory for creating request-scoped DataLoaders.

    Args:
        stores: Process-wide store registry

    Returns:
        DataLoaders container with all loaders initialized
    """
    return DataLoaders(
        author_by_id=AuthorByIdLoader(stores),
        books_by_author=BooksByAuthorLoader(stores),
        book_by_id=BookByIdLoader(stores),
        reviews_by_book=ReviewsByBookLoader(stores),
    )


__all__ = [
    "AuthorByIdLoader",
    "BookByIdLoader",
    "BooksByAuthorLoader",
    "DataLoaders",
    "EdgeLoader",
    "ReviewsByBookLoader",
    "create_dataloaders",
]
