"""Query resolvers for the GraphQL API.

Provides read operations:
- authors / books / reviews: every row of the owning store, ordered by id
- author(id) / book(id): single lookups through the request's loaders
- review(id): single lookup straight from the review store

Malformed ids read as ``null`` rather than failing the query. The list fields
are nullable too, so a store that fails nulls only its own field.
"""

from __future__ import annotations

from typing import Annotated

import strawberry
from strawberry.types import Info

from library_service.features.catalog.identifiers import try_parse_id
from library_service.features.catalog.mappers import map_author_row, map_book_row, map_review_row
from library_service.features.graphql.context import GraphQLContext
from library_service.features.graphql.error_handler import resolve_or_raise
from library_service.features.graphql.types.catalog import (
    AuthorType,
    BookType,
    ReviewType,
)

IdArg = Annotated[strawberry.ID, strawberry.argument(description="Entity id")]


@strawberry.type(description="Root query type")
class Query:
    @strawberry.field(description="All authors, ordered by id")
    async def authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType] | None:
        ctx = info.context
        rows = await resolve_or_raise(ctx.stores.authors.fetch_all())
        authors = [map_author_row(row) for row in rows]
        ctx.loaders.author_by_id.prime_many({int(author.id): author for author in authors})
        return [AuthorType.from_entity(author) for author in authors]

    @strawberry.field(description="Get a single author by ID")
    async def author(self, info: Info[GraphQLContext, None], id: IdArg) -> AuthorType | None:
        author_id = try_parse_id(id)
        if author_id is None:
            return None
        author = await resolve_or_raise(info.context.loaders.author_by_id.load(author_id))
        return AuthorType.from_entity(author) if author else None

    @strawberry.field(description="All books, ordered by id")
    async def books(self, info: Info[GraphQLContext, None]) -> list[BookType] | None:
        ctx = info.context
        rows = await resolve_or_raise(ctx.stores.books.fetch_all())
        books = [map_book_row(row) for row in rows]
        ctx.loaders.book_by_id.prime_many({int(book.id): book for book in books})
        return [BookType.from_entity(book) for book in books]

    @strawberry.field(description="Get a single book by ID")
    async def book(self, info: Info[GraphQLContext, None], id: IdArg) -> BookType | None:
        book_id = try_parse_id(id)
        if book_id is None:
            return None
        book = await resolve_or_raise(info.context.loaders.book_by_id.load(book_id))
        return BookType.from_entity(book) if book else None

    @strawberry.field(description="All reviews, ordered by id")
    async def reviews(self, info: Info[GraphQLContext, None]) -> list[ReviewType] | None:
        rows = await resolve_or_raise(info.context.stores.reviews.fetch_all())
        return [ReviewType.from_entity(map_review_row(row)) for row in rows]

    @strawberry.field(description="Get a single review by ID")
    async def review(self, info: Info[GraphQLContext, None], id: IdArg) -> ReviewType | None:
        review_id = try_parse_id(id)
        if review_id is None:
            return None
        row = await resolve_or_raise(info.context.stores.reviews.fetch_by_id(review_id))
        return ReviewType.from_entity(map_review_row(row)) if row else None


__all__ = ["Query"]
