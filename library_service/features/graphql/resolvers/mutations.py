"""Mutation resolvers for the GraphQL API.

Provides write operations:
- createAuthor(input)
- createBook(input, id)
- createReview(bookId, reviewerName, rating, comment)
- deleteAuthor(id)

Create mutations answer validation, missing-reference and id-conflict
failures with a ``MutationError`` payload. Store faults and cross-store
inconsistency raise GraphQL errors instead.
"""

from __future__ import annotations

from typing import Annotated

import strawberry
from strawberry.types import Info

from library_service.core.exceptions import (
    AppException,
    ConflictException,
    NotFoundException,
    ValidationException,
)
from library_service.features.graphql.context import GraphQLContext
from library_service.features.graphql.error_handler import (
    graphql_error_from_exception,
    resolve_or_raise,
)
from library_service.features.graphql.types.catalog import (
    AuthorPayload,
    AuthorSuccess,
    AuthorType,
    BookPayload,
    BookSuccess,
    BookType,
    CreateAuthorInput,
    CreateBookInput,
    MutationError,
    ReviewPayload,
    ReviewSuccess,
    ReviewType,
)

_PAYLOAD_ERRORS = (ValidationException, NotFoundException, ConflictException)

ExplicitIdArg = Annotated[
    strawberry.ID | None,
    strawberry.argument(description="Explicit id; must not already exist"),
]


@strawberry.type(description="Root mutation type")
class Mutation:
    @strawberry.mutation(description="Create an author")
    async def create_author(
        self,
        info: Info[GraphQLContext, None],
        input: CreateAuthorInput,
    ) -> AuthorPayload:
        try:
            author = await info.context.orchestrator.create_author(input.to_data())
        except _PAYLOAD_ERRORS as exc:
            return MutationError.from_exception(exc)
        except AppException as exc:
            raise graphql_error_from_exception(exc) from exc
        return AuthorSuccess(author=AuthorType.from_entity(author))

    @strawberry.mutation(description="Create a book for an existing author")
    async def create_book(
        self,
        info: Info[GraphQLContext, None],
        input: CreateBookInput,
        id: ExplicitIdArg = None,
    ) -> BookPayload:
        try:
            book = await info.context.orchestrator.create_book(input.to_data(), book_id=id)
        except _PAYLOAD_ERRORS as exc:
            return MutationError.from_exception(exc)
        except AppException as exc:
            raise graphql_error_from_exception(exc) from exc
        return BookSuccess(book=BookType.from_entity(book))

    @strawberry.mutation(description="Review an existing book (rating 1-5)")
    async def create_review(
        self,
        info: Info[GraphQLContext, None],
        book_id: strawberry.ID,
        reviewer_name: str,
        rating: int,
        comment: str,
    ) -> ReviewPayload:
        try:
            review = await info.context.orchestrator.create_review(
                book_id,
                reviewer_name,
                rating,
                comment,
            )
        except _PAYLOAD_ERRORS as exc:
            return MutationError.from_exception(exc)
        except AppException as exc:
            raise graphql_error_from_exception(exc) from exc
        return ReviewSuccess(review=ReviewType.from_entity(review))

    @strawberry.mutation(description="Delete an author with its books and their reviews")
    async def delete_author(self, info: Info[GraphQLContext, None], id: strawberry.ID) -> bool:
        """False when the author does not exist."""
        return await resolve_or_raise(info.context.orchestrator.delete_author(id))


__all__ = ["Mutation"]
