"""GraphQL types for authors, books and reviews.

Provides:
- AuthorType, BookType, ReviewType with loader-backed relationship fields
- Input types: CreateAuthorInput, CreateBookInput
- Payload types: <Entity>Success | MutationError unions for create mutations
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Annotated

import strawberry
from strawberry.types import Info

from library_service.core.exceptions import AppException
from library_service.features.graphql.context import GraphQLContext
from library_service.features.graphql.error_handler import (
    ErrorCategory,
    error_category,
    resolve_or_raise,
)

if TYPE_CHECKING:
    from library_service.features.catalog.models import Author, Book, Review


@strawberry.enum(description="Error codes for GraphQL mutation errors")
class ErrorCode(Enum):
    VALIDATION_ERROR = ErrorCategory.VALIDATION
    NOT_FOUND = ErrorCategory.NOT_FOUND
    CONFLICT = ErrorCategory.CONFLICT
    INTERNAL_ERROR = ErrorCategory.INTERNAL


@strawberry.type(name="Author", description="An author, stored in the author store")
class AuthorType:
    id: strawberry.ID
    firstname: str
    lastname: str
    birthdate: str | None = strawberry.field(description="YYYY-MM-DD")
    deathdate: str | None = strawberry.field(description="YYYY-MM-DD")
    favorite_color: str | None
    bio: str | None
    nationality: str | None
    date_created: str | None = strawberry.field(description="YYYY-MM-DD")

    @strawberry.field(description="Books by this author, ordered by id")
    async def books(self, info: Info[GraphQLContext, None]) -> list[BookType] | None:
        books = await resolve_or_raise(info.context.loaders.books_by_author.load(int(self.id)))
        return [BookType.from_entity(book) for book in books]

    @classmethod
    def from_entity(cls, author: Author) -> AuthorType:
        return cls(
            id=strawberry.ID(author.id),
            firstname=author.firstname,
            lastname=author.lastname,
            birthdate=author.birthdate,
            deathdate=author.deathdate,
            favorite_color=author.favorite_color,
            bio=author.bio,
            nationality=author.nationality,
            date_created=author.date_created,
        )


@strawberry.type(name="Book", description="A book, stored in the book store")
class BookType:
    id: strawberry.ID
    author_id: strawberry.ID
    title: str
    synopsis: str | None
    isbn: str | None
    publication_date: str | None = strawberry.field(description="YYYY-MM-DD")

    @strawberry.field(description="The book's author; null if the author row is gone")
    async def author(self, info: Info[GraphQLContext, None]) -> AuthorType | None:
        author = await resolve_or_raise(info.context.loaders.author_by_id.load(int(self.author_id)))
        return AuthorType.from_entity(author) if author else None

    @strawberry.field(description="Reviews of this book, ordered by id")
    async def reviews(self, info: Info[GraphQLContext, None]) -> list[ReviewType] | None:
        reviews = await resolve_or_raise(info.context.loaders.reviews_by_book.load(int(self.id)))
        return [ReviewType.from_entity(review) for review in reviews]

    @classmethod
    def from_entity(cls, book: Book) -> BookType:
        return cls(
            id=strawberry.ID(book.id),
            author_id=strawberry.ID(book.author_id),
            title=book.title,
            synopsis=book.synopsis,
            isbn=book.isbn,
            publication_date=book.publication_date,
        )


@strawberry.type(name="Review", description="A review, stored in the embedded review store")
class ReviewType:
    id: strawberry.ID
    book_id: strawberry.ID
    reviewer_name: str
    rating: int
    comment: str

    @strawberry.field(description="The reviewed book; null if the book row is gone")
    async def book(self, info: Info[GraphQLContext, None]) -> BookType | None:
        book = await resolve_or_raise(info.context.loaders.book_by_id.load(int(self.book_id)))
        return BookType.from_entity(book) if book else None

    @classmethod
    def from_entity(cls, review: Review) -> ReviewType:
        return cls(
            id=strawberry.ID(review.id),
            book_id=strawberry.ID(review.book_id),
            reviewer_name=review.reviewer_name,
            rating=review.rating,
            comment=review.comment,
        )


# --- Inputs ---


@strawberry.input(description="Input for creating an author")
class CreateAuthorInput:
    firstname: str
    lastname: str
    birthdate: str | None = None
    deathdate: str | None = None
    favorite_color: str | None = None
    bio: str | None = None
    nationality: str | None = None
    date_created: str | None = strawberry.field(
        default=None,
        description="Defaults to today (UTC) when omitted",
    )

    def to_data(self) -> dict[str, object]:
        return {
            "firstname": self.firstname,
            "lastname": self.lastname,
            "birthdate": self.birthdate,
            "deathdate": self.deathdate,
            "favorite_color": self.favorite_color,
            "bio": self.bio,
            "nationality": self.nationality,
            "date_created": self.date_created,
        }


@strawberry.input(description="Input for creating a book")
class CreateBookInput:
    author_id: strawberry.ID
    title: str
    synopsis: str | None = None
    isbn: str | None = None
    publication_date: str | None = None

    def to_data(self) -> dict[str, object]:
        return {
            "author_id": str(self.author_id),
            "title": self.title,
            "synopsis": self.synopsis,
            "isbn": self.isbn,
            "publication_date": self.publication_date,
        }


# --- Mutation Payload Types (Union Pattern) ---


@strawberry.type(description="Error result from a create mutation")
class MutationError:
    """Validation, missing-reference and id-conflict failures."""

    code: ErrorCode
    message: str
    field: str | None = strawberry.field(
        default=None,
        description="Input field that caused the error, when known",
    )

    @classmethod
    def from_exception(cls, exc: AppException) -> MutationError:
        return cls(code=ErrorCode(error_category(exc)), message=exc.detail, field=exc.field)


@strawberry.type
class AuthorSuccess:
    author: AuthorType


@strawberry.type
class BookSuccess:
    book: BookType


@strawberry.type
class ReviewSuccess:
    review: ReviewType


AuthorPayload = Annotated[
    AuthorSuccess | MutationError,
    strawberry.union(name="AuthorPayload", description="Result of createAuthor"),
]
BookPayload = Annotated[
    BookSuccess | MutationError,
    strawberry.union(name="BookPayload", description="Result of createBook"),
]
ReviewPayload = Annotated[
    ReviewSuccess | MutationError,
    strawberry.union(name="ReviewPayload", description="Result of createReview"),
]
