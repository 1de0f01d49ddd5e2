"""Writes that span or depend on more than one store.

No transaction coordinator covers the three stores, so each mutation orders
its per-store steps so that the window in which the stores disagree is as
small as possible, and checks cross-store references itself.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from library_service.core.exceptions import (
    ConflictException,
    CrossStoreInconsistencyError,
    NotFoundException,
    StoreOperationError,
)
from library_service.core.services import BaseService
from library_service.features.catalog.identifiers import parse_id
from library_service.features.catalog.mappers import map_author_row, map_book_row, map_review_row
from library_service.features.catalog.schemas import (
    AuthorCreate,
    BookCreate,
    ReviewCreate,
    validation_exception_from,
)
from library_service.infra.metrics.tracking import track_cross_store_inconsistency

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from library_service.features.catalog.models import Author, Book, Review
    from library_service.features.graphql.dataloaders import DataLoaders
    from library_service.infra.stores import StoreRegistry


def _today() -> date:
    return datetime.now(UTC).date()


M = TypeVar("M", bound=BaseModel)


def _validate(model: type[M], data: Mapping[str, Any]) -> M:
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise validation_exception_from(exc) from exc


class MutationOrchestrator(BaseService):
    """Create and delete operations over the author, book and review stores.

    One instance per request, sharing that request's loaders so reads made
    after a write see the written state.

    Validation failures raise :class:`ValidationException`, missing
    references raise :class:`NotFoundException` and taken ids raise
    :class:`ConflictException`, all before any store is written. Store
    faults surface as :class:`StoreOperationError`.
    """

    def __init__(
        self,
        stores: StoreRegistry,
        loaders: DataLoaders,
        *,
        today: Callable[[], date] = _today,
    ) -> None:
        super().__init__()
        self.stores = stores
        self.loaders = loaders
        self._today = today

    async def create_author(self, data: Mapping[str, Any]) -> Author:
        payload = _validate(AuthorCreate, data)
        row = await self.stores.authors.insert(payload.to_row(self._today()))
        author = map_author_row(row)
        author_id = int(row.id)

        self.loaders.author_by_id.prime(author_id, author)
        self.loaders.books_by_author.prime(author_id, [])
        self.logger.info("Author created", extra={"author_id": author.id})
        return author

    async def create_book(self, data: Mapping[str, Any], *, book_id: object = None) -> Book:
        """Create a book for an existing author.

        ``data`` carries ``author_id`` plus the book fields. ``book_id`` is an
        optional caller-chosen id.
        """
        fields = dict(data)
        author_id = parse_id(fields.pop("author_id", None), field="authorId")
        explicit_id = parse_id(book_id, field="id") if book_id is not None else None
        payload = _validate(BookCreate, fields)

        if await self.loaders.author_by_id.load(author_id) is None:
            raise NotFoundException(
                detail=f"Author {author_id} not found",
                type="author-not-found",
                extra={"field": "authorId", "author_id": str(author_id)},
            )
        if explicit_id is not None and await self.stores.books.exists(explicit_id):
            raise ConflictException(
                detail=f"Book {explicit_id} already exists",
                type="book-conflict",
                extra={"field": "id", "book_id": str(explicit_id)},
            )

        row = await self.stores.books.insert(payload.to_row(author_id, explicit_id))
        book = map_book_row(row)

        self.loaders.book_by_id.prime(int(row.id), book)
        self.loaders.books_by_author.clear(author_id)
        self.loaders.reviews_by_book.prime(int(row.id), [])
        self.logger.info(
            "Book created",
            extra={"book_id": book.id, "author_id": book.author_id},
        )
        return book

    async def create_review(
        self,
        book_id: object,
        reviewer_name: object,
        rating: object,
        comment: object,
    ) -> Review:
        parsed_book_id = parse_id(book_id, field="bookId")
        payload = _validate(
            ReviewCreate,
            {"reviewer_name": reviewer_name, "rating": rating, "comment": comment},
        )

        if await self.loaders.book_by_id.load(parsed_book_id) is None:
            raise NotFoundException(
                detail=f"Book {parsed_book_id} not found",
                type="book-not-found",
                extra={"field": "bookId", "book_id": str(parsed_book_id)},
            )

        row = await self.stores.reviews.insert(payload.to_row(parsed_book_id))
        review = map_review_row(row)

        self.loaders.reviews_by_book.clear(parsed_book_id)
        self.logger.info(
            "Review created",
            extra={"review_id": review.id, "book_id": review.book_id, "rating": review.rating},
        )
        return review

    async def delete_author(self, author_id: object) -> bool:
        """Delete an author together with its books and their reviews.

        Order: books and reviews first, inside one book-store transaction
        (reviews are deleted before that transaction commits, so a review
        failure rolls the book deletion back), then the author row.

        Returns:
            False when the author does not exist; nothing is written then.

        Raises:
            CrossStoreInconsistencyError: Books and reviews are gone but the
                author row could not be deleted. Not compensated.
        """
        parsed_id = parse_id(author_id, field="id")
        if await self.loaders.author_by_id.load(parsed_id) is None:
            return False

        async with self.stores.books.transaction() as conn:
            book_ids = await self.stores.books.ids_for_author(conn, parsed_id)
            self._lazy.debug(lambda: f"Author {parsed_id} cascade covers books {book_ids}")
            books_deleted = await self.stores.books.delete_ids(conn, book_ids)
            reviews_deleted = await self.stores.reviews.delete_by_book_ids(book_ids)

        try:
            deleted = await self.stores.authors.delete(parsed_id)
        except StoreOperationError as exc:
            track_cross_store_inconsistency()
            self.logger.critical(
                "Books deleted but author row remains; stores are inconsistent",
                extra={
                    "author_id": str(parsed_id),
                    "book_ids": [str(book_id) for book_id in book_ids],
                    "error": str(exc),
                },
            )
            self.loaders.author_by_id.clear(parsed_id)
            self._forget_books(parsed_id, book_ids)
            raise CrossStoreInconsistencyError(parsed_id, book_ids, exc) from exc

        self.loaders.author_by_id.prime(parsed_id, None)
        self._forget_books(parsed_id, book_ids)

        if not deleted:
            self.logger.warning(
                "Author disappeared before its row was deleted",
                extra={"author_id": str(parsed_id)},
            )
            return False

        self.logger.info(
            "Author deleted",
            extra={
                "author_id": str(parsed_id),
                "books_deleted": books_deleted,
                "reviews_deleted": reviews_deleted,
            },
        )
        return True

    def _forget_books(self, author_id: int, book_ids: list[int]) -> None:
        self.loaders.books_by_author.prime(author_id, [])
        for book_id in book_ids:
            self.loaders.book_by_id.prime(book_id, None)
            self.loaders.reviews_by_book.prime(book_id, [])
