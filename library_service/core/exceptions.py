"""Application exceptions.

Each class fixes the HTTP status and problem title it maps to (RFC 7807
problem details); instances carry the human-readable ``detail``, an optional
more specific ``type`` and ``extra`` context such as the offending input
``field``.
"""

from __future__ import annotations

from typing import Any, ClassVar


class AppException(Exception):
    """Base class for errors the service raises on purpose.

    Example:
        raise NotFoundException(
            detail="Author 42 not found",
            type="author-not-found",
            extra={"field": "authorId", "author_id": "42"},
        )
    """

    status_code: ClassVar[int] = 500
    title: ClassVar[str] = "Internal Server Error"
    default_type: ClassVar[str] = "about:blank"

    def __init__(
        self,
        detail: str,
        type: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.type = type or self.default_type
        self.extra = dict(extra or {})

    @property
    def field(self) -> str | None:
        """Input field the error refers to, when there is one."""
        value = self.extra.get("field")
        return None if value is None else str(value)


class ValidationException(AppException):
    """Input was rejected before any store was touched."""

    status_code = 422
    title = "Validation Error"
    default_type = "validation-error"


class NotFoundException(AppException):
    """A referenced author or book does not exist in its owning store."""

    status_code = 404
    title = "Not Found"
    default_type = "not-found"


class ConflictException(AppException):
    """A caller-supplied id is already taken."""

    status_code = 409
    title = "Conflict"
    default_type = "conflict"


class ServiceUnavailableException(AppException):
    """A store never answered while the service or the seeder was starting."""

    status_code = 503
    title = "Service Unavailable"
    default_type = "service-unavailable"


class StoreOperationError(AppException):
    """A store call failed while serving a request.

    The driver exception is chained as ``__cause__``; ``store`` and
    ``operation`` say where it happened.

    Example:
        try:
            rows = await conn.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreOperationError("books", "fetch_by_ids", exc) from exc
    """

    status_code = 502
    title = "Store Error"
    default_type = "store-error"

    def __init__(self, store: str, operation: str, error: BaseException) -> None:
        self.store = store
        self.operation = operation
        super().__init__(
            f"{store} store failed during {operation}: {error}",
            extra={"store": store, "operation": operation},
        )


class CrossStoreInconsistencyError(AppException):
    """Books and reviews were deleted but the author row could not be.

    There is no coordinator to undo the committed book-store transaction, so
    the stores stay divergent until someone reconciles them by hand.
    """

    title = "Data Inconsistency"
    default_type = "cross-store-inconsistency"

    def __init__(self, author_id: int, book_ids: list[int], error: BaseException) -> None:
        self.author_id = author_id
        self.book_ids = list(book_ids)
        super().__init__(
            f"Author {author_id} could not be deleted after its books were removed: {error}",
            extra={
                "author_id": str(author_id),
                "book_ids": [str(book_id) for book_id in self.book_ids],
            },
        )


__all__ = [
    "AppException",
    "ConflictException",
    "CrossStoreInconsistencyError",
    "NotFoundException",
    "ServiceUnavailableException",
    "StoreOperationError",
    "ValidationException",
]
