"""GraphQL error classification, conversion and logging.

Application exceptions raised below the resolvers are converted into
``GraphQLError`` instances whose ``extensions.code`` tells clients what kind
of failure happened. Every error leaving the schema is logged once, by the
schema's ``process_errors`` hook.
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, TypeVar

from graphql import GraphQLError

from library_service.core.exceptions import (
    AppException,
    ConflictException,
    CrossStoreInconsistencyError,
    NotFoundException,
    StoreOperationError,
    ValidationException,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorCategory",
    "error_category",
    "graphql_error_from_exception",
    "is_user_facing_error",
    "log_error",
    "process_graphql_errors",
    "resolve_or_raise",
]


class ErrorCategory:
    """Values of ``extensions.code``."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    STORE = "STORE_ERROR"
    DATA_INCONSISTENCY = "DATA_INCONSISTENCY"
    DEPTH_LIMIT = "DEPTH_LIMIT_EXCEEDED"
    INTERNAL = "INTERNAL_ERROR"


_EXPECTED = frozenset(
    {
        ErrorCategory.VALIDATION,
        ErrorCategory.NOT_FOUND,
        ErrorCategory.CONFLICT,
        ErrorCategory.DEPTH_LIMIT,
    }
)
_USER_FACING = _EXPECTED | {ErrorCategory.STORE, ErrorCategory.DATA_INCONSISTENCY}


def error_category(exc: AppException) -> str:
    if isinstance(exc, ValidationException):
        return ErrorCategory.VALIDATION
    if isinstance(exc, NotFoundException):
        return ErrorCategory.NOT_FOUND
    if isinstance(exc, ConflictException):
        return ErrorCategory.CONFLICT
    if isinstance(exc, StoreOperationError):
        return ErrorCategory.STORE
    if isinstance(exc, CrossStoreInconsistencyError):
        return ErrorCategory.DATA_INCONSISTENCY
    return ErrorCategory.INTERNAL


def _public_message(exc: AppException) -> str:
    # Driver messages can carry SQL; clients only learn where it failed.
    if isinstance(exc, StoreOperationError):
        return f"The {exc.store} store failed during {exc.operation}"
    if isinstance(exc, CrossStoreInconsistencyError):
        return (
            f"Author {exc.author_id} was not deleted although its books and reviews were; "
            "the stores need manual reconciliation"
        )
    return exc.detail


def graphql_error_from_exception(exc: AppException) -> GraphQLError:
    """Build the ``GraphQLError`` a resolver raises for ``exc``."""
    extensions: dict[str, object] = {"code": error_category(exc)}
    if exc.field:
        extensions["field"] = exc.field
    if isinstance(exc, CrossStoreInconsistencyError):
        extensions["authorId"] = str(exc.author_id)
        extensions["bookIds"] = [str(book_id) for book_id in exc.book_ids]
    return GraphQLError(_public_message(exc), original_error=exc, extensions=extensions)


def is_user_facing_error(error: GraphQLError) -> bool:
    """Whether ``error`` may reach clients unmasked.

    Errors carrying a known code are intentional; so are schema validation
    errors (they have no original exception). Anything else is an unexpected
    exception and gets masked in production.
    """
    code = (error.extensions or {}).get("code")
    if code in _USER_FACING:
        return True
    if code is not None:
        return False
    if error.original_error is None:
        return True
    return "exceeds maximum operation depth" in error.message


def _root_cause(error: GraphQLError) -> BaseException | None:
    original = error.original_error
    while isinstance(original, GraphQLError) and original.original_error is not None:
        original = original.original_error
    return original


def log_error(error: GraphQLError, execution_context: ExecutionContext | None) -> None:
    """Log error with full details for server-side debugging."""
    log_context: dict[str, object] = {
        "error_message": error.message,
        "error_path": error.path,
        "error_code": (error.extensions or {}).get("code"),
    }

    if execution_context is not None:
        if execution_context.operation_name:
            log_context["operation_name"] = execution_context.operation_name
        correlation_id = getattr(execution_context.context, "correlation_id", None)
        if correlation_id:
            log_context["correlation_id"] = correlation_id

    cause = _root_cause(error)
    if cause is not None:
        log_context["exception_type"] = type(cause).__name__
        log_context["exception_message"] = str(cause)

    code = log_context["error_code"]
    if code in _EXPECTED or (code is None and is_user_facing_error(error)):
        logger.info("GraphQL user-facing error", extra=log_context)
        return

    if cause is not None:
        log_context["stack_trace"] = "".join(
            traceback.format_exception(type(cause), cause, cause.__traceback__)
        )
    logger.error("GraphQL operation failed", extra=log_context)


def process_graphql_errors(
    errors: list[GraphQLError],
    execution_context: ExecutionContext | None = None,
) -> None:
    for error in errors:
        log_error(error, execution_context)


T = TypeVar("T")


async def resolve_or_raise(pending: Awaitable[T]) -> T:
    """Await ``pending``, re-raising application exceptions as GraphQL errors."""
    try:
        return await pending
    except AppException as exc:
        raise graphql_error_from_exception(exc) from exc
