"""Per-task logging context.

Fields bound here ride along on every record emitted from the same asyncio
task: the GraphQL router binds a correlation id once per request, and every
loader, store and orchestrator line of that request carries it.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

_fields: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**fields: Any) -> None:
    """Bind ``fields`` for the rest of the current task."""
    _fields.set({**_fields.get(), **fields})


def get_log_context() -> dict[str, Any]:
    return dict(_fields.get())


def clear_log_context() -> None:
    _fields.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Bind ``fields`` only inside the ``with`` block.

    Example:
        with log_context(store="books"):
            logger.info("Seeded store")  # record carries store="books"
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)


class ContextInjectingFilter(logging.Filter):
    """Copy bound context fields onto each record.

    Values passed explicitly through ``extra=`` take precedence.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _fields.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
