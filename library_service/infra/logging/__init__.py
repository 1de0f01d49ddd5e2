"""Logging for the service and the CLI.

Records go through one queue so writing them never blocks the event loop.
Fields bound with ``set_log_context`` or ``log_context`` (the request's
correlation id, the seeding step) are copied onto every record, and JSON
output turns them into top-level keys.

    with log_context(operation="seed", store="books"):
        logger.info("Seeded store", extra={"records": 120})
"""

from library_service.infra.logging.config import configure_logging, setup_logging, shutdown
from library_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    log_context,
    set_log_context,
)
from library_service.infra.logging.formatters import JSONFormatter
from library_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
