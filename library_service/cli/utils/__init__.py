"""CLI helpers: store-aware async runner and terminal output."""

from library_service.cli.utils.formatters import error, header, info, store_line, success, warning
from library_service.cli.utils.runner import with_stores

__all__ = [
    "error",
    "header",
    "info",
    "store_line",
    "success",
    "warning",
    "with_stores",
]
