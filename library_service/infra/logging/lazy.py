"""Lazy evaluation support for logging.

Debug messages built from callables are only rendered when the level is
enabled, so batch-level debug logging costs nothing in production.
"""

from __future__ import annotations

import logging
from typing import Any


class LazyLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that evaluates callable messages and args on demand.

    Example:
        logger = get_lazy_logger(__name__)
        logger.debug(lambda: f"batch keys: {sorted(keys)}")
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return

        if callable(msg):
            msg = msg()

        if args:
            args = tuple(arg() if callable(arg) else arg for arg in args)

        super().log(level, msg, *args, **kwargs)

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return msg, kwargs


def get_lazy_logger(name: str) -> LazyLoggerAdapter:
    """Return a lazy-evaluating adapter around ``logging.getLogger(name)``."""
    return LazyLoggerAdapter(logging.getLogger(name), {})
