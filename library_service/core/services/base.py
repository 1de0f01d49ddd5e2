"""Common base for classes that carry business rules."""

from __future__ import annotations

import logging

from library_service.infra.logging import get_lazy_logger


class BaseService:
    """Gives subclasses a logger named after the class.

    ``self.logger`` records business events at INFO and above.
    ``self._lazy`` takes callables for DEBUG output, so messages that list
    every affected id are only built when DEBUG is on:

        self._lazy.debug(lambda: f"cascade touches books {sorted(book_ids)}")
    """

    def __init__(self) -> None:
        name = type(self).__name__
        self.logger = logging.getLogger(name)
        self._lazy = get_lazy_logger(name)
