"""Bounded retry with backoff for store connection waits."""

from __future__ import annotations

from library_service.utils.retry.decorator import retry
from library_service.utils.retry.exceptions import RetryError
from library_service.utils.retry.strategies import Backoff

__all__ = ["Backoff", "RetryError", "retry"]
