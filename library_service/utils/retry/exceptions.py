"""Errors raised by the retry helpers."""

from __future__ import annotations


class RetryError(Exception):
    """An operation kept failing until its retry budget ran out.

    The last failure is chained as ``__cause__`` and kept on
    ``last_exception``.
    """

    def __init__(
        self,
        operation: str,
        attempts: int,
        elapsed: float,
        last_exception: Exception,
    ) -> None:
        self.operation = operation
        self.attempts = attempts
        self.elapsed = elapsed
        self.last_exception = last_exception
        super().__init__(
            f"{operation} failed after {attempts} attempts in {elapsed:.1f}s: {last_exception}"
        )
