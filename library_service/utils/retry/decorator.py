from __future__ import annotations

import asyncio
import logging
import time
from functools import wraps
from typing import TYPE_CHECKING, ParamSpec, TypeVar

from library_service.infra.metrics.tracking import track_retry_attempt, track_retry_exhausted

from .exceptions import RetryError
from .strategies import Backoff

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


P = ParamSpec("P")
R = TypeVar("R")


def retry(
    *,
    attempts: int = 3,
    backoff: Backoff | None = None,
    retry_on: tuple[type[Exception], ...] = (Exception,),
    give_up_after: float | None = None,
    name: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Retry an async callable while it raises one of ``retry_on``.

    Only meant for startup-adjacent paths (waiting for a store to accept
    connections); request-serving code never retries store calls.

    Args:
        attempts: Total calls, including the first.
        backoff: Delay schedule between calls (default: exponential with jitter).
        retry_on: Exception types that trigger another attempt; others propagate.
        give_up_after: Stop retrying once this many seconds have passed.
        name: Operation name for logs and metrics (defaults to the function name).

    Raises:
        RetryError: The last attempt failed or ``give_up_after`` elapsed.
    """
    schedule = backoff or Backoff()

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation = name or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            started = time.monotonic()
            attempt = 0
            while True:
                attempt += 1
                try:
                    return await func(*args, **kwargs)
                except retry_on as exc:
                    elapsed = time.monotonic() - started
                    out_of_time = give_up_after is not None and elapsed >= give_up_after
                    if attempt >= attempts or out_of_time:
                        track_retry_exhausted(operation)
                        logger.error(
                            "Giving up on %s after %d attempts",
                            operation,
                            attempt,
                            extra={
                                "operation": operation,
                                "attempts": attempt,
                                "elapsed": round(elapsed, 3),
                                "last_exception": str(exc),
                            },
                        )
                        raise RetryError(operation, attempt, elapsed, exc) from exc

                    delay = schedule.delay(attempt - 1)
                    track_retry_attempt(operation)
                    logger.warning(
                        "Retrying %s in %.2fs (attempt %d/%d): %s",
                        operation,
                        delay,
                        attempt,
                        attempts,
                        exc,
                        extra={"operation": operation, "attempt": attempt},
                    )
                    await asyncio.sleep(delay)

        return wrapper

    return decorator
