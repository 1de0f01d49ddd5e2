"""Run async store work from synchronous click commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Concatenate, ParamSpec, TypeVar

from library_service.infra.stores import StoreRegistry


P = ParamSpec("P")
T = TypeVar("T")


def with_stores(
    func: Callable[Concatenate[StoreRegistry, P], Awaitable[T]],
) -> Callable[P, T]:
    """Run ``func`` on a fresh event loop, passing it the configured stores.

    The registry is built from settings before ``func`` starts and disposed
    before the loop closes, also when ``func`` raises or exits.

    Usage:
        @db.command()
        @with_stores
        async def status(stores: StoreRegistry) -> None:
            ...
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        async def _run() -> T:
            stores = StoreRegistry.from_settings()
            try:
                return await func(stores, *args, **kwargs)
            finally:
                await stores.dispose()

        return asyncio.run(_run())

    return wrapper
