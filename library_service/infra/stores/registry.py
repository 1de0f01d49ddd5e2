"""Process-wide store registry.

The three adapters are built once at startup and shared by every request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from dataclasses import dataclass

from library_service.core.exceptions import ServiceUnavailableException, StoreOperationError
from library_service.core.settings import (
    get_author_store_settings,
    get_book_store_settings,
    get_review_store_settings,
)
from library_service.core.settings.stores import StoreSettingsBase
from library_service.infra.stores.authors import AuthorStore
from library_service.infra.stores.base import BaseStore
from library_service.infra.stores.books import BookStore
from library_service.infra.stores.reviews import ReviewStore
from library_service.utils.retry import Backoff, RetryError, retry

logger = logging.getLogger(__name__)


@dataclass
class StoreRegistry:
    authors: AuthorStore
    books: BookStore
    reviews: ReviewStore

    def __iter__(self) -> Iterator[BaseStore]:
        return iter((self.authors, self.books, self.reviews))

    @classmethod
    def from_settings(
        cls,
        author_settings: StoreSettingsBase | None = None,
        book_settings: StoreSettingsBase | None = None,
        review_settings: StoreSettingsBase | None = None,
    ) -> StoreRegistry:
        return cls(
            authors=AuthorStore.from_settings(author_settings or get_author_store_settings()),
            books=BookStore.from_settings(book_settings or get_book_store_settings()),
            reviews=ReviewStore.from_settings(review_settings or get_review_store_settings()),
        )

    async def create_schemas(self) -> None:
        for store in self:
            await store.create_schema()

    async def health(self) -> dict[str, bool]:
        """Ping every store; a store that fails the ping reports ``False``."""

        async def _check(store: BaseStore) -> bool:
            try:
                await store.ping()
            except StoreOperationError:
                return False
            return True

        results = await asyncio.gather(*(_check(store) for store in self))
        return {store.name: ok for store, ok in zip(self, results, strict=True)}

    async def dispose(self) -> None:
        for store in self:
            await store.dispose()


async def wait_for_store(
    store: BaseStore,
    *,
    attempts: int,
    backoff: Backoff,
    timeout: float | None = None,
) -> None:
    """Block until ``store`` answers ``SELECT 1`` or the retry budget runs out.

    Raises:
        ServiceUnavailableException: The store never answered.
    """

    @retry(
        attempts=attempts,
        backoff=backoff,
        retry_on=(StoreOperationError,),
        give_up_after=timeout,
        name=f"connect_{store.name}",
    )
    async def _ping() -> None:
        await store.ping()

    try:
        await _ping()
    except RetryError as exc:
        raise ServiceUnavailableException(
            detail=f"{store.name} store is unreachable: {exc.last_exception}",
            extra={"store": store.name, "attempts": exc.attempts},
        ) from exc


_registry: StoreRegistry | None = None


def get_store_registry() -> StoreRegistry:
    """Return the registry created by :func:`init_stores`."""
    if _registry is None:
        msg = "Stores are not initialized; call init_stores() first"
        raise RuntimeError(msg)
    return _registry


async def init_stores(registry: StoreRegistry | None = None) -> StoreRegistry:
    """Build the stores and wait until each one answers.

    Only startup retries; request-serving calls fail fast.
    """
    global _registry
    registry = registry or StoreRegistry.from_settings()
    settings_by_store: dict[str, StoreSettingsBase] = {
        "authors": get_author_store_settings(),
        "books": get_book_store_settings(),
        "reviews": get_review_store_settings(),
    }
    try:
        for store in registry:
            settings = settings_by_store[store.name]
            await wait_for_store(
                store,
                attempts=settings.startup_retry_attempts,
                backoff=Backoff(
                    initial=settings.startup_retry_delay,
                    maximum=max(settings.startup_retry_delay, 30.0),
                ),
                timeout=settings.startup_retry_timeout,
            )
            logger.info("Store ready", extra={"store": store.name, "dialect": store.dialect})
    except ServiceUnavailableException:
        await registry.dispose()
        raise
    _registry = registry
    return registry


async def close_stores() -> None:
    global _registry
    if _registry is None:
        return
    await _registry.dispose()
    _registry = None
    logger.info("Stores closed")
