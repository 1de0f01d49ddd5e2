"""Request-scoped batch loader shared by every relationship edge.

Wraps Strawberry's ``DataLoader``: every ``load`` issued before the event
loop next yields is collected, duplicate keys are folded into one, and the
distinct keys go to the store in a single bulk fetch. Results are handed back
per key in the order the keys were requested.
"""

from __future__ import annotations

from contextlib import suppress
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from strawberry.dataloader import DataLoader

from library_service.infra.logging import get_lazy_logger
from library_service.infra.metrics.tracking import track_batch

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from library_service.infra.stores import StoreRegistry

_lazy = get_lazy_logger(__name__)


V = TypeVar("V")


class EdgeLoader(Generic[V]):
    """Batch loader for one relationship edge, keyed by store id.

    Subclasses implement :meth:`batch_load`, returning exactly one value per
    key in key order: ``None`` for a missing to-one target, ``[]`` for an
    empty to-many collection.

    A failing batch fails every key in it, and those keys are evicted from
    the cache so a later ``load`` in the same request retries the store.
    """

    name: ClassVar[str]

    def __init__(self, stores: StoreRegistry) -> None:
        self._stores = stores
        self._loader: DataLoader[int, V] = DataLoader(load_fn=self._dispatch)

    async def batch_load(self, keys: Sequence[int]) -> list[V]:
        raise NotImplementedError

    async def _dispatch(self, keys: list[int]) -> list[V]:
        track_batch(self.name, len(keys))
        _lazy.debug(lambda: f"{self.name}: fetching {len(keys)} keys {keys}")
        try:
            return await self.batch_load(keys)
        except Exception:
            self._loader.clear_many(keys)
            raise

    async def load(self, key: int) -> V:
        """Load one key; batched with other loads made in the same tick."""
        return await self._loader.load(key)

    async def load_many(self, keys: Iterable[int]) -> list[V]:
        return await self._loader.load_many(keys)

    def clear(self, key: int) -> None:
        """Drop the cached value for ``key``; a key never loaded is ignored."""
        with suppress(KeyError):
            self._loader.clear(key)

    def prime(self, key: int, value: V) -> None:
        """Cache ``value`` for ``key``, replacing anything already cached."""
        self._loader.prime(key, value, force=True)

    def prime_many(self, values: dict[int, V]) -> None:
        self._loader.prime_many(values, force=True)
