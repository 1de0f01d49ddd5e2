"""Store adapters for the author, book and review stores."""

from library_service.infra.stores.authors import AuthorStore
from library_service.infra.stores.base import BaseStore
from library_service.infra.stores.books import BookStore
from library_service.infra.stores.registry import (
    StoreRegistry,
    close_stores,
    get_store_registry,
    init_stores,
    wait_for_store,
)
from library_service.infra.stores.reviews import ReviewStore

__all__ = [
    "AuthorStore",
    "BaseStore",
    "BookStore",
    "ReviewStore",
    "StoreRegistry",
    "close_stores",
    "get_store_registry",
    "init_stores",
    "wait_for_store",
]
