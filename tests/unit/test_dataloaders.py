"""Tests for the request-scoped batch loaders."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from library_service.core.exceptions import StoreOperationError
from library_service.features.catalog.models import Author
from library_service.features.graphql.dataloaders import create_dataloaders

if TYPE_CHECKING:
    from library_service.infra.stores import StoreRegistry


async def test_same_tick_loads_issue_one_fetch(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)
    authors = seeded_stores.authors

    with patch.object(authors, "fetch_by_ids", wraps=authors.fetch_by_ids) as spy:
        results = await asyncio.gather(
            loaders.author_by_id.load(2),
            loaders.author_by_id.load(1),
            loaders.author_by_id.load(2),
            loaders.author_by_id.load(99),
        )

    spy.assert_called_once()
    assert list(spy.call_args.args[0]) == [2, 1, 99]
    assert [author.id if author else None for author in results] == ["2", "1", "2", None]


async def test_load_many_keeps_order_and_duplicates(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)
    books = seeded_stores.books

    with patch.object(books, "fetch_by_ids", wraps=books.fetch_by_ids) as spy:
        results = await loaders.book_by_id.load_many([3, 1, 3, 7])

    spy.assert_called_once()
    assert [book.id if book else None for book in results] == ["3", "1", "3", None]


async def test_to_many_edges_return_empty_lists(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)

    by_author = await loaders.books_by_author.load_many([1, 2, 50])
    by_book = await loaders.reviews_by_book.load_many([2, 1])

    assert [[book.id for book in group] for group in by_author] == [["1", "2"], ["3"], []]
    assert [[review.id for review in group] for group in by_book] == [[], ["1", "2"]]


async def test_cached_keys_are_not_refetched(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)
    reviews = seeded_stores.reviews

    with patch.object(reviews, "fetch_by_book_ids", wraps=reviews.fetch_by_book_ids) as spy:
        await loaders.reviews_by_book.load(1)
        await loaders.reviews_by_book.load(1)

    spy.assert_called_once()


async def test_loaders_are_not_shared_between_requests(seeded_stores: StoreRegistry) -> None:
    first = create_dataloaders(seeded_stores)
    second = create_dataloaders(seeded_stores)
    authors = seeded_stores.authors

    with patch.object(authors, "fetch_by_ids", wraps=authors.fetch_by_ids) as spy:
        await first.author_by_id.load(1)
        await second.author_by_id.load(1)

    assert spy.call_count == 2


async def test_prime_replaces_cached_value(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)
    await loaders.author_by_id.load(1)

    loaders.author_by_id.prime(1, None)

    assert await loaders.author_by_id.load(1) is None


async def test_clear_forces_refetch(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)
    primed = Author(id="1", firstname="Stale", lastname="Entry")
    loaders.author_by_id.prime(1, primed)
    assert await loaders.author_by_id.load(1) is primed

    loaders.author_by_id.clear(1)

    reloaded = await loaders.author_by_id.load(1)
    assert reloaded is not None
    assert reloaded.firstname == "Ada"


async def test_clear_of_an_unloaded_key_is_ignored(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)

    loaders.reviews_by_book.clear(2)
    loaders.books_by_author.clear(404)

    assert len(await loaders.reviews_by_book.load(1)) == 2


async def test_batch_failure_fails_every_key_and_is_not_cached(
    seeded_stores: StoreRegistry,
) -> None:
    loaders = create_dataloaders(seeded_stores)
    failure = StoreOperationError("books", "fetch_by_ids", RuntimeError("connection reset"))

    with patch.object(seeded_stores.books, "fetch_by_ids", side_effect=failure):
        results = await asyncio.gather(
            loaders.book_by_id.load(1),
            loaders.book_by_id.load(2),
            return_exceptions=True,
        )

    assert all(isinstance(result, StoreOperationError) for result in results)

    book = await loaders.book_by_id.load(1)
    assert book is not None
    assert book.id == "1"


async def test_batch_failure_propagates_to_single_load(seeded_stores: StoreRegistry) -> None:
    loaders = create_dataloaders(seeded_stores)
    failure = StoreOperationError("reviews", "fetch_by_book_ids", RuntimeError("locked"))

    with (
        patch.object(seeded_stores.reviews, "fetch_by_book_ids", side_effect=failure),
        pytest.raises(StoreOperationError),
    ):
        await loaders.reviews_by_book.load(1)
