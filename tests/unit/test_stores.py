"""Tests for the store adapters against SQLite."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, PropertyMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from library_service.core.exceptions import ConflictException, StoreOperationError

if TYPE_CHECKING:
    from library_service.infra.stores import StoreRegistry


async def test_fetch_by_ids_skips_missing(seeded_stores: StoreRegistry) -> None:
    rows = await seeded_stores.authors.fetch_by_ids([2, 99, 1])

    assert sorted(row.id for row in rows) == [1, 2]


async def test_fetch_by_ids_with_no_keys_does_not_query(seeded_stores: StoreRegistry) -> None:
    with patch.object(seeded_stores.authors, "engine") as engine:
        assert await seeded_stores.authors.fetch_by_ids([]) == []

    engine.connect.assert_not_called()


async def test_fetch_all_orders_by_id(seeded_stores: StoreRegistry) -> None:
    rows = await seeded_stores.books.fetch_all()

    assert [row.id for row in rows] == [1, 2, 3]


async def test_books_by_author_ids(seeded_stores: StoreRegistry) -> None:
    rows = await seeded_stores.books.fetch_by_author_ids([1])

    assert [(row.id, row.author_id) for row in rows] == [(1, 1), (2, 1)]


async def test_author_insert_generates_next_id(seeded_stores: StoreRegistry) -> None:
    row = await seeded_stores.authors.insert({"firstname": "Jane", "lastname": "Austen"})

    assert row.id == 3
    assert row.firstname == "Jane"


async def test_book_insert_with_taken_id_conflicts(seeded_stores: StoreRegistry) -> None:
    with pytest.raises(ConflictException) as exc_info:
        await seeded_stores.books.insert({"id": 1, "author_id": 2, "title": "Dup"})

    assert exc_info.value.field == "id"
    assert await seeded_stores.books.count() == 3


async def test_book_insert_with_explicit_id(seeded_stores: StoreRegistry) -> None:
    row = await seeded_stores.books.insert({"id": 40, "author_id": 2, "title": "The Last Man"})
    generated = await seeded_stores.books.insert({"author_id": 2, "title": "Mathilda"})

    assert row.id == 40
    assert generated.id == 41


async def test_transaction_rolls_back_on_error(seeded_stores: StoreRegistry) -> None:
    books = seeded_stores.books

    with pytest.raises(RuntimeError):
        async with books.transaction() as conn:
            book_ids = await books.ids_for_author(conn, 1)
            await books.delete_ids(conn, book_ids)
            raise RuntimeError("abort")

    assert await books.count() == 3


async def test_review_delete_by_book_ids(seeded_stores: StoreRegistry) -> None:
    deleted = await seeded_stores.reviews.delete_by_book_ids([1])

    assert deleted == 2
    assert [row.id for row in await seeded_stores.reviews.fetch_all()] == [3]


async def test_review_without_comment_is_rejected(seeded_stores: StoreRegistry) -> None:
    with pytest.raises(StoreOperationError):
        await seeded_stores.reviews.insert(
            {"book_id": 1, "reviewername": "Bob", "rating": 4, "comment": None}
        )

    assert await seeded_stores.reviews.count() == 3


async def test_upsert_many_is_idempotent(seeded_stores: StoreRegistry) -> None:
    from tests.conftest import REVIEW_ROWS

    await seeded_stores.reviews.upsert_many(REVIEW_ROWS)

    assert await seeded_stores.reviews.count() == len(REVIEW_ROWS)


async def test_upsert_many_overwrites_by_id(seeded_stores: StoreRegistry) -> None:
    await seeded_stores.reviews.upsert_many(
        [{"id": 1, "book_id": 1, "reviewername": "Bob", "rating": 2, "comment": "meh"}]
    )

    row = await seeded_stores.reviews.fetch_by_id(1)
    assert (row.rating, row.comment) == (2, "meh")


async def test_driver_errors_are_wrapped(seeded_stores: StoreRegistry) -> None:
    failure = OperationalError("SELECT", {}, Exception("database is locked"))

    with patch.object(seeded_stores.reviews, "engine") as engine:
        engine.connect.side_effect = failure
        with pytest.raises(StoreOperationError) as exc_info:
            await seeded_stores.reviews.fetch_all()

    assert exc_info.value.store == "reviews"
    assert exc_info.value.operation == "fetch_all"
    assert exc_info.value.__cause__ is failure


async def test_health_reports_each_store(seeded_stores: StoreRegistry) -> None:
    assert await seeded_stores.health() == {"authors": True, "books": True, "reviews": True}


async def test_postgres_resync_is_locked_and_forward_only(stores: StoreRegistry) -> None:
    conn = AsyncMock()
    authors = stores.authors

    with patch.object(type(authors), "dialect", new_callable=PropertyMock) as dialect:
        dialect.return_value = "postgresql"
        await authors._resync_id_sequence(conn)

    lock, setval = (str(call.args[0]) for call in conn.execute.await_args_list)
    assert "pg_advisory_xact_lock" in lock
    assert "GREATEST" in setval
    assert "pg_sequence_last_value" in setval
    assert conn.execute.await_args_list[0].args[1] == {"table": "authors"}
