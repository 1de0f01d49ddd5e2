"""HTTP-level tests for the FastAPI application."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from library_service.app.main import create_app
from library_service.core.exceptions import StoreOperationError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from library_service.infra.stores import StoreRegistry

pytestmark = pytest.mark.integration

CREATE_AUTHOR = """
    mutation ($input: CreateAuthorInput!) {
        createAuthor(input: $input) {
            ... on AuthorSuccess { author { id books { id } } }
            ... on MutationError { code message }
        }
    }
"""

CREATE_BOOK = """
    mutation ($input: CreateBookInput!) {
        createBook(input: $input) {
            ... on BookSuccess { book { id author { firstname } } }
            ... on MutationError { code message }
        }
    }
"""

CREATE_REVIEW = """
    mutation ($bookId: ID!) {
        createReview(bookId: $bookId, reviewerName: "Bob", rating: 5, comment: "great") {
            __typename
            ... on ReviewSuccess { review { book { title } } }
            ... on MutationError { code message }
        }
    }
"""

DELETE_AUTHOR = """
    mutation ($id: ID!) { deleteAuthor(id: $id) }
"""


@pytest.fixture
async def client(seeded_stores: StoreRegistry) -> AsyncIterator[AsyncClient]:
    app = create_app(stores=seeded_stores)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


async def test_health_reports_every_store(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "stores": {"authors": True, "books": True, "reviews": True},
    }


async def test_health_degrades_when_a_store_is_down(
    client: AsyncClient,
    seeded_stores: StoreRegistry,
) -> None:
    failure = StoreOperationError("books", "ping", ConnectionRefusedError("refused"))

    with patch.object(seeded_stores.books, "ping", side_effect=failure):
        response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["stores"]["books"] is False


async def test_graphql_post(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": '{ book(id: "1") { title author { lastname } reviews { rating } } }'},
    )

    assert response.status_code == 200
    assert response.json() == {
        "data": {
            "book": {
                "title": "Notes on the Analytical Engine",
                "author": {"lastname": "Lovelace"},
                "reviews": [{"rating": 5}, {"rating": 3}],
            }
        }
    }


async def test_correlation_id_is_echoed(client: AsyncClient) -> None:
    response = await client.post(
        "/graphql",
        json={"query": "{ authors { id } }"},
        headers={"x-correlation-id": "req-42"},
    )

    assert response.headers["x-correlation-id"] == "req-42"


async def test_loader_cache_does_not_leak_between_requests(
    client: AsyncClient,
    seeded_stores: StoreRegistry,
) -> None:
    query = {"query": '{ author(id: "2") { books { title } } }'}
    first = await client.post("/graphql", json=query)
    await seeded_stores.books.upsert_many(
        [
            {
                "id": 8,
                "author_id": 2,
                "title": "The Last Man",
                "synopsis": None,
                "isbn": None,
                "publicationdate": None,
            }
        ]
    )
    second = await client.post("/graphql", json=query)

    assert len(first.json()["data"]["author"]["books"]) == 1
    assert [b["title"] for b in second.json()["data"]["author"]["books"]] == [
        "Frankenstein",
        "The Last Man",
    ]


async def test_metrics_after_a_query(client: AsyncClient) -> None:
    await client.post("/graphql", json={"query": "{ authors { books { id } } }"})

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert 'dataloader_batches_total{loader="books_by_author"}' in response.text
    assert "store_operation_duration_seconds" in response.text


async def test_graphql_path_is_served_without_redirect(client: AsyncClient) -> None:
    response = await client.post("/graphql", json={"query": "{ authors { id } }"})

    assert response.status_code == 200
    assert "location" not in response.headers


async def test_create_and_delete_lifecycle(stores: StoreRegistry) -> None:
    app = create_app(stores=stores)
    transport = ASGITransport(app=app)

    async def run(client: AsyncClient, query: str, **variables: object) -> dict:
        response = await client.post("/graphql", json={"query": query, "variables": variables})
        assert response.status_code == 200
        body = response.json()
        assert "errors" not in body, body
        return body["data"]

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        author = await run(
            client,
            CREATE_AUTHOR,
            input={"firstname": "Ada", "lastname": "Lovelace"},
        )
        book = await run(client, CREATE_BOOK, input={"authorId": "1", "title": "Notes"})
        review = await run(client, CREATE_REVIEW, bookId="1")
        deleted = await run(client, DELETE_AUTHOR, id="1")
        after = await run(client, '{ book(id: "1") { id } reviews { id } }')

    assert author["createAuthor"]["author"]["id"] == "1"
    assert author["createAuthor"]["author"]["books"] == []
    assert book["createBook"]["book"]["id"] == "1"
    assert book["createBook"]["book"]["author"] == {"firstname": "Ada"}
    assert review["createReview"]["__typename"] == "ReviewSuccess"
    assert review["createReview"]["review"]["book"] == {"title": "Notes"}
    assert deleted == {"deleteAuthor": True}
    assert after == {"book": None, "reviews": []}
