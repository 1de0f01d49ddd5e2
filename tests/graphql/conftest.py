"""GraphQL test fixtures.

Provides:
- A GraphQLContext over the SQLite-backed stores, as the router builds it
- Query and mutation documents shared by the test modules
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from library_service.features.graphql.context import GraphQLContext

if TYPE_CHECKING:
    from library_service.features.catalog.service import MutationOrchestrator
    from library_service.features.graphql.dataloaders import DataLoaders
    from library_service.infra.stores import StoreRegistry

AUTHOR_QUERY = """
    query GetAuthor($id: ID!) {
        author(id: $id) {
            id
            firstname
            lastname
            birthdate
            favoriteColor
            dateCreated
            books {
                id
                title
                reviews { id rating reviewerName }
            }
        }
    }
"""

BOOK_QUERY = """
    query GetBook($id: ID!) {
        book(id: $id) {
            id
            title
            authorId
            publicationDate
            author { id firstname }
            reviews { id rating comment book { id } }
        }
    }
"""

LIBRARY_QUERY = """
    query Library {
        authors { id lastname books { id } }
        books { id title author { lastname } }
        reviews { id bookId book { title } }
    }
"""

CREATE_AUTHOR_MUTATION = """
    mutation CreateAuthor($input: CreateAuthorInput!) {
        createAuthor(input: $input) {
            __typename
            ... on AuthorSuccess { author { id firstname lastname dateCreated books { id } } }
            ... on MutationError { code message field }
        }
    }
"""

CREATE_BOOK_MUTATION = """
    mutation CreateBook($input: CreateBookInput!, $id: ID) {
        createBook(input: $input, id: $id) {
            __typename
            ... on BookSuccess { book { id title authorId author { firstname } } }
            ... on MutationError { code message field }
        }
    }
"""

CREATE_REVIEW_MUTATION = """
    mutation CreateReview($bookId: ID!, $reviewerName: String!, $rating: Int!, $comment: String!) {
        createReview(
            bookId: $bookId
            reviewerName: $reviewerName
            rating: $rating
            comment: $comment
        ) {
            __typename
            ... on ReviewSuccess { review { id rating bookId book { title } } }
            ... on MutationError { code message field }
        }
    }
"""

DELETE_AUTHOR_MUTATION = """
    mutation DeleteAuthor($id: ID!) {
        deleteAuthor(id: $id)
    }
"""


@pytest.fixture
def graphql_context(
    stores: StoreRegistry,
    loaders: DataLoaders,
    orchestrator: MutationOrchestrator,
) -> GraphQLContext:
    return GraphQLContext(
        stores=stores,
        loaders=loaders,
        orchestrator=orchestrator,
        correlation_id="test-correlation-id",
    )
