"""GraphQL schema assembly.

Combines Query and Mutation into a single schema with the configured
extensions. Errors are logged by ``process_errors`` before they are returned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import strawberry

from library_service.features.graphql.error_handler import process_graphql_errors
from library_service.features.graphql.extensions import get_extensions
from library_service.features.graphql.resolvers.mutations import Mutation
from library_service.features.graphql.resolvers.queries import Query

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)


class LibrarySchema(strawberry.Schema):
    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        process_graphql_errors(errors, execution_context)


def create_schema() -> LibrarySchema:
    return LibrarySchema(query=Query, mutation=Mutation, extensions=get_extensions())


schema = create_schema()

logger.debug("GraphQL schema created")

__all__ = ["LibrarySchema", "create_schema", "schema"]
