"""GraphQL feature module using Strawberry.

Serves the unified read/write graph over the author, book and review stores:
- Query resolvers for single lookups and full listings
- Mutation resolvers with union error payloads
- Request-scoped DataLoaders for relationship fields
"""

from __future__ import annotations

from typing import Any

__all__ = ["create_graphql_router", "schema"]


def __getattr__(name: str) -> Any:
    if name == "create_graphql_router":
        from library_service.features.graphql.router import create_graphql_router

        return create_graphql_router
    if name == "schema":
        from library_service.features.graphql.schema import schema as graphql_schema

        return graphql_schema
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
