"""Settings for the GraphQL endpoint that fronts the three stores."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GraphQLIDE = Literal["graphiql", "apollo-sandbox", "pathfinder", False]


class GraphQLSettings(BaseSettings):
    """Where the schema is mounted and how much a single query may ask for.

    Nested author -> books -> reviews -> book -> author chains are legal, so
    the depth limit is what keeps one request from fanning out across every
    store indefinitely.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_PATH=/graphql, GRAPHQL_MAX_QUERY_DEPTH=6, GRAPHQL_GRAPHQL_IDE=false
    """

    enabled: bool = Field(default=True, description="Mount the GraphQL router")
    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="Mount path of the GraphQL router",
    )
    graphql_ide: GraphQLIDE = Field(
        default="graphiql",
        description="In-browser IDE served on GET, or false for none",
    )
    max_query_depth: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Deepest field nesting a query may use",
    )
    introspection_enabled: bool = Field(
        default=True,
        description="Answer __schema/__type queries",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
