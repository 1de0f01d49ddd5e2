"""Strawberry extensions for the GraphQL schema.

Provides:
- Query depth limiting (from GraphQLSettings.max_query_depth)
- Optional introspection lockout
- Masking of unexpected errors in production
"""

from __future__ import annotations

import logging

from strawberry.extensions import (
    DisableIntrospection,
    MaskErrors,
    QueryDepthLimiter,
    SchemaExtension,
)

from library_service.core.settings import get_app_settings, get_graphql_settings
from library_service.features.graphql.error_handler import is_user_facing_error

logger = logging.getLogger(__name__)

MASKED_ERROR_MESSAGE = "An internal error occurred. Please try again later."


def get_extensions() -> list[SchemaExtension | type[SchemaExtension]]:
    """Get list of Strawberry extensions for the schema."""
    settings = get_graphql_settings()
    max_depth = settings.max_query_depth
    extensions: list[SchemaExtension | type[SchemaExtension]] = [
        QueryDepthLimiter(max_depth=max_depth),
    ]
    if not settings.introspection_enabled:
        extensions.append(DisableIntrospection())
    if get_app_settings().is_production:
        extensions.append(
            MaskErrors(
                should_mask_error=lambda error: not is_user_facing_error(error),
                error_message=MASKED_ERROR_MESSAGE,
            )
        )

    logger.debug("GraphQL extensions configured: depth limit=%d", max_depth)
    return extensions


__all__ = ["MASKED_ERROR_MESSAGE", "get_extensions"]
