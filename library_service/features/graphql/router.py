"""GraphQL router for FastAPI integration.

Provides:
- GraphQL endpoint at exactly GraphQLSettings.path (no trailing-slash redirect)
- GraphQL IDE on GET, when enabled
- Request context with stores, fresh DataLoaders and the orchestrator
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Annotated, Any, cast

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from strawberry.fastapi import GraphQLRouter

from library_service.core.settings import get_graphql_settings
from library_service.features.catalog.service import MutationOrchestrator
from library_service.features.graphql.context import GraphQLContext
from library_service.features.graphql.dataloaders import create_dataloaders
from library_service.features.graphql.schema import schema
from library_service.infra.logging import set_log_context
from library_service.infra.stores import StoreRegistry

if TYPE_CHECKING:
    from library_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "x-correlation-id"


def get_stores(request: Request) -> StoreRegistry:
    """Store registry attached to the app at startup."""
    return request.app.state.stores


async def get_graphql_context(
    request: Request,
    response: Response,
    background_tasks: BackgroundTasks,
    stores: Annotated[StoreRegistry, Depends(get_stores)],
) -> GraphQLContext:
    """Create GraphQL context from FastAPI dependencies.

    Every request gets new loaders (so no cache survives between requests)
    and an orchestrator bound to them.
    """
    correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex
    set_log_context(correlation_id=correlation_id)
    response.headers[CORRELATION_HEADER] = correlation_id

    loaders = create_dataloaders(stores)
    return GraphQLContext(
        request=request,
        response=response,
        background_tasks=background_tasks,
        stores=stores,
        loaders=loaders,
        orchestrator=MutationOrchestrator(stores, loaders),
        correlation_id=correlation_id,
    )


def create_graphql_router(settings: GraphQLSettings | None = None) -> APIRouter:
    """Create the GraphQL router, serving exactly ``settings.path``."""
    settings = settings or get_graphql_settings()

    router = GraphQLRouter(
        schema,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=settings.graphql_ide or None,
        path=settings.path,
    )
    logger.debug(
        "GraphQL router created",
        extra={"path": settings.path, "graphql_ide": settings.graphql_ide},
    )
    return router


__all__ = ["create_graphql_router", "get_graphql_context", "get_stores"]
