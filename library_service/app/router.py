"""Router registry and setup: GraphQL, health and metrics."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from library_service.core.settings import get_graphql_settings
from library_service.features.graphql.router import create_graphql_router, get_stores
from library_service.infra.metrics import REGISTRY
from library_service.infra.stores import StoreRegistry

if TYPE_CHECKING:
    from fastapi import FastAPI

    from library_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)

observability_router = APIRouter(tags=["observability"])


@observability_router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus scrape endpoint."""
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


@observability_router.get("/health")
async def health(stores: Annotated[StoreRegistry, Depends(get_stores)]) -> JSONResponse:
    """Ping every store; 503 when any of them does not answer."""
    checks = await stores.health()
    healthy = all(checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "healthy" if healthy else "unhealthy", "stores": checks},
    )


def setup_routers(app: FastAPI, graphql_settings: GraphQLSettings | None = None) -> None:
    graphql_settings = graphql_settings or get_graphql_settings()

    app.include_router(observability_router)

    if graphql_settings.enabled:
        app.include_router(create_graphql_router(graphql_settings))
        logger.info("GraphQL endpoint enabled", extra={"path": graphql_settings.path})
