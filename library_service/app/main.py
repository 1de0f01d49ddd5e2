"""FastAPI application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from library_service.app.exception_handlers import configure_exception_handlers
from library_service.app.lifespan import lifespan
from library_service.app.router import setup_routers
from library_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from library_service.infra.stores import StoreRegistry


def create_app(stores: StoreRegistry | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        stores: Pre-built stores to serve instead of the configured ones.
    """
    settings = get_app_settings()

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    if stores is not None:
        app.state.stores = stores

    configure_exception_handlers(app)
    setup_routers(app)
    return app
