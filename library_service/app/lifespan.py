"""Application lifespan management.

Startup Order:
1. Logging
2. Stores (author, book, review), each waited for with bounded retry

Shutdown Order: Reverse of startup
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from library_service.core.settings import get_app_settings, get_logging_settings
from library_service.infra.logging import clear_log_context, setup_logging
from library_service.infra.logging import shutdown as shutdown_logging
from library_service.infra.stores import close_stores, init_stores

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Stores already placed on ``app.state.stores`` (tests do this) are used
    as they are; otherwise they are built from settings.
    """
    settings = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": settings.service_name, "environment": settings.environment},
    )

    stores = getattr(app.state, "stores", None)
    app.state.stores = await init_stores(stores)

    try:
        yield
    finally:
        await close_stores()
        clear_log_context()
        logger.info("Application stopped", extra={"service": settings.service_name})
        shutdown_logging()
