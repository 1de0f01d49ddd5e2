"""Exception handlers for the REST surface (health, metrics)."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from library_service.core.exceptions import AppException

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render an :class:`AppException` as RFC 7807 problem details."""
    logger.warning(
        "Request failed",
        extra={"path": request.url.path, "status_code": exc.status_code, "type": exc.type},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "type": exc.type,
            "title": exc.title,
            "status": exc.status_code,
            "detail": exc.detail,
            "instance": request.url.path,
            **exc.extra,
        },
        media_type="application/problem+json",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
