"""
Main entrypoint for the External Links API.

This module assembles the FastAPI application, sets up logging,
registers the JSON error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn external_links_api.app.main:app --reload
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.logging_config import setup_logging
from .core.exceptions import ApiError
from .api.v1.router import router as v1_router
from .core.db import init_db

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    errors: List[Dict[str, Any]],
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Render the common error envelope used by every failing route."""
    return JSONResponse(
        status_code=status_code,
        content={
            "code": status_code,
            "status": HTTPStatus(status_code).phrase,
            "errors": errors,
        },
        headers=headers,
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.error("service err, %s %s: %s", request.method, request.url.path, exc.internal_message)
    return error_response(
        exc.http_status,
        [{"code": exc.code, "internalMessage": exc.internal_message, "userMessage": exc.user_message}],
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and ids are client errors, reported as 400 rather than 422.
    logger.error("request err, %s %s: %s", request.method, request.url.path, exc.errors())
    errors = [
        {
            "code": str(status.HTTP_400_BAD_REQUEST),
            "internalMessage": jsonable_encoder(error),
            "userMessage": error.get("msg", "invalid request"),
        }
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = str(exc.detail)
    return error_response(
        exc.status_code,
        [{"code": str(exc.status_code), "internalMessage": detail, "userMessage": detail}],
        headers=getattr(exc, "headers", None),
    )


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Configures logging, registers exception handlers and includes the
    versioned API routers.  Database migrations run on startup.
    """
    setup_logging(
        settings.log_level,
        settings.log_file or None,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies pending migrations.
        init_db()

    return app


# Create the application instance at import time so that uvicorn can
# discover it without calling create_app manually.
app = create_app()
