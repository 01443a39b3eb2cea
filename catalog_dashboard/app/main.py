"""
Main entrypoint for the Catalog Dashboard API.

This module assembles the FastAPI application: logging, the error
format, the versioned routers and, when configured, the dashboard's
static files.  ``create_app`` builds the app, which is instantiated at
import time as ``app`` so it can be served with::

    uvicorn catalog_dashboard.app.main:app --reload

Every error response has the shape ``{"error": "<message>"}``.
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.logging_config import setup_logging
from .core.db import init_store
from .api.v1.router import router as v1_router
from .schemas.common import ErrorResponse


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=str(exc.detail)).model_dump(),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=ErrorResponse(error=message).model_dump())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Internal server error").model_dump(),
        )


def mount_dashboard(app: FastAPI, static_dir: str) -> None:
    """Serve the dashboard page at ``/`` and its assets.

    Must run after the API routers are included: the static mount
    matches every path and would otherwise shadow the API.
    """
    directory = Path(static_dir).resolve()
    index_file = directory / "index.html"
    if not index_file.is_file():
        logger.warning("STATIC_DIR %s has no index.html; dashboard page disabled", directory)
        return

    @app.get("/", include_in_schema=False)
    async def dashboard_index() -> FileResponse:
        return FileResponse(index_file)

    app.mount("/", StaticFiles(directory=str(directory)), name="static")


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    register_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.api_prefix)

    if settings.static_dir:
        mount_dashboard(app, settings.static_dir)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Connect to the document database once per process.
        init_store()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
