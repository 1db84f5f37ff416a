"""
Main entrypoint for the Library Catalog API.

This module assembles the FastAPI application: it sets up logging,
registers the exception handlers that turn failures into error
envelopes and includes the versioned routers.  ``create_app`` builds
the app, which is then instantiated at import time as ``app`` so it
can be served directly, e.g.::

    uvicorn library_catalog_api.app.main:app --reload
"""

import logging
import sqlite3
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import get_connection, init_db
from .core.exceptions import BookError
from .core.logging_config import setup_logging
from .core.responses import error_json_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Creates the database file if needed and applies pending migrations.
    init_db()
    yield


def _field_errors(exc: RequestValidationError) -> Dict[str, str]:
    """Collapse pydantic errors into a field name -> message mapping."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "request"
        message = error.get("msg", "Invalid value")
        errors[field] = f"{errors[field]}, {message}" if field in errors else message
    return errors


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    @app.exception_handler(BookError)
    async def book_error_handler(request: Request, exc: BookError):
        return error_json_response(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = _field_errors(exc)
        logger.error("Request validation failed for %s: %s", request.url.path, errors)
        return error_json_response(errors, 400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_json_response("Internal server error", 500)

    @app.get("/health")
    async def health() -> dict:
        """Lightweight liveness probe with a quick database check."""
        db_ok = True
        try:
            conn = get_connection()
            try:
                conn.execute("SELECT 1")
            finally:
                conn.close()
        except sqlite3.Error:
            db_ok = False
        return {"status": "healthy", "timestamp": datetime.now().isoformat(), "db": db_ok}

    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
