"""Entry point for the Library Catalog API.

Starts the FastAPI application with Uvicorn.  Host and port are read
from ``API_HOST`` / ``API_PORT`` (see ``core.config``); the database
location comes from ``DATABASE_URL``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from library_catalog_api.app.core.config import settings
from library_catalog_api.app.main import app


async def main() -> None:
    """Serve the catalog API until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Starting %s on %s:%s", settings.project_name, settings.api_host, settings.api_port
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
