"""Entry point for the Catalog Dashboard server.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``); see ``catalog_dashboard/app/core/config.py`` for the
other settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from catalog_dashboard.app.core.config import settings
from catalog_dashboard.app.main import app


async def run_api() -> None:
    """Serve the dashboard API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


async def main() -> None:
    try:
        await run_api()
    except Exception:
        logging.exception("Dashboard server stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
