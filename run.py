"""Entry point for the makeup store backend.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you only
specify a single Python file to run.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3000``), the data file from
``DATA_FILE``.  See :mod:`makeup_store_api.app.core.config` for the
full list.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from makeup_store_api.app.core.config import settings
from makeup_store_api.app.main import app


async def run_api() -> None:
    """Serve the store API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info(
        "Store API available at http://localhost:%s%s", settings.port, settings.api_prefix
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass
