"""Entry point for the Animal Shelter API.

Starts the FastAPI application with Uvicorn.  Host, port, database
path and log level are read from environment variables (see
``animal_shelter_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from animal_shelter_api.app.core.config import settings
from animal_shelter_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("API stopped")


if __name__ == "__main__":
    main()
