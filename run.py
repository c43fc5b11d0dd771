"""Entry point for the Contact Book API.

This script starts the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example in Docker,
where you only specify a single Python file to run.

Configuration such as DATABASE_URL, PORT and CORS_ORIGINS is read from
environment variables (see ``contact_book_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from contact_book_api.app.core.config import settings
from contact_book_api.app.main import app


async def run_api() -> None:
    """Serve the API on ``settings.host``:``settings.port``."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
