"""Entry point for the Secret Santa API.

Starts the FastAPI application under Uvicorn.  Host, port and the rest
of the configuration come from environment variables (see
``secret_santa_api/app/core/config.py``); ``HOST`` and ``PORT`` default
to ``0.0.0.0`` and ``80``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from secret_santa_api.app.core.config import settings
from secret_santa_api.app.main import app


async def run_api() -> None:
    """Serve the API until the process is interrupted."""
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
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Shutting down")


if __name__ == "__main__":
    main()
