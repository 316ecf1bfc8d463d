"""Entry point for serving the Location Share API.

Host, port and log level come from the application settings (``HOST``,
``PORT`` and ``LOG_LEVEL`` environment variables, optionally loaded
from ``.env.<APP_ENV>``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from location_share_api.app.core.config import settings
from location_share_api.app.main import app


logger = logging.getLogger(__name__)


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logger.info("Listening on %s:%s...", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
