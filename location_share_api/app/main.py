"""
Main entrypoint for the Location Share API.

This module assembles the FastAPI application: logging, the MongoDB
client lifecycle, error rendering and the API routers.  ``create_app``
builds and configures the app, which is then instantiated at module
import time as ``app``, so it can be served directly, e.g.::

    uvicorn location_share_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.router import router as api_router
from .core.config import settings
from .core.db import close_db, init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared MongoDB client on startup and close it on shutdown."""
    logger.info("Starting %s in %s mode", settings.project_name, settings.environment)
    init_db()
    yield
    close_db()


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
