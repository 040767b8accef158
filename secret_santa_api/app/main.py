"""
Main entrypoint for the Secret Santa API.

This module assembles the FastAPI application: logging, CORS, error
handlers and the versioned routers.  The document store is a
process-wide resource opened on startup and closed on shutdown; it is
kept on ``app.state.store`` for the request dependencies.  Run with::

    uvicorn secret_santa_api.app.main:app --reload

or use ``run.py`` at the project root.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_exception_handlers
from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.db import DocumentStore
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment-derived defaults.
    store : Optional[DocumentStore]
        Store handle to serve from.  When omitted, one is built from
        ``app_settings.database_url``.  The application opens it on
        startup and closes it on shutdown either way.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )
    app.state.store = store or DocumentStore(app_settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(v1_router, prefix=app_settings.api_prefix)

    @app.on_event("startup")
    def open_store() -> None:
        app.state.store.open()
        logger.info("%s %s ready", app_settings.project_name, app_settings.api_version)

    @app.on_event("shutdown")
    def close_store() -> None:
        app.state.store.close()

    return app


# Created at import time so uvicorn can discover it without calling
# create_app manually.
app = create_app()
