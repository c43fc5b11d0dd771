"""
Main entrypoint for the Contact Book API.

This module assembles the FastAPI application, sets up logging, CORS
and error handlers, and includes the API routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``.  Importing the app here makes it easy
to run with uvicorn or another ASGI server, e.g.::

    uvicorn contact_book_api.app.main:app --reload

The application title, version, database location and CORS policy
are provided via ``Settings`` from ``core.config``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path, init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .services.contact_service import ContactService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module‑level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The contact
        service bound to the configured database is available as
        ``app.state.contact_service``.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    db_path = get_database_path(settings.database_url)
    app.state.contact_service = ContactService(db_path)

    origins = settings.cors_origin_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    if settings.cors_permissive:
        logger.info("CORS: allowing any origin")
    else:
        logger.info("CORS: allowing %s", ", ".join(origins))

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file on first run and brings the schema
        # up to date.
        init_db(db_path)
        logger.info("Database ready at %s", db_path)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
