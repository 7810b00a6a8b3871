"""
==============================================================================
ShelfSpot Catalog API - Application Entry Point
==============================================================================

FastAPI application with:
- REST catalog endpoints (list, create, delete)
- Smart search backed by a text-generation model
- Health checks

Usage:
------
    # Development
    DATABASE_URL=sqlite:///./shelfspot.db uvicorn shelfspot.main:app --reload

    # Production
    uvicorn shelfspot.main:app --host 0.0.0.0 --port 3001

==============================================================================
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelfspot import __version__
from shelfspot.api.router import api_router
from shelfspot.config import ConfigurationError, get_settings
from shelfspot.core.exceptions import register_exception_handlers
from shelfspot.db.database import get_database_manager
from shelfspot.db.init_db import init_db


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    Builds the catalog API and owns its startup/shutdown.

    The catalog backend is prepared in the lifespan hook, not at import,
    so tests can override dependencies before anything touches storage.
    """

    def __init__(self):
        self._settings = get_settings()
        self._app = self._build()

    def _build(self) -> FastAPI:
        app = FastAPI(
            title=self._settings.app_name,
            version=__version__,
            description="Product catalog with smart search",
            lifespan=self._lifespan,
            docs_url=None if self._settings.is_production else "/docs",
            redoc_url=None,
        )

        self._configure_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        self._startup()
        try:
            yield
        finally:
            self._shutdown()

    def _startup(self) -> None:
        """
        Prepare the catalog backend.

        Exits the process when the SQL backend has no connection settings.
        """
        logger.info(f"Starting {self._settings.app_name} ({self._settings.app_env})")

        if not self._settings.database_configured:
            logger.critical(
                "Database connection is not configured. Set DATABASE_URL or "
                "DB_HOST, DB_USER and DB_NAME (or CATALOG_BACKEND=memory)."
            )
            raise SystemExit(1)

        init_db()

        if self._settings.smart_search_enabled:
            logger.info(f"Smart search enabled ({self._settings.gemini_model})")
        else:
            logger.warning("GEMINI_API_KEY not set; smart search requests will return 503")

        logger.info(
            f"Catalog API listening on http://{self._settings.host}:{self._settings.port}/api"
        )

    def _shutdown(self) -> None:
        if not self._settings.uses_memory_store:
            get_database_manager().dispose()
        logger.info("Catalog API stopped")

    def _configure_middleware(self, app: FastAPI) -> None:
        # Browser front-ends call the API cross-origin
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )

    @property
    def app(self) -> FastAPI:
        return self._app


app = Application().app


# ============================================================================
# ENTRY POINT
# ============================================================================

def run() -> None:
    """Console entry point: check configuration, then serve."""
    import uvicorn

    settings = get_settings()

    try:
        if not settings.uses_memory_store:
            settings.require_database_url()
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)

    uvicorn.run(
        "shelfspot.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
