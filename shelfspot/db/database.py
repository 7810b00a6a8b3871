"""
==============================================================================
Catalog Database Module
==============================================================================

Engine and session handling for the SQL catalog backend.

Request Flow:
------------
    GET /api/products
          │
          ▼
    get_catalog_store()  ── DatabaseManager.get_session()
          │                        │
          ▼                        ▼
    SqlCatalogStore(session)   Engine (lazy, pooled)
          │
          ▼
    session.close()  after the response

Nothing connects until the first session is requested; a missing
DATABASE_URL / DB_* configuration raises ConfigurationError at that point.

Pooling:
-------
PostgreSQL uses a bounded pool (DB_POOL_SIZE, DB_MAX_OVERFLOW,
DB_POOL_TIMEOUT) with pre-ping so connections dropped by the server are
replaced transparently. SQLite URLs (local development) skip pooling
options.

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shelfspot.config import get_settings


logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseManager:
    """
    Owner of the catalog engine and session factory.

    The application shares one instance through get_database_manager().

    Example:
        >>> manager = get_database_manager()
        >>> with manager.session_scope() as session:
        ...     SqlCatalogStore(session).count()
    """

    def __init__(self) -> None:
        self._settings = get_settings()
        self._engine: Optional[Engine] = None
        self._sessions: Optional[sessionmaker] = None

    # =========================================================================
    # ENGINE
    # =========================================================================

    @property
    def engine(self) -> Engine:
        """Engine for the configured URL, built on first use."""
        if self._engine is None:
            url = self._settings.require_database_url()
            self._engine = create_engine(url, **self._engine_options(url))
            logger.info(
                f"Catalog database engine created: "
                f"{make_url(url).render_as_string(hide_password=True)}"
            )
        return self._engine

    def _engine_options(self, url: str) -> Dict[str, Any]:
        options: Dict[str, Any] = {"echo": self._settings.debug}

        if make_url(url).get_backend_name() == "sqlite":
            # Sync routes run in FastAPI's threadpool
            options["connect_args"] = {"check_same_thread": False}
            return options

        options.update(
            pool_size=self._settings.db_pool_size,
            max_overflow=self._settings.db_max_overflow,
            pool_timeout=self._settings.db_pool_timeout,
            pool_recycle=1800,
            pool_pre_ping=True,
        )
        return options

    # =========================================================================
    # SESSIONS
    # =========================================================================

    def get_session(self) -> Session:
        """New session; the caller closes it."""
        if self._sessions is None:
            self._sessions = sessionmaker(
                bind=self.engine,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._sessions()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Session committed on success and rolled back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # =========================================================================
    # SCHEMA AND LIFECYCLE
    # =========================================================================

    def create_tables(self) -> None:
        """Create the catalog tables that are missing."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Catalog tables ready")

    def verify_connection(self) -> bool:
        """Round-trip a trivial query; False when the database is unreachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Catalog database unreachable: {e}")
            return False
        return True

    def dispose(self) -> None:
        """Close pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._sessions = None
            logger.info("Catalog database pool closed")


@lru_cache(maxsize=1)
def get_database_manager() -> DatabaseManager:
    """The process-wide DatabaseManager."""
    return DatabaseManager()
