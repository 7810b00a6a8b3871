"""
==============================================================================
Database Initialization Module
==============================================================================

Catalog initialization run at application startup.

Initialization Flow:
-------------------
1. SQL backend: create tables and verify the connection
2. Seed the demo catalog into an empty store (SEED_SAMPLE_PRODUCTS)

Usage:
------
    from shelfspot.db.init_db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from shelfspot.catalog.samples import seed_store
from shelfspot.catalog.sql_store import SqlCatalogStore
from shelfspot.catalog.store import get_memory_store
from shelfspot.config import get_settings
from shelfspot.db.database import DatabaseManager, get_database_manager


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Catalog storage initialization manager.

    Attributes:
        _db_manager: DatabaseManager instance (SQL backend only)
        _settings: Application settings

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._settings = get_settings()
        self._db_manager = db_manager

    @property
    def db_manager(self) -> DatabaseManager:
        """DatabaseManager in use; the shared one unless injected."""
        if self._db_manager is None:
            self._db_manager = get_database_manager()
        return self._db_manager

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create the catalog tables if they don't exist."""
        logger.info("Creating database tables...")
        self.db_manager.create_tables()

    # =========================================================================
    # SEEDING
    # =========================================================================

    def seed_sample_products(self) -> int:
        """
        Insert the demo catalog into an empty store.

        Returns:
            Number of products inserted
        """
        if self._settings.uses_memory_store:
            return seed_store(get_memory_store())

        with self.db_manager.session_scope() as session:
            return seed_store(SqlCatalogStore(session))

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """
        Prepare the configured catalog backend.

        Raises:
            ConfigurationError: If the SQL backend has no connection settings
        """
        logger.info("=" * 60)
        logger.info(f"Initializing catalog ({self._settings.catalog_backend} backend)...")

        if not self._settings.uses_memory_store:
            self.create_tables()

            if self.db_manager.verify_connection():
                logger.info("Database connection verified")
            else:
                logger.warning("Database connection check failed")

        if self._settings.seed_sample_products:
            self.seed_sample_products()

        logger.info("Catalog initialization complete")
        logger.info("=" * 60)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def init_db() -> None:
    """Initialize the catalog backend (application startup)."""
    DatabaseInitializer().initialize()
