"""
==============================================================================
Database Package
==============================================================================

SQL backend of the catalog.

├── database.py   - DatabaseManager: engine, sessions, schema
├── models.py     - Product table
└── init_db.py    - Startup: tables, connection check, sample data
                    (import shelfspot.db.init_db directly)

==============================================================================
"""

from .database import Base, DatabaseManager, get_database_manager
from .models import Product

__all__ = [
    "Base",
    "DatabaseManager",
    "get_database_manager",
    "Product",
]
