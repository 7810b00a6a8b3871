"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM model for the product catalog.

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (VARCHAR(36), PK, UUID)                                      │
    │ name (VARCHAR, NOT NULL)                                        │
    │ price (NUMERIC(10,2), NOT NULL)                                 │
    │ description (TEXT, NOT NULL)                                    │
    │ image_url (VARCHAR, NULLABLE)                                   │
    │ display_hint (VARCHAR, NULLABLE)                                │
    │ created_at (DATETIME, INDEXED, DEFAULT now)                     │
    └─────────────────────────────────────────────────────────────────┘

Rows are inserted and deleted, never updated.

=============================================================================
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, DateTime, Numeric, String, Text, func

from shelfspot.db.database import Base


class Product(Base):
    """
    Product row.

    Attributes:
        id: Unique identifier (UUID)
        name: Display name
        price: Unit price with two decimal places
        description: Free-text description
        image_url: Explicit or placeholder image URL
        display_hint: Short keyword pair seeding placeholder images
        created_at: Insertion timestamp (UTC), drives list ordering
    """

    __tablename__ = "products"

    id: str = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="Unique product identifier (UUID)"
    )

    name: str = Column(String(255), nullable=False, doc="Product name")

    price: Decimal = Column(
        Numeric(10, 2),
        nullable=False,
        doc="Unit price"
    )

    description: str = Column(Text, nullable=False, doc="Product description")

    image_url: Optional[str] = Column(
        String(2048),
        nullable=True,
        doc="Image URL (placeholder when not supplied)"
    )

    display_hint: Optional[str] = Column(
        String(100),
        nullable=True,
        doc="Keywords seeding placeholder image generation"
    )

    created_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        index=True,
        doc="Creation timestamp"
    )

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id!r}, "
            f"name={self.name!r}, "
            f"price={self.price!s})"
        )
