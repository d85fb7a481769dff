"""
==============================================================================
Collection Models Module
==============================================================================

ORM models for the two store collections.

Each document is keyed by an application-assigned integer ``id`` (unique),
not by a store-generated identifier.

Collections:
-----------

    ┌─────────────────────────────────────────────────────────────────┐
    │                           Products                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (BIGINT, UNIQUE KEY, caller-assigned)                        │
    │ title (VARCHAR)                                                 │
    │ description (VARCHAR)                                           │
    │ price (VARCHAR, integer text)                                   │
    │ category (VARCHAR: Fresh / Electric)                            │
    │ isactive (BOOLEAN)                                              │
    │ ExpiryDate (DATETIME, NULLABLE)                                 │
    │ voltage (VARCHAR)                                               │
    │ socket (VARCHAR)                                                │
    └─────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────┐
    │                           Catalogs                               │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (BIGINT, UNIQUE KEY, caller-assigned)                        │
    │ title (VARCHAR)                                                 │
    │ products (VARCHAR, comma-joined product ids, soft reference)    │
    └─────────────────────────────────────────────────────────────────┘

==============================================================================
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, Text

from app.config import get_settings
from app.db.database import Base
from app.utils.product_ids import ProductIdList


_settings = get_settings()

# SQLite only autoincrements INTEGER primary keys
_ROW_KEY = BigInteger().with_variant(Integer, "sqlite")


# =============================================================================
# ENUMS
# =============================================================================

class ProductCategory(str, enum.Enum):
    """
    Recognized product categories.

    Matching is case-insensitive; the stored value keeps the caller's spelling.
    """

    FRESH = "Fresh"
    ELECTRIC = "Electric"

    def __str__(self) -> str:
        """Return the enum value as string."""
        return self.value

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[ProductCategory]:
        """Match a raw category case-insensitively, None if unrecognized."""
        if value is None:
            return None
        for category in cls:
            if category.value.lower() == value.strip().lower():
                return category
        return None


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Product document.

    Attributes:
        id: Caller-assigned unique identifier
        title: Display title
        description: Free text description
        price: Integer price kept as text
        category: "Fresh" or "Electric" as given by the caller
        is_active: Active flag (stored as "isactive")
        expiry_date: Expiry date (stored as "ExpiryDate")
        voltage: Rated voltage, e.g. "220"
        socket: Socket type, e.g. "UK"
    """

    __tablename__ = _settings.products_collection

    # Surrogate row key; documents are addressed by ``id``
    pk: int = Column("_id", _ROW_KEY, primary_key=True, autoincrement=True)

    id: int = Column(
        "id",
        BigInteger,
        unique=True,
        nullable=False,
        index=True,
        doc="Caller-assigned product identifier"
    )

    title: str = Column("title", String(255), nullable=False, default="")
    description: str = Column("description", Text, nullable=False, default="")
    price: str = Column("price", String(32), nullable=False)
    category: str = Column("category", String(32), nullable=False, index=True)

    is_active: bool = Column("isactive", Boolean, nullable=False, default=False)
    expiry_date: Optional[datetime] = Column("ExpiryDate", DateTime, nullable=True)

    voltage: str = Column("voltage", String(16), nullable=False, default="")
    socket: str = Column("socket", String(16), nullable=False, default="")

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"Product(id={self.id!r}, "
            f"title={self.title!r}, "
            f"category={self.category!r}, "
            f"price={self.price!r})"
        )


# =============================================================================
# CATALOG MODEL
# =============================================================================

class Catalog(Base):
    """
    Catalog document.

    ``products`` holds the comma-joined id list exactly as stored; use
    ``product_ids`` for membership and iteration.
    """

    __tablename__ = _settings.catalogs_collection

    pk: int = Column("_id", _ROW_KEY, primary_key=True, autoincrement=True)

    id: int = Column(
        "id",
        BigInteger,
        unique=True,
        nullable=False,
        index=True,
        doc="Caller-assigned catalog identifier"
    )

    title: str = Column("title", String(255), nullable=False, default="")
    products: str = Column("products", Text, nullable=False, default="")

    @property
    def product_ids(self) -> ProductIdList:
        """Parsed product id list; malformed stored tokens are skipped."""
        return ProductIdList.from_csv(self.products, strict=False)

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return f"Catalog(id={self.id!r}, title={self.title!r}, products={self.products!r})"
