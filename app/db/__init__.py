"""
==============================================================================
Database Package
==============================================================================

Store infrastructure, collections and data access.

Architecture:
------------
├── database.py     - DatabaseManager class, session factory
├── models.py       - Product and Catalog collections
├── data_access.py  - DataAccessLayer (CRUD, existence checks, retry)
└── init_db.py      - DatabaseInitializer for setup

Usage:
------
    from app.db import DatabaseManager, DataAccessLayer

    with DatabaseManager().session_scope() as session:
        products = DataAccessLayer(session).get_all_products()

==============================================================================
"""

from .database import DatabaseManager, Base, get_db
from .models import Product, Catalog, ProductCategory
from .data_access import DataAccessLayer
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Store management
    "DatabaseManager",
    "Base",
    "get_db",
    # Collections
    "Product",
    "Catalog",
    "ProductCategory",
    # Data access
    "DataAccessLayer",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
