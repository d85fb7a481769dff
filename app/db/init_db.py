"""
==============================================================================
Store Initialization Module
==============================================================================

Creates the Products and Catalogs collections at startup.

Initialization Flow:
-------------------
1. Verify the store is reachable
2. Create missing collections (idempotent)
3. Log the per-collection document counts

Usage:
------
    from app.db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from app.db.database import DatabaseManager
from app.db.models import Catalog, Product


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Store initialization manager.

    Attributes:
        _db_manager: DatabaseManager instance

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._db_manager = db_manager or DatabaseManager()

    def create_tables(self) -> None:
        """Create all collections (only those that don't exist yet)."""
        logger.info("Creating collections...")
        self._db_manager.create_tables()
        logger.info("✅ Collections ready")

    def get_counts(self) -> Dict[str, int]:
        """Document count per collection."""
        with self._db_manager.session_scope() as session:
            return {
                Product.__tablename__: session.query(Product).count(),
                Catalog.__tablename__: session.query(Catalog).count(),
            }

    def initialize(self) -> None:
        """
        Run the full initialization sequence.

        Raises:
            RuntimeError: If the store cannot be reached
        """
        if not self._db_manager.verify_connection():
            raise RuntimeError(f"Store is not reachable: {self._db_manager!r}")

        self.create_tables()

        for name, count in self.get_counts().items():
            logger.info(f"📦 {name}: {count} documents")


def init_db() -> None:
    """Initialize the store with default settings."""
    DatabaseInitializer().initialize()
