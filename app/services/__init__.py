"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing validation and business rules.

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Validation, category rules, id lists
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ DataAccessLayer │  ← Store operations with retry
    └─────────────────┘

Usage:
------
    from app.services import ProductService

    products = ProductService(db_session).get_product_by_category("Fresh")

==============================================================================
"""

from .product_service import ProductService
from .catalog_service import CatalogService

__all__ = [
    "ProductService",
    "CatalogService",
]
