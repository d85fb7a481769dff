"""
==============================================================================
API v1 Endpoints
==============================================================================

Routers:
--------
- health: Health check endpoints
- products: Product CRUD
- catalogs: Catalog CRUD

==============================================================================
"""

from . import health, products, catalogs

__all__ = ["health", "products", "catalogs"]
