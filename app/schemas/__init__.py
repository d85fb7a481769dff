"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Response schemas using Pydantic.

==============================================================================
"""

from .product import ProductDetail

__all__ = [
    "ProductDetail",
]
