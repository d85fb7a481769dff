"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Price, expiry date and voltage/socket validation
- product_ids: Ordered product id sets for catalogs
- formatters: Plain-text rendering of lookup results

==============================================================================
"""

from .validators import ExpiryDateValidator, PriceValidator, VoltageSocketValidator
from .product_ids import InvalidProductIdError, ProductIdList
from .formatters import format_many, format_single

__all__ = [
    "ExpiryDateValidator",
    "PriceValidator",
    "VoltageSocketValidator",
    "InvalidProductIdError",
    "ProductIdList",
    "format_many",
    "format_single",
]
