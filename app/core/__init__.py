"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

Modules:
--------
- exceptions: AppException class, error factory functions and handlers

Usage:
------
    from app.core import AppException

    # Or use exception factory functions via module
    from app.core import exceptions
    raise exceptions.product_not_found()

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "register_exception_handlers",
]
