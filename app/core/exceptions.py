"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
Error responses are a short plain-text message with the matching status code.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse


logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Usage:
        raise AppException("price is invalid", "INVALID_PRICE", 400)
        raise exceptions.product_not_found()

    Error Codes:
        Validation:
            - INVALID_PRICE (400)
            - INVALID_CATEGORY (400)
            - INVALID_EXPIRY_DATE (400)
            - VOLTAGE_SOCKET_MISMATCH (400)
            - INVALID_PRODUCT_IDS (400)
            - VALIDATION_ERROR (400)

        Conflict:
            - PRODUCT_EXISTS (400)
            - CATALOG_EXISTS (400)

        Not found:
            - PRODUCT_NOT_FOUND (404)
            - CATALOG_NOT_FOUND (404)

        Store:
            - STORE_UNAVAILABLE (503)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message (sent as the response body)
            code: Machine-readable error code, used in logs
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional, logged only)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        error_dict = {
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "timestamp": self.timestamp
        }

        if self.details:
            error_dict["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> PlainTextResponse:
    """Convert AppException to a plain-text error response."""
    logger.info(f"{request.url.path} rejected: {exc.to_dict()}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> PlainTextResponse:
    """Report malformed or missing query parameters as a 400."""
    fields = []
    for error in exc.errors():
        location = error.get("loc", ())
        if location:
            fields.append(str(location[-1]))

    message = f"{', '.join(fields)} is invalid" if fields else "Request is invalid"
    logger.info(f"{request.url.path} rejected: VALIDATION_ERROR {exc.errors()}")
    return PlainTextResponse(message, status_code=400)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_price(price: Optional[str] = None) -> AppException:
    """Create invalid price exception."""
    details = {"price": price} if price is not None else {}
    return AppException("price is invalid", "INVALID_PRICE", 400, details)


def missing_parameter(name: str) -> AppException:
    """Create missing query parameter exception."""
    return AppException(f"{name} is invalid", "VALIDATION_ERROR", 400, {"parameter": name})


def invalid_category(category: Optional[str] = None) -> AppException:
    """Create invalid category exception."""
    details = {"category": category} if category is not None else {}
    return AppException("Not valid category", "INVALID_CATEGORY", 400, details)


def invalid_expiry_date(product_id: int) -> AppException:
    """Create invalid expiry date exception."""
    return AppException(
        f"Product id {product_id} expiry date is not valid",
        "INVALID_EXPIRY_DATE",
        400,
        {"product_id": product_id}
    )


def voltage_socket_mismatch(product_id: int, voltage: str, socket: str) -> AppException:
    """Create voltage/socket mismatch exception."""
    return AppException(
        f"Product id {product_id} voltage does not match socket",
        "VOLTAGE_SOCKET_MISMATCH",
        400,
        {"product_id": product_id, "voltage": voltage, "socket": socket}
    )


def invalid_product_ids(token: str) -> AppException:
    """Create invalid product id list exception."""
    return AppException(
        f"Product id '{token}' is not valid",
        "INVALID_PRODUCT_IDS",
        400,
        {"token": token}
    )


def product_exists(product_id: int) -> AppException:
    """Create product already exists exception."""
    return AppException(
        f"Product with id: {product_id} already exists",
        "PRODUCT_EXISTS",
        400,
        {"product_id": product_id}
    )


def catalog_exists(catalog_id: int) -> AppException:
    """Create catalog already exists exception."""
    return AppException(
        f"Catalog with id: {catalog_id} already exists",
        "CATALOG_EXISTS",
        400,
        {"catalog_id": catalog_id}
    )


def product_not_found(message: str = "No product been found") -> AppException:
    """Create product not found exception."""
    return AppException(message, "PRODUCT_NOT_FOUND", 404)


def catalog_not_found(message: str = "No catalog been found") -> AppException:
    """Create catalog not found exception."""
    return AppException(message, "CATALOG_NOT_FOUND", 404)


def store_unavailable(operation: str) -> AppException:
    """Create store unavailable exception."""
    return AppException(
        "Store is unavailable, try again later",
        "STORE_UNAVAILABLE",
        503,
        {"operation": operation}
    )
