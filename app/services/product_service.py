"""
==============================================================================
Product Service Module
==============================================================================

Business rules for product operations.

This module implements:
- ProductService: validation, category rules, delegation to the data layer

Category Rules (checked at creation only):
-----------------------------------------
- Fresh: expiry date more than FRESH_EXPIRY_THRESHOLD_DAYS whole days away
- Electric: voltage/socket must be a compatible pair (220 ↔ UK/EU, 110 ↔ US)
- Any other category is rejected

Update re-validates the price only.

==============================================================================
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.core import exceptions
from app.db.data_access import DataAccessLayer
from app.db.models import Product, ProductCategory
from app.utils.validators import ExpiryDateValidator, PriceValidator, VoltageSocketValidator


# Module logger
logger = logging.getLogger(__name__)


class ProductService:
    """
    Product service.

    Attributes:
        _dal: DataAccessLayer for store operations
        _clock: Callable returning "now" for expiry checks

    Example:
        >>> service = ProductService(db_session)
        >>> service.create_product(1, "Milk", "1L", "3", "Fresh", True,
        ...                        "12/31/2030", "", "")
        >>> service.get_product_by_id(1)[0].title
        'Milk'
    """

    def __init__(
        self,
        db: Session,
        clock: Optional[Callable[[], datetime]] = None,
        dal: Optional[DataAccessLayer] = None,
    ) -> None:
        """
        Initialize the product service.

        Args:
            db: Request-scoped store session
            clock: Optional "now" provider (defaults to datetime.now)
            dal: Optional DataAccessLayer (built from ``db`` if None)
        """
        self._dal = dal or DataAccessLayer(db)
        self._clock = clock or datetime.now
        self._price_validator = PriceValidator()
        self._expiry_validator = ExpiryDateValidator(get_settings().fresh_expiry_threshold_days)
        self._voltage_validator = VoltageSocketValidator()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _check_price(self, price: Optional[str]) -> None:
        if not self._price_validator.is_valid(price):
            logger.info(f"Rejected price: {price!r}")
            raise exceptions.invalid_price(price)

    def _parse_expiry(self, product_id: int, expiry_date: Optional[str]) -> Optional[datetime]:
        is_valid, parsed, _ = self._expiry_validator.parse(expiry_date)
        if not is_valid:
            logger.info(f"Product id {product_id} expiry date could not be parsed: {expiry_date!r}")
            raise exceptions.invalid_expiry_date(product_id)
        return parsed

    def _check_category_rules(
        self,
        product_id: int,
        category: Optional[str],
        expiry_date: Optional[datetime],
        voltage: str,
        socket: str,
    ) -> None:
        parsed = ProductCategory.parse(category)

        if parsed is ProductCategory.FRESH:
            if not self._expiry_validator.is_far_enough(expiry_date, self._clock()):
                logger.info(
                    f"Product id {product_id} expiry date {expiry_date} is not more than "
                    f"{self._expiry_validator.threshold_days} days away"
                )
                raise exceptions.invalid_expiry_date(product_id)

        elif parsed is ProductCategory.ELECTRIC:
            if not self._voltage_validator.is_valid(voltage, socket):
                logger.info(f"Product id {product_id} voltage does not match socket")
                raise exceptions.voltage_socket_mismatch(product_id, voltage, socket)

        else:
            logger.info(f"Product id {product_id} has unknown category: {category!r}")
            raise exceptions.invalid_category(category)

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def create_product(
        self,
        product_id: int,
        title: str,
        description: str,
        price: str,
        category: str,
        is_active: bool,
        expiry_date: Optional[str],
        voltage: str,
        socket: str,
    ) -> None:
        """
        Create a new product.

        Raises:
            AppException: INVALID_PRICE, PRODUCT_EXISTS, INVALID_EXPIRY_DATE,
                VOLTAGE_SOCKET_MISMATCH or INVALID_CATEGORY
        """
        self._check_price(price)

        if self._dal.product_exists(product_id):
            logger.info(f"Product with id: {product_id} already exists")
            raise exceptions.product_exists(product_id)

        expiry = self._parse_expiry(product_id, expiry_date)
        self._check_category_rules(product_id, category, expiry, voltage, socket)

        logger.info(f"Creating new product id: {product_id}")
        self._dal.create_product(
            product_id, title, description, price, category, is_active, expiry, voltage, socket
        )
        logger.info(f"✅ Product created: {product_id}")

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_product_by_id(self, product_id: int) -> List[Product]:
        """
        Raises:
            AppException: PRODUCT_NOT_FOUND if no product has this id
        """
        products = self._dal.get_product_by_id(product_id)
        if not products:
            raise exceptions.product_not_found("No product been found")
        return products

    def get_product_by_category(self, category: str) -> List[Product]:
        """
        Raises:
            AppException: PRODUCT_NOT_FOUND if the category is empty
        """
        products = self._dal.get_product_by_category(category)
        if not products:
            raise exceptions.product_not_found("No products been found")
        return products

    def get_product_by_price(self, price: str) -> List[Product]:
        """
        Products priced at or below ``price``.

        Raises:
            AppException: INVALID_PRICE if ``price`` is not an integer,
                PRODUCT_NOT_FOUND if nothing matches
        """
        is_valid, threshold, _ = self._price_validator.validate(price)
        if not is_valid:
            raise exceptions.invalid_price(price)

        products = self._dal.get_product_by_price(threshold)
        if not products:
            raise exceptions.product_not_found("No products been found")
        return products

    def get_all_products(self) -> List[Product]:
        """All products, possibly none."""
        return self._dal.get_all_products()

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    def update_product(
        self,
        product_id: int,
        title: str,
        description: str,
        price: str,
        category: str,
        is_active: bool,
        expiry_date: Optional[str],
        voltage: str,
        socket: str,
    ) -> None:
        """
        Overwrite all fields of an existing product.

        Raises:
            AppException: INVALID_PRICE, INVALID_EXPIRY_DATE (unparseable),
                PRODUCT_NOT_FOUND
        """
        self._check_price(price)
        expiry = self._parse_expiry(product_id, expiry_date)

        updated = self._dal.update_product(
            product_id, title, description, price, category, is_active, expiry, voltage, socket
        )
        if not updated:
            logger.info(f"No product {product_id} to update")
            raise exceptions.product_not_found("No product been found for update")

        logger.info(f"✅ Product updated: {product_id}")

    # =========================================================================
    # DELETE OPERATIONS
    # =========================================================================

    def delete_product(self, product_id: int) -> None:
        """
        Raises:
            AppException: PRODUCT_NOT_FOUND if no product has this id
        """
        if not self._dal.delete_product(product_id):
            logger.info(f"No product {product_id} to delete")
            raise exceptions.product_not_found("No product been found for deletion")

        logger.info(f"✅ Product deleted: {product_id}")
