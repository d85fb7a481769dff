"""
==============================================================================
Data Access Layer Module
==============================================================================

Entity-level CRUD and existence checks over the Products and Catalogs
collections.

Every public operation is one store round trip (unless noted) wrapped in a
bounded retry: transient store errors (OperationalError) are retried with
exponential backoff, then surfaced as STORE_UNAVAILABLE (503).

Uniqueness:
----------
Documents are keyed by a caller-assigned ``id`` with a unique key in the
store. Callers check existence first for a friendly message; an insert
that still collides (concurrent create) fails cleanly as a conflict.

==============================================================================
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Set, TypeVar

from sqlalchemy import Integer, cast
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core import exceptions
from app.db.models import Catalog, Product
from app.utils.product_ids import ProductIdList


logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataAccessLayer:
    """
    Data access for products and catalogs.

    Attributes:
        _db: Request-scoped store session
        _retry_attempts: Attempts per operation on transient errors
        _retry_backoff: Initial delay between attempts, doubled each retry

    Example:
        >>> dal = DataAccessLayer(session)
        >>> dal.create_product(1, "Milk", "1L", "3", "Fresh", True, expiry, "", "")
        >>> dal.product_exists(1)
        True
    """

    def __init__(
        self,
        db: Session,
        retry_attempts: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self._db = db
        self._retry_attempts = retry_attempts or settings.store_retry_attempts
        self._retry_backoff = (
            settings.store_retry_backoff_seconds if retry_backoff is None else retry_backoff
        )

    # =========================================================================
    # RETRY
    # =========================================================================

    def _run(self, operation: str, action: Callable[[], T]) -> T:
        """
        Run a store operation with bounded retry on transient errors.

        Raises:
            AppException: STORE_UNAVAILABLE once all attempts have failed
        """
        for attempt in range(1, self._retry_attempts + 1):
            try:
                return action()
            except OperationalError as e:
                self._db.rollback()
                logger.warning(
                    f"Store error during {operation} "
                    f"(attempt {attempt}/{self._retry_attempts}): {e}"
                )
                if attempt < self._retry_attempts:
                    time.sleep(self._retry_backoff * (2 ** (attempt - 1)))

        logger.error(f"❌ Store unavailable, giving up on {operation}")
        raise exceptions.store_unavailable(operation)

    def _commit_rowcount(self, statement: Callable[[], int]) -> int:
        count = statement()
        self._db.commit()
        return count

    # =========================================================================
    # PRODUCTS
    # =========================================================================

    def create_product(
        self,
        product_id: int,
        title: str,
        description: str,
        price: str,
        category: str,
        is_active: bool,
        expiry_date: Optional[datetime],
        voltage: str,
        socket: str,
    ) -> None:
        """
        Insert a new product document.

        Raises:
            AppException: PRODUCT_EXISTS if the id is already taken
        """
        product = Product(
            id=product_id,
            title=title,
            description=description,
            price=price,
            category=category,
            is_active=is_active,
            expiry_date=expiry_date,
            voltage=voltage,
            socket=socket,
        )

        def insert() -> None:
            try:
                self._db.add(product)
                self._db.commit()
            except IntegrityError:
                self._db.rollback()
                raise exceptions.product_exists(product_id)

        self._run("create_product", insert)

    def product_exists(self, product_id: int) -> bool:
        return self._run(
            "product_exists",
            lambda: self._db.query(Product.pk).filter(Product.id == product_id).first() is not None,
        )

    def get_product_by_id(self, product_id: int) -> List[Product]:
        return self._run(
            "get_product_by_id",
            lambda: self._db.query(Product).filter(Product.id == product_id).all(),
        )

    def get_product_by_category(self, category: str) -> List[Product]:
        return self._run(
            "get_product_by_category",
            lambda: self._db.query(Product)
            .filter(Product.category == category)
            .order_by(Product.pk)
            .all(),
        )

    def get_product_by_price(self, price_threshold: int) -> List[Product]:
        """Products whose price, compared as a number, is <= the threshold."""
        return self._run(
            "get_product_by_price",
            lambda: self._db.query(Product)
            .filter(cast(Product.price, Integer) <= price_threshold)
            .order_by(Product.pk)
            .all(),
        )

    def get_all_products(self) -> List[Product]:
        return self._run(
            "get_all_products",
            lambda: self._db.query(Product).order_by(Product.pk).all(),
        )

    def find_existing_product_ids(self, product_ids: Iterable[int]) -> Set[int]:
        """Return the subset of ``product_ids`` present in Products."""
        wanted = list(product_ids)
        if not wanted:
            return set()

        rows = self._run(
            "find_existing_product_ids",
            lambda: self._db.query(Product.id).filter(Product.id.in_(wanted)).all(),
        )
        return {row[0] for row in rows}

    def update_product(
        self,
        product_id: int,
        title: str,
        description: str,
        price: str,
        category: str,
        is_active: bool,
        expiry_date: Optional[datetime],
        voltage: str,
        socket: str,
    ) -> bool:
        """
        Overwrite all mutable fields of a product.

        Returns:
            False if no product has this id
        """
        values = {
            Product.title: title,
            Product.description: description,
            Product.price: price,
            Product.category: category,
            Product.is_active: is_active,
            Product.expiry_date: expiry_date,
            Product.voltage: voltage,
            Product.socket: socket,
        }

        updated = self._run(
            "update_product",
            lambda: self._commit_rowcount(
                lambda: self._db.query(Product)
                .filter(Product.id == product_id)
                .update(values, synchronize_session=False)
            ),
        )
        return updated > 0

    def delete_product(self, product_id: int) -> bool:
        """
        Remove a product.

        Returns:
            False if no product has this id
        """
        deleted = self._run(
            "delete_product",
            lambda: self._commit_rowcount(
                lambda: self._db.query(Product)
                .filter(Product.id == product_id)
                .delete(synchronize_session=False)
            ),
        )
        return deleted > 0

    # =========================================================================
    # CATALOGS
    # =========================================================================

    def catalog_exists(self, catalog_id: int) -> bool:
        return self._run(
            "catalog_exists",
            lambda: self._db.query(Catalog.pk).filter(Catalog.id == catalog_id).first() is not None,
        )

    def create_catalog(self, catalog_id: int, title: str, product_ids: ProductIdList) -> None:
        """
        Insert a new catalog document.

        Raises:
            AppException: CATALOG_EXISTS if the id is already taken
        """
        catalog = Catalog(id=catalog_id, title=title, products=product_ids.to_csv())

        def insert() -> None:
            try:
                self._db.add(catalog)
                self._db.commit()
            except IntegrityError:
                self._db.rollback()
                raise exceptions.catalog_exists(catalog_id)

        self._run("create_catalog", insert)

    def get_all_catalogs(self) -> List[Catalog]:
        return self._run(
            "get_all_catalogs",
            lambda: self._db.query(Catalog).order_by(Catalog.pk).all(),
        )

    def get_catalog_by_id(self, catalog_id: int) -> List[Catalog]:
        return self._run(
            "get_catalog_by_id",
            lambda: self._db.query(Catalog).filter(Catalog.id == catalog_id).all(),
        )

    def get_catalogs_by_product_id(self, product_id: int) -> List[Catalog]:
        """
        Catalogs whose product list contains ``product_id``.

        Full scan of the collection; each stored list is parsed and tested
        by integer membership.
        """
        # TODO: move product membership into its own indexed collection once
        # catalogs outgrow a full scan per lookup.
        catalogs = self.get_all_catalogs()
        return [catalog for catalog in catalogs if product_id in catalog.product_ids]

    def update_catalog(self, catalog_id: int, title: str, product_ids: ProductIdList) -> bool:
        """
        Overwrite title and product list of a catalog.

        Returns:
            False if no catalog has this id
        """
        values = {Catalog.title: title, Catalog.products: product_ids.to_csv()}

        updated = self._run(
            "update_catalog",
            lambda: self._commit_rowcount(
                lambda: self._db.query(Catalog)
                .filter(Catalog.id == catalog_id)
                .update(values, synchronize_session=False)
            ),
        )
        return updated > 0

    def delete_catalog(self, catalog_id: int) -> bool:
        """
        Remove a catalog.

        Returns:
            False if no catalog has this id
        """
        deleted = self._run(
            "delete_catalog",
            lambda: self._commit_rowcount(
                lambda: self._db.query(Catalog)
                .filter(Catalog.id == catalog_id)
                .delete(synchronize_session=False)
            ),
        )
        return deleted > 0
