"""
==============================================================================
Catalog Service Module
==============================================================================

Business rules for catalog operations.

Product id lists:
----------------
- Create: de-duplicate, then keep only ids that exist in Products.
  Empty input, or no id surviving the filter, stores an empty list.
- Update: de-duplicate only. Existing products are not re-checked.

The asymmetry between create and update is kept as-is.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core import exceptions
from app.db.data_access import DataAccessLayer
from app.db.models import Catalog
from app.utils.product_ids import InvalidProductIdError, ProductIdList


logger = logging.getLogger(__name__)


class CatalogService:
    """Catalog service: id list handling and delegation to the data layer."""

    def __init__(self, db: Session, dal: Optional[DataAccessLayer] = None) -> None:
        self._dal = dal or DataAccessLayer(db)

    @staticmethod
    def _parse_product_ids(raw: Optional[str]) -> ProductIdList:
        try:
            return ProductIdList.from_csv(raw)
        except InvalidProductIdError as e:
            logger.info(f"Rejected product id list {raw!r}: {e}")
            raise exceptions.invalid_product_ids(e.token)

    def create_catalog(self, catalog_id: int, title: str, products: Optional[str]) -> ProductIdList:
        """
        Create a catalog referencing the existing products among ``products``.

        Returns:
            The stored product id list

        Raises:
            AppException: CATALOG_EXISTS, INVALID_PRODUCT_IDS
        """
        if self._dal.catalog_exists(catalog_id):
            logger.info(f"Catalog with id: {catalog_id} already exists")
            raise exceptions.catalog_exists(catalog_id)

        logger.info(f"Creating new catalog id: {catalog_id}")

        product_ids = self._parse_product_ids(products)
        if product_ids:
            existing = self._dal.find_existing_product_ids(product_ids)
            dropped = [i for i in product_ids if i not in existing]
            if dropped:
                logger.info(f"Catalog {catalog_id}: dropping unknown products {dropped}")
            product_ids = product_ids.retain(existing)

        self._dal.create_catalog(catalog_id, title, product_ids)
        logger.info(f"✅ Catalog created: {catalog_id} ({len(product_ids)} products)")
        return product_ids

    def get_all_catalogs(self) -> List[Catalog]:
        catalogs = self._dal.get_all_catalogs()
        if not catalogs:
            raise exceptions.catalog_not_found("No catalogs been found")
        return catalogs

    def get_catalog_by_id(self, catalog_id: int) -> List[Catalog]:
        catalogs = self._dal.get_catalog_by_id(catalog_id)
        if not catalogs:
            raise exceptions.catalog_not_found("No catalog been found")
        return catalogs

    def get_catalogs_by_product_id(self, product_id: int) -> List[Catalog]:
        catalogs = self._dal.get_catalogs_by_product_id(product_id)
        if not catalogs:
            raise exceptions.catalog_not_found("No catalogs been found")
        return catalogs

    def update_catalog(self, catalog_id: int, title: str, product_ids: Optional[str]) -> None:
        """
        Overwrite title and product list; ids are de-duplicated, not filtered.

        Raises:
            AppException: INVALID_PRODUCT_IDS, CATALOG_NOT_FOUND
        """
        parsed = self._parse_product_ids(product_ids)

        if not self._dal.update_catalog(catalog_id, title, parsed):
            logger.info(f"No catalog {catalog_id} to update")
            raise exceptions.catalog_not_found("No catalog been found for update")

        logger.info(f"✅ Catalog updated: {catalog_id}")

    def delete_catalog(self, catalog_id: int) -> None:
        if not self._dal.delete_catalog(catalog_id):
            logger.info(f"No catalog {catalog_id} to delete")
            raise exceptions.catalog_not_found("No catalog been found for deletion")

        logger.info(f"✅ Catalog deleted: {catalog_id}")
