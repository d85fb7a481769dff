"""
==============================================================================
Service Tests
==============================================================================

Tests for product and catalog business rules, run against the test store.

==============================================================================
"""

import logging
from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from app.core.exceptions import AppException
from app.db.data_access import DataAccessLayer
from app.services import CatalogService, ProductService


NOW = datetime(2030, 1, 1, 12, 0, 0)


@pytest.fixture
def products(db: Session, dal: DataAccessLayer) -> ProductService:
    return ProductService(db, clock=lambda: NOW, dal=dal)


@pytest.fixture
def catalogs(db: Session, dal: DataAccessLayer) -> CatalogService:
    return CatalogService(db, dal=dal)


def create_fresh(service: ProductService, product_id: int, expiry_date) -> None:
    service.create_product(product_id, "Milk", "1L", "3", "Fresh", True, expiry_date, "", "")


class TestFreshRule:
    """Tests for the Fresh category expiry rule."""

    def test_exactly_threshold_rejected(self, products: ProductService):
        """7 days 12 hours away truncates to 7 whole days and is rejected."""
        with pytest.raises(AppException) as exc_info:
            create_fresh(products, 1, "01/09/2030")

        assert exc_info.value.code == "INVALID_EXPIRY_DATE"
        assert exc_info.value.status_code == 400

    def test_beyond_threshold_accepted(self, products: ProductService, dal: DataAccessLayer):
        """8 whole days away is accepted."""
        create_fresh(products, 1, "01/10/2030")

        stored = dal.get_product_by_id(1)[0]
        assert stored.expiry_date == datetime(2030, 1, 10)

    def test_rejection_logs_threshold(self, products: ProductService, caplog):
        with caplog.at_level(logging.INFO, logger="app.services.product_service"):
            with pytest.raises(AppException):
                create_fresh(products, 1, "01/05/2030")

        assert "not more than 7 days away" in caplog.text

    def test_missing_expiry_rejected(self, products: ProductService):
        with pytest.raises(AppException) as exc_info:
            create_fresh(products, 1, None)
        assert exc_info.value.code == "INVALID_EXPIRY_DATE"

    def test_past_expiry_rejected(self, products: ProductService):
        with pytest.raises(AppException):
            create_fresh(products, 1, "2029-12-25T00:00:00")


class TestProductService:
    """Tests for product creation ordering and lookups."""

    def test_price_checked_before_existence(self, products: ProductService, add_product):
        """Bad price wins over an id conflict."""
        add_product(1)
        with pytest.raises(AppException) as exc_info:
            products.create_product(1, "x", "", "free", "Electric", True, None, "220", "UK")
        assert exc_info.value.code == "INVALID_PRICE"

    def test_existence_checked_before_category(self, products: ProductService, add_product):
        add_product(1)
        with pytest.raises(AppException) as exc_info:
            products.create_product(1, "x", "", "5", "Toys", True, None, "", "")
        assert exc_info.value.code == "PRODUCT_EXISTS"

    def test_category_case_insensitive(self, products: ProductService, dal: DataAccessLayer):
        products.create_product(1, "Fan", "", "20", "ELECTRIC", False, None, "110", "us")
        assert dal.product_exists(1)

    def test_voltage_mismatch(self, products: ProductService):
        with pytest.raises(AppException) as exc_info:
            products.create_product(1, "Fan", "", "20", "Electric", True, None, "110", "EU")
        assert exc_info.value.code == "VOLTAGE_SOCKET_MISMATCH"

    def test_get_all_products_empty(self, products: ProductService):
        """Empty collection is not an error."""
        assert products.get_all_products() == []

    def test_get_product_by_price(self, products: ProductService, seeded_products):
        titles = [p.title for p in products.get_product_by_price("30")]
        assert titles == ["Kettle", "Lamp"]

    def test_get_product_by_price_negative_threshold(self, products: ProductService, seeded_products):
        with pytest.raises(AppException) as exc_info:
            products.get_product_by_price("-1")
        assert exc_info.value.status_code == 404

    def test_update_skips_category_rules(self, products: ProductService, seeded_products, dal: DataAccessLayer):
        """Update does not re-apply voltage/socket or category checks."""
        products.update_product(1, "Kettle", "", "30", "Toys", True, None, "999", "XX")
        assert dal.get_product_by_id(1)[0].category == "Toys"

    def test_update_unparseable_expiry(self, products: ProductService, seeded_products):
        with pytest.raises(AppException) as exc_info:
            products.update_product(1, "Kettle", "", "30", "Electric", True, "soon", "220", "UK")
        assert exc_info.value.code == "INVALID_EXPIRY_DATE"

    def test_delete_missing(self, products: ProductService):
        with pytest.raises(AppException) as exc_info:
            products.delete_product(1)
        assert exc_info.value.status_code == 404


class TestCatalogService:
    """Tests for catalog product list handling."""

    def test_create_returns_filtered_list(self, catalogs: CatalogService, seeded_products):
        stored = catalogs.create_catalog(10, "Kitchen", " 3 , 1,3,,7 ")
        assert list(stored) == [3, 1]

    def test_create_rejects_malformed_token(self, catalogs: CatalogService, dal: DataAccessLayer):
        with pytest.raises(AppException) as exc_info:
            catalogs.create_catalog(10, "Kitchen", "1,abc")

        assert exc_info.value.code == "INVALID_PRODUCT_IDS"
        assert exc_info.value.message == "Product id 'abc' is not valid"
        assert not dal.catalog_exists(10)

    def test_create_conflict(self, catalogs: CatalogService):
        catalogs.create_catalog(10, "Kitchen", "")
        with pytest.raises(AppException) as exc_info:
            catalogs.create_catalog(10, "Kitchen", "")
        assert exc_info.value.code == "CATALOG_EXISTS"

    def test_update_keeps_unknown_products(self, catalogs: CatalogService, dal: DataAccessLayer):
        catalogs.create_catalog(10, "Kitchen", "")
        catalogs.update_catalog(10, "Kitchen", "5,5,6")

        assert dal.get_catalog_by_id(10)[0].products == "5,6"

    def test_lookup_by_product_not_found(self, catalogs: CatalogService):
        with pytest.raises(AppException) as exc_info:
            catalogs.get_catalogs_by_product_id(1)
        assert exc_info.value.message == "No catalogs been found"
