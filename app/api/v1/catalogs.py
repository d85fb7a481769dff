"""
==============================================================================
Catalog Endpoints
==============================================================================

Query-string endpoints for catalog CRUD. Lookups answer in plain text.

==============================================================================
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.core import exceptions
from app.db.database import get_db
from app.services.catalog_service import CatalogService
from app.utils.formatters import format_many, format_single
from app.utils.product_ids import MAX_ID, MIN_ID


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Catalog", tags=["Catalog"])


class CatalogController:
    """Controller for catalog operations."""

    def __init__(self, db: Session):
        self._service = CatalogService(db)

    def create(self, catalog_id: int, title: str, products: str) -> Response:
        self._service.create_catalog(catalog_id, title, products)
        return Response(status_code=200)

    def get_all(self) -> PlainTextResponse:
        return PlainTextResponse(format_many(self._service.get_all_catalogs()))

    def get_by_id(self, catalog_id: int) -> PlainTextResponse:
        catalogs = self._service.get_catalog_by_id(catalog_id)
        return PlainTextResponse(format_single(catalogs[0]))

    def get_by_product_id(self, product_id: int) -> PlainTextResponse:
        return PlainTextResponse(format_many(self._service.get_catalogs_by_product_id(product_id)))

    def update(self, catalog_id: int, title: str, product_ids: str) -> Response:
        self._service.update_catalog(catalog_id, title, product_ids)
        return Response(status_code=200)

    def delete(self, catalog_id: int) -> Response:
        self._service.delete_catalog(catalog_id)
        return Response(status_code=200)


@router.get("/CreateNewCatalog")
def create_new_catalog(
    id: int = Query(..., ge=MIN_ID, le=MAX_ID),
    title: str = Query(...),
    products: str = Query(""),
    db: Session = Depends(get_db)
):
    """Create a catalog; unknown product ids are dropped."""
    logger.info(f"Create catalog request: {id}")
    return CatalogController(db).create(id, title, products)


# Route name kept as published
@router.get("/GetAllCalalogs", response_class=PlainTextResponse)
def get_all_catalogs(db: Session = Depends(get_db)):
    """Get every catalog."""
    logger.info("Getting all catalogs")
    return CatalogController(db).get_all()


@router.get("/GetCatalogById", response_class=PlainTextResponse)
def get_catalog_by_id(id: int = Query(..., ge=MIN_ID, le=MAX_ID), db: Session = Depends(get_db)):
    """Get a catalog by id."""
    logger.info(f"Getting catalog by id: {id}")
    return CatalogController(db).get_by_id(id)


def product_id_param(
    product_id: Optional[int] = Query(None, alias="productId", ge=MIN_ID, le=MAX_ID),
    legacy_product_id: Optional[int] = Query(
        None, alias="ProductId", ge=MIN_ID, le=MAX_ID, include_in_schema=False
    ),
) -> int:
    """Product id from ``productId``, or its older ``ProductId`` spelling."""
    if product_id is not None:
        return product_id
    if legacy_product_id is not None:
        return legacy_product_id
    raise exceptions.missing_parameter("productId")


@router.get("/GetCatalogByProductId", response_class=PlainTextResponse)
def get_catalog_by_product_id(
    product_id: int = Depends(product_id_param),
    db: Session = Depends(get_db)
):
    """Get every catalog that lists a product."""
    logger.info(f"Getting catalog by product id: {product_id}")
    return CatalogController(db).get_by_product_id(product_id)


@router.get("/UpdateCatalog")
def update_catalog(
    id: int = Query(..., ge=MIN_ID, le=MAX_ID),
    title: str = Query(...),
    product_ids: str = Query("", alias="productIds"),
    db: Session = Depends(get_db)
):
    """Overwrite a catalog's title and product ids (ids are not re-checked)."""
    logger.info(f"Updating catalog with id: {id}")
    return CatalogController(db).update(id, title, product_ids)


@router.get("/DeleteCatalog")
def delete_catalog(id: int = Query(..., ge=MIN_ID, le=MAX_ID), db: Session = Depends(get_db)):
    """Delete a catalog."""
    logger.info(f"Deleting catalog with id: {id}")
    return CatalogController(db).delete(id)
