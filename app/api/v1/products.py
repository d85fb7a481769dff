"""
==============================================================================
Product Endpoints
==============================================================================

Query-string endpoints for product CRUD.

Lookups answer in plain text ("id : 5 title : Kettle"), GetAllProducts
answers with a JSON array, mutations answer 200 with an empty body.

==============================================================================
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.schemas.product import ProductDetail
from app.services.product_service import ProductService
from app.utils.formatters import format_many, format_single
from app.utils.product_ids import MAX_ID, MIN_ID


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Product", tags=["Product"])


class ProductController:
    """Controller for product operations."""

    def __init__(self, db: Session):
        self._service = ProductService(db)

    def get_by_id(self, product_id: int) -> PlainTextResponse:
        products = self._service.get_product_by_id(product_id)
        return PlainTextResponse(format_single(products[0]))

    def get_by_category(self, category: str) -> PlainTextResponse:
        products = self._service.get_product_by_category(category)
        return PlainTextResponse(format_many(products))

    def get_by_price(self, price: str) -> PlainTextResponse:
        products = self._service.get_product_by_price(price)
        return PlainTextResponse(format_many(products))

    def get_all(self) -> List[ProductDetail]:
        return [ProductDetail.model_validate(p) for p in self._service.get_all_products()]

    def create(self, **fields) -> Response:
        self._service.create_product(**fields)
        return Response(status_code=200)

    def update(self, **fields) -> Response:
        self._service.update_product(**fields)
        return Response(status_code=200)

    def delete(self, product_id: int) -> Response:
        self._service.delete_product(product_id)
        return Response(status_code=200)


@router.get("/GetProductById", response_class=PlainTextResponse)
def get_product_by_id(id: int = Query(..., ge=MIN_ID, le=MAX_ID), db: Session = Depends(get_db)):
    """Get a product by id."""
    logger.info(f"Getting product by id: {id}")
    return ProductController(db).get_by_id(id)


@router.get("/GetProductByCategory", response_class=PlainTextResponse)
def get_product_by_category(category: str = Query(...), db: Session = Depends(get_db)):
    """Get all products of a category."""
    logger.info(f"Getting product by category: {category}")
    return ProductController(db).get_by_category(category)


@router.get("/GetProductByPrice", response_class=PlainTextResponse)
def get_product_by_price(price: str = Query(...), db: Session = Depends(get_db)):
    """Get all products priced at or below ``price``."""
    logger.info(f"Getting product by price: {price}")
    return ProductController(db).get_by_price(price)


@router.get("/GetAllProducts", response_model=List[ProductDetail])
def get_all_products(db: Session = Depends(get_db)):
    """Get every product as JSON."""
    logger.info("Getting all products")
    return ProductController(db).get_all()


@router.get("/CreateNewProduct")
def create_new_product(
    id: int = Query(..., ge=MIN_ID, le=MAX_ID),
    title: str = Query(...),
    description: str = Query(""),
    price: str = Query(...),
    category: str = Query(...),
    is_active: bool = Query(False, alias="isActive"),
    expiry_date: Optional[str] = Query(None, alias="expiryDate"),
    voltage: str = Query(""),
    socket: str = Query(""),
    db: Session = Depends(get_db)
):
    """Create a product. Expiry date format: MM/DD/YYYY or ISO-8601."""
    logger.info(f"Create product request: {id}")
    return ProductController(db).create(
        product_id=id,
        title=title,
        description=description,
        price=price,
        category=category,
        is_active=is_active,
        expiry_date=expiry_date,
        voltage=voltage,
        socket=socket,
    )


@router.get("/UpdateProduct")
def update_product(
    id: int = Query(..., ge=MIN_ID, le=MAX_ID),
    title: str = Query(...),
    description: str = Query(""),
    price: str = Query(...),
    category: str = Query(...),
    is_active: bool = Query(False, alias="isactive"),
    expiry_date: Optional[str] = Query(None, alias="expiryDate"),
    voltage: str = Query(""),
    socket: str = Query(""),
    db: Session = Depends(get_db)
):
    """Overwrite an existing product."""
    logger.info(f"Updating product with id: {id}")
    return ProductController(db).update(
        product_id=id,
        title=title,
        description=description,
        price=price,
        category=category,
        is_active=is_active,
        expiry_date=expiry_date,
        voltage=voltage,
        socket=socket,
    )


@router.get("/DeleteProduct")
def delete_product(id: int = Query(..., ge=MIN_ID, le=MAX_ID), db: Session = Depends(get_db)):
    """Delete a product."""
    logger.info(f"Deleting product with id: {id}")
    return ProductController(db).delete(id)
