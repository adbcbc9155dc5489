"""Product CRUD. Reads are public; writes require an admin bearer token."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.core.database import get_db
from app.core.errors import InternalError, NotFoundError, ValidationError
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse
from app.schemas.product import ProductInput, ProductResponse
from app.services import products as product_store
from app.services.products import PriceError, merge_product_update, parse_price

logger = logging.getLogger(__name__)

router = APIRouter()

PRODUCT_NOT_FOUND = "Product not found"


def _required_fields(body: ProductInput) -> tuple[str, float]:
    """Return (name, price) or raise 400 when either is missing or the price is unusable."""
    if not body.name or body.price is None or body.price == "":
        raise ValidationError("Name and price are required")
    try:
        return body.name, parse_price(body.price)
    except PriceError as e:
        raise ValidationError(str(e)) from e


@router.get("", response_model=list[ProductResponse])
def list_products(db: Annotated[Session, Depends(get_db)]) -> list[ProductResponse]:
    """All products, newest first."""
    try:
        products = product_store.list_products(db)
    except SQLAlchemyError as e:
        logger.exception("Error fetching all products")
        raise InternalError() from e
    logger.info("Fetched %s products", len(products))
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ProductResponse:
    try:
        product = product_store.get_product(db, product_id)
    except SQLAlchemyError as e:
        logger.exception("Error fetching product %s", product_id)
        raise InternalError() from e
    if product is None:
        logger.warning("Attempt to fetch non-existent product: %s", product_id)
        raise NotFoundError(PRODUCT_NOT_FOUND)
    return ProductResponse.model_validate(product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductInput,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ProductResponse:
    """Create a product owned by the calling admin. name and price are required."""
    try:
        name, price = _required_fields(body)
    except ValidationError:
        logger.warning("Create product attempt with invalid fields by user: %s", admin.id)
        raise

    try:
        product = product_store.create_product(
            db,
            user_id=admin.id,
            name=name,
            price=price,
            description=body.description,
            image_data=body.image_data,
        )
    except SQLAlchemyError as e:
        logger.exception("Error creating product by user %s", admin.id)
        raise InternalError() from e

    logger.info("New product created: %s (ID: %s) by user: %s", name, product.id, admin.id)
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    body: ProductInput,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> ProductResponse:
    """
    Replace name and price; description and imageData keep their stored values
    when omitted. Any admin may update any product.
    """
    try:
        name, price = _required_fields(body)
    except ValidationError:
        logger.warning(
            "Update product attempt with invalid fields for product: %s by user: %s",
            product_id,
            admin.id,
        )
        raise

    try:
        product = product_store.get_product(db, product_id)
        if product is None:
            logger.warning(
                "Update attempt for non-existent product: %s by user: %s", product_id, admin.id
            )
            raise NotFoundError(PRODUCT_NOT_FOUND)
        fields = merge_product_update(
            product,
            name=name,
            price=price,
            description=body.description,
            image_data=body.image_data,
        )
        product = product_store.update_product(db, product, fields)
    except SQLAlchemyError as e:
        logger.exception("Error updating product %s by user %s", product_id, admin.id)
        raise InternalError() from e

    logger.info("Product updated: %s by user: %s", product_id, admin.id)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    try:
        product = product_store.get_product(db, product_id)
        if product is None:
            logger.warning(
                "Delete attempt for non-existent product: %s by user: %s", product_id, admin.id
            )
            raise NotFoundError(PRODUCT_NOT_FOUND)
        product_store.delete_product(db, product)
    except SQLAlchemyError as e:
        logger.exception("Error deleting product %s by user %s", product_id, admin.id)
        raise InternalError() from e

    logger.info("Product deleted: %s by user: %s", product_id, admin.id)
    return MessageResponse(message="Product removed")
