"""Product queries plus the input rules shared by create and update."""

import math
from typing import Any

from sqlalchemy.orm import Session

from app.models import Product


# NUMERIC(10, 2): eight digits before the decimal point.
MAX_PRICE = 10**8


class PriceError(ValueError):
    """Raised when a price is present but not a usable non-negative number."""


def parse_price(value: float | str) -> float:
    """
    Parse a price given as a number or numeric string.

    Raises PriceError for non-numeric, non-finite, negative or too-large values.
    """
    if isinstance(value, bool):
        raise PriceError("Price must be a number")
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise PriceError("Price must be a number") from e
    if not math.isfinite(price) or price < 0:
        raise PriceError("Price must be a non-negative number")
    if round(price, 2) >= MAX_PRICE:
        raise PriceError(f"Price must be less than {MAX_PRICE}")
    return price


def merge_product_update(
    existing: Product,
    name: str,
    price: float,
    description: str | None,
    image_data: str | None,
) -> dict[str, Any]:
    """
    Merge an update request into the stored product, field by field:

    - name: always the incoming value (required by the handler).
    - price: always the incoming value (required by the handler).
    - description: incoming value when non-empty, otherwise the stored value.
    - image_data: incoming value when non-empty, otherwise the stored value.

    Omitted optional fields therefore never clear what is stored.
    """
    return {
        "name": name,
        "price": price,
        "description": description or existing.description,
        "image_data": image_data or existing.image_data,
    }


def list_products(db: Session) -> list[Product]:
    """All products, newest first."""
    return (
        db.query(Product)
        .order_by(Product.created_at.desc(), Product.id.desc())
        .all()
    )


def get_product(db: Session, product_id: int) -> Product | None:
    return db.query(Product).filter(Product.id == product_id).first()


def create_product(
    db: Session,
    user_id: int,
    name: str,
    price: float,
    description: str | None = None,
    image_data: str | None = None,
) -> Product:
    product = Product(
        user_id=user_id,
        name=name,
        price=price,
        description=description or None,
        image_data=image_data or None,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def update_product(db: Session, product: Product, fields: dict[str, Any]) -> Product:
    for key, value in fields.items():
        setattr(product, key, value)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product: Product) -> None:
    db.delete(product)
    db.commit()
