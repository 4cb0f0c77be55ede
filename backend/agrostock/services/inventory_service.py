# Overview: Service-layer operations for the product catalog; the single write path for stock levels.

# backend/agrostock/services/inventory_service.py

from __future__ import annotations

import uuid

from flask import current_app

from ..extensions import db
from ..exceptions import InsufficientStockError, InvalidInputError, NotFoundError
from ..models import Product
from ..validation import MAX_QUANTITY, MAX_STOCK_LEVEL, require_int, require_non_negative_int, require_text
from .audit_service import append_audit_entry
from .concurrency import lock_for_update, run_atomically
from .permission_service import require_permission
from .session_service import Actor
"""
Catalog Invariants (authoritative)

- Product.current_stock >= 0 before and after every operation.
- adjust_stock is the only code path that changes current_stock after a
  product exists. Stock approvals and sales both route through it.
- adjust_stock flushes but never commits: it always runs inside the caller's
  atomic unit (see concurrency.run_atomically).
- Low stock is derived: current_stock <= low_stock_threshold.
"""


def get_product(product_id: str, *, lock: bool = False) -> Product:
    """
    Raises:
        NotFoundError: If no product has this id
    """
    query = db.session.query(Product).filter_by(id=product_id)
    if lock:
        query = lock_for_update(query)
    product = query.first()
    if product is None:
        raise NotFoundError(f"Product {product_id} not found", details={"product_id": product_id})
    return product


def list_products() -> list[Product]:
    return db.session.query(Product).order_by(Product.id).all()


def list_low_stock_products() -> list[Product]:
    return (
        db.session.query(Product)
        .filter(Product.current_stock <= Product.low_stock_threshold)
        .order_by(Product.id)
        .all()
    )


def is_low_stock(product_id: str) -> bool:
    return get_product(product_id).is_low_stock


def adjust_stock(product_id: str, delta: int) -> int:
    """
    Apply a signed stock change and return the new stock level.

    Raises:
        NotFoundError: If product_id is unknown
        InsufficientStockError: If the change would make stock negative
        InvalidInputError: If delta is not an integer, exceeds MAX_QUANTITY in
            size, or would push stock above MAX_STOCK_LEVEL
    """
    delta = require_int(delta, "delta")
    if abs(delta) > MAX_QUANTITY:
        raise InvalidInputError(
            f"delta cannot exceed {MAX_QUANTITY:,} units",
            details={"field": "delta", "value": delta, "maximum": MAX_QUANTITY},
        )
    product = get_product(product_id, lock=True)

    new_stock = product.current_stock + delta
    if new_stock < 0:
        raise InsufficientStockError(
            f"Insufficient stock for {product.name}",
            details={
                "product_id": product.id,
                "current_stock": product.current_stock,
                "requested_change": delta,
            },
        )
    if new_stock > MAX_STOCK_LEVEL:
        raise InvalidInputError(
            f"Stock for {product.name} cannot exceed {MAX_STOCK_LEVEL:,}",
            details={
                "product_id": product.id,
                "current_stock": product.current_stock,
                "requested_change": delta,
            },
        )

    product.current_stock = new_stock
    db.session.flush()
    return new_stock


def new_product_id() -> str:
    return f"p-{uuid.uuid4().hex[:8]}"


def create_product(
    *,
    name: str,
    category: str,
    unit: str,
    actor: Actor,
    low_stock_threshold: int = 0,
    initial_stock: int = 0,
    product_id: str | None = None,
) -> Product:
    """
    Add a product to the catalog.

    initial_stock is the opening balance; later changes go through adjust_stock.

    Raises:
        PermissionDeniedError: Without MANAGE_PRODUCTS
        InvalidInputError: If validation fails or the id is taken
    """
    require_permission(actor, "MANAGE_PRODUCTS")

    name = require_text(name, "name")
    category = require_text(category, "category", max_length=64)
    unit = require_text(unit, "unit", max_length=32)
    threshold = require_non_negative_int(low_stock_threshold, "low_stock_threshold")
    opening = require_non_negative_int(initial_stock, "initial_stock", maximum=MAX_STOCK_LEVEL)

    def _op():
        pid = product_id or new_product_id()
        if db.session.query(Product).filter_by(id=pid).first():
            raise InvalidInputError(f"Product {pid} already exists", details={"product_id": pid})

        product = Product(
            id=pid,
            name=name,
            category=category,
            unit=unit,
            current_stock=opening,
            low_stock_threshold=threshold,
        )
        db.session.add(product)
        db.session.flush()

        append_audit_entry(
            action="PRODUCT_CREATED",
            details=f"Added {name} ({category}) with opening stock {opening} {unit}",
            actor=actor,
        )
        return product

    product = run_atomically(_op)
    current_app.logger.info("Product %s created by %s", product.id, actor.user_name)
    return product
