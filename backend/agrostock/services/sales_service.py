"""
Sales Service - validate, deduct stock, record the sale

WHY: A sale and its stock deduction are one unit. A sale record without the
matching deduction (or the reverse) must never be observable.

MONEY: unit prices arrive in major units (naira) and are stored as integer
kobo; totals are computed in kobo so no float rounding reaches the ledger.
"""

from __future__ import annotations

import uuid

from flask import current_app
from sqlalchemy import func

from ..extensions import db
from ..exceptions import InsufficientStockError, InvalidInputError, NotFoundError
from ..models import Sale
from ..validation import (
    MAX_STORED_INT,
    cents_to_decimal,
    optional_text,
    require_positive_int,
    require_text,
    to_cents,
)
from agrostock.time_utils import utcnow
from .audit_service import append_audit_entry
from .concurrency import run_atomically
from .inventory_service import adjust_stock, get_product
from .permission_service import require_permission
from .session_service import Actor


def new_sale_id() -> str:
    return f"sl-{uuid.uuid4().hex[:12]}"


def format_naira(cents: int) -> str:
    return f"₦{cents_to_decimal(cents):,.2f}"


def record_sale(
    product_id: str,
    quantity: int,
    unit_price,
    customer_name: str,
    actor: Actor,
    customer_phone: str | None = None,
) -> Sale:
    """
    Record a sale and deduct its quantity from stock.

    Args:
        product_id: Product sold
        quantity: Units sold (positive)
        unit_price: Price per unit in naira (int, Decimal or numeric string)
        customer_name: Buyer name (required)
        actor: Must hold RECORD_SALE
        customer_phone: Optional buyer phone, "N/A" when absent

    Returns:
        The new immutable Sale

    Raises:
        PermissionDeniedError: Without RECORD_SALE
        InvalidInputError: On a quantity outside 1..MAX_QUANTITY, a negative price,
            an empty customer, or a total too large to store
        NotFoundError: If the product does not exist
        InsufficientStockError: If quantity exceeds current stock
    """
    require_permission(actor, "RECORD_SALE")

    qty = require_positive_int(quantity, "quantity")
    unit_price_cents = to_cents(unit_price, "unit_price")
    customer = require_text(customer_name, "customer_name")
    phone = optional_text(customer_phone) or "N/A"

    total_cents = qty * unit_price_cents
    if total_cents > MAX_STORED_INT:
        raise InvalidInputError(
            "Sale total exceeds the maximum storable amount",
            details={"quantity": qty, "unit_price_cents": unit_price_cents},
        )

    def _op():
        product = get_product(product_id, lock=True)

        # Strict check: selling exactly the available stock is allowed
        if qty > product.current_stock:
            raise InsufficientStockError(
                "Insufficient stock to process this sale",
                details={
                    "product_id": product.id,
                    "requested_quantity": qty,
                    "current_stock": product.current_stock,
                },
            )

        adjust_stock(product.id, -qty)

        sale = Sale(
            id=new_sale_id(),
            product_id=product.id,
            quantity=qty,
            unit_price_cents=unit_price_cents,
            total_amount_cents=total_cents,
            customer_name=customer,
            customer_phone=phone,
            processed_by=actor.user_name,
            date=utcnow(),
        )
        db.session.add(sale)
        db.session.flush()

        append_audit_entry(
            action="NEW_SALE",
            details=f"Processed sale to {customer} for {format_naira(total_cents)}",
            actor=actor,
        )
        return sale

    sale = run_atomically(_op)
    current_app.logger.info(
        "Sale %s recorded: product=%s qty=%s total_cents=%s by %s",
        sale.id, sale.product_id, sale.quantity, sale.total_amount_cents, actor.user_name,
    )
    return sale


def get_sale(sale_id: str) -> Sale:
    sale = db.session.query(Sale).filter_by(id=sale_id).first()
    if not sale:
        raise NotFoundError(f"Sale {sale_id} not found", details={"sale_id": sale_id})
    return sale


def list_sales(*, product_id: str | None = None, limit: int | None = None) -> list[Sale]:
    """Sales ledger, most recent first."""
    query = db.session.query(Sale)
    if product_id:
        query = query.filter(Sale.product_id == product_id)
    query = query.order_by(Sale.sequence.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def get_sales_totals() -> dict:
    """Aggregate totals over the whole ledger."""
    row = db.session.query(
        func.count(Sale.sequence).label("count"),
        func.coalesce(func.sum(Sale.quantity), 0).label("units"),
        func.coalesce(func.sum(Sale.total_amount_cents), 0).label("revenue"),
    ).one()

    revenue_cents = int(row.revenue or 0)
    return {
        "sale_count": int(row.count or 0),
        "units_sold": int(row.units or 0),
        "revenue_cents": revenue_cents,
        "revenue": cents_to_decimal(revenue_cents),
    }
