# Overview: Service-layer operations for stock intake; encapsulates the approval workflow.

"""
Stock Intake Service

WHY: Incoming batches do not count toward sellable stock until a manager
approves them. Approval credits the product exactly once.

LIFECYCLE:
1. PENDING: Recorded at intake
2. APPROVED: Quantity credited to the product through adjust_stock
3. REJECTED: Closed without touching stock

TERMINAL: APPROVED and REJECTED entries never transition again.

ATOMICITY: The status change, the stock credit and the audit entry are
applied in one transaction under the ledger lock. If any step fails, none
of them is visible.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from flask import current_app

from ..extensions import db
from ..exceptions import InvalidInputError, InvalidTransitionError, NotFoundError
from ..models import StockEntry
from ..models.inventory import (
    STOCK_ENTRY_STATUSES,
    STOCK_STATUS_APPROVED,
    STOCK_STATUS_PENDING,
    STOCK_STATUS_REJECTED,
)
from ..validation import require_non_negative_int, require_positive_int, require_text
from .audit_service import append_audit_entry
from .concurrency import lock_for_update, run_atomically
from .inventory_service import adjust_stock, get_product
from .permission_service import require_permission
from .session_service import Actor
from .supplier_service import get_supplier, get_warehouse
from agrostock.time_utils import parse_iso_date, parse_iso_datetime, utcnow


DECISIONS = {STOCK_STATUS_APPROVED, STOCK_STATUS_REJECTED}
_VERBS = {STOCK_STATUS_APPROVED: "approve", STOCK_STATUS_REJECTED: "reject"}


def new_stock_entry_id() -> str:
    return f"st-{uuid.uuid4().hex[:12]}"


def _parse_expiry(value) -> date | None:
    if value is None or isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise InvalidInputError("expiry_date must be YYYY-MM-DD", details={"field": "expiry_date"})


def _parse_received_at(value) -> datetime:
    if value is None:
        return utcnow()
    if isinstance(value, datetime):
        return value
    try:
        parsed = parse_iso_datetime(str(value))
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidInputError("date must be an ISO-8601 datetime", details={"field": "date"})
    return parsed


def get_stock_entry(entry_id: str, *, lock: bool = False) -> StockEntry:
    """
    Raises:
        NotFoundError: If no entry has this id
    """
    query = db.session.query(StockEntry).filter_by(id=entry_id)
    if lock:
        query = lock_for_update(query)
    entry = query.first()
    if not entry:
        raise NotFoundError(f"Stock entry {entry_id} not found", details={"entry_id": entry_id})
    return entry


def list_stock_entries(*, status: str | None = None) -> list[StockEntry]:
    """Stock entries, most recently recorded first."""
    query = db.session.query(StockEntry)
    if status:
        if status not in STOCK_ENTRY_STATUSES:
            raise InvalidInputError(
                f"Invalid status. Must be one of: {', '.join(STOCK_ENTRY_STATUSES)}",
                details={"status": status},
            )
        query = query.filter(StockEntry.status == status)
    return query.order_by(StockEntry.sequence.desc()).all()


def count_pending_entries() -> int:
    return db.session.query(StockEntry).filter(StockEntry.status == STOCK_STATUS_PENDING).count()


def record_stock_entry(
    *,
    product_id: str,
    supplier_id: str,
    warehouse_id: str,
    quantity: int,
    batch_number: str,
    actor: Actor,
    weight: int | None = None,
    expiry_date: date | str | None = None,
    received_at: datetime | str | None = None,
) -> StockEntry:
    """
    Record an incoming batch as a PENDING stock entry.

    Product stock is not changed until the entry is approved.

    Args:
        product_id: Product being received
        supplier_id: Supplier delivering the batch
        warehouse_id: Warehouse holding the batch
        quantity: Units received (must be positive)
        batch_number: Supplier or internal batch reference
        actor: Must hold RECORD_INTAKE
        weight: Optional gross weight
        expiry_date: Optional best-before date
        received_at: Business date/time of the delivery (defaults to now)

    Raises:
        PermissionDeniedError: Without RECORD_INTAKE
        InvalidInputError: If validation fails
        NotFoundError: If the product, supplier or warehouse is unknown
    """
    require_permission(actor, "RECORD_INTAKE")

    qty = require_positive_int(quantity, "quantity")
    batch = require_text(batch_number, "batch_number", max_length=64)
    gross_weight = require_non_negative_int(weight, "weight") if weight is not None else None
    expiry = _parse_expiry(expiry_date)
    received_dt = _parse_received_at(received_at)

    def _op():
        product = get_product(product_id)
        get_supplier(supplier_id)
        get_warehouse(warehouse_id)

        entry = StockEntry(
            id=new_stock_entry_id(),
            product_id=product.id,
            supplier_id=supplier_id,
            warehouse_id=warehouse_id,
            quantity=qty,
            weight=gross_weight,
            batch_number=batch,
            expiry_date=expiry,
            received_by=actor.user_name,
            status=STOCK_STATUS_PENDING,
            date=received_dt,
        )
        db.session.add(entry)
        db.session.flush()

        append_audit_entry(
            action="STOCK_INTAKE",
            details=f"Recorded batch {batch} of {qty} {product.unit} of {product.name} pending approval",
            actor=actor,
        )
        return entry

    entry = run_atomically(_op)
    current_app.logger.info("Stock entry %s recorded by %s", entry.id, actor.user_name)
    return entry


def approve_or_reject_stock_entry(entry_id: str, decision: str, actor: Actor) -> StockEntry:
    """
    Move a PENDING stock entry to APPROVED or REJECTED.

    APPROVED credits the entry's quantity to its product and appends a
    STOCK_APPROVAL audit entry. REJECTED leaves stock untouched and appends
    a STOCK_REJECTION audit entry.

    Raises:
        PermissionDeniedError: Without APPROVE_INTAKE
        InvalidInputError: If decision is not APPROVED or REJECTED
        NotFoundError: If the entry does not exist
        InvalidTransitionError: If the entry is already APPROVED or REJECTED
    """
    require_permission(actor, "APPROVE_INTAKE")

    if decision not in DECISIONS:
        raise InvalidInputError(
            f"Invalid decision. Must be one of: {', '.join(sorted(DECISIONS))}",
            details={"decision": decision},
        )

    def _op():
        entry = get_stock_entry(entry_id, lock=True)

        if entry.status != STOCK_STATUS_PENDING:
            raise InvalidTransitionError(
                f"Cannot {_VERBS[decision]} {entry.status} stock entry. Only PENDING entries can be decided.",
                details={"entry_id": entry.id, "status": entry.status},
            )

        if decision == STOCK_STATUS_APPROVED:
            adjust_stock(entry.product_id, entry.quantity)
            action = "STOCK_APPROVAL"
            details = f"Approved batch {entry.batch_number} of {entry.quantity} units"
        else:
            action = "STOCK_REJECTION"
            details = f"Rejected batch {entry.batch_number} of {entry.quantity} units"

        entry.status = decision
        entry.decided_by = actor.user_name
        entry.decided_at = utcnow()
        db.session.flush()

        append_audit_entry(action=action, details=details, actor=actor)
        return entry

    entry = run_atomically(_op)
    current_app.logger.info(
        "Stock entry %s %s by %s", entry.id, entry.status, actor.user_name
    )
    return entry


def approve_stock_entry(entry_id: str, actor: Actor) -> StockEntry:
    return approve_or_reject_stock_entry(entry_id, STOCK_STATUS_APPROVED, actor)


def reject_stock_entry(entry_id: str, actor: Actor) -> StockEntry:
    return approve_or_reject_stock_entry(entry_id, STOCK_STATUS_REJECTED, actor)
