# Overview: Service-layer operations for suppliers and warehouses (reference data).

from __future__ import annotations

import uuid

from flask import current_app

from ..extensions import db
from ..exceptions import InvalidInputError, NotFoundError
from ..models import Supplier, Warehouse
from ..validation import optional_text, require_text
from .audit_service import append_audit_entry
from .concurrency import run_atomically
from .permission_service import require_permission
from .session_service import Actor


def get_supplier(supplier_id: str) -> Supplier:
    supplier = db.session.query(Supplier).filter_by(id=supplier_id).first()
    if not supplier:
        raise NotFoundError(f"Supplier {supplier_id} not found", details={"supplier_id": supplier_id})
    return supplier


def get_warehouse(warehouse_id: str) -> Warehouse:
    warehouse = db.session.query(Warehouse).filter_by(id=warehouse_id).first()
    if not warehouse:
        raise NotFoundError(f"Warehouse {warehouse_id} not found", details={"warehouse_id": warehouse_id})
    return warehouse


def list_suppliers(*, active_only: bool = True) -> list[Supplier]:
    query = db.session.query(Supplier)
    if active_only:
        query = query.filter(Supplier.is_active.is_(True))
    return query.order_by(Supplier.name).all()


def count_active_suppliers() -> int:
    return db.session.query(Supplier).filter(Supplier.is_active.is_(True)).count()


def list_warehouses() -> list[Warehouse]:
    return db.session.query(Warehouse).order_by(Warehouse.id).all()


def create_supplier(
    *,
    name: str,
    actor: Actor,
    contact: str | None = None,
    category: str | None = None,
) -> Supplier:
    """
    Register a partner supplier.

    Raises:
        PermissionDeniedError: Without MANAGE_SUPPLIERS
        InvalidInputError: If the name is empty or already registered
    """
    require_permission(actor, "MANAGE_SUPPLIERS")

    name = require_text(name, "name")
    contact = optional_text(contact)
    category = optional_text(category)

    def _op():
        existing = db.session.query(Supplier).filter(Supplier.name.ilike(name)).first()
        if existing:
            raise InvalidInputError(
                f"Supplier {name!r} already exists",
                details={"supplier_id": existing.id},
            )

        supplier = Supplier(
            id=f"s-{uuid.uuid4().hex[:8]}",
            name=name,
            contact=contact,
            category=category,
        )
        db.session.add(supplier)
        db.session.flush()

        append_audit_entry(
            action="SUPPLIER_CREATED",
            details=f"Registered supplier {name}" + (f" ({category})" if category else ""),
            actor=actor,
        )
        return supplier

    supplier = run_atomically(_op)
    current_app.logger.info("Supplier %s registered by %s", supplier.id, actor.user_name)
    return supplier
