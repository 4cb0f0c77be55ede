# Overview: Service-layer demo data; loads the starting catalog, partners, users and ledger.

"""
Demo Data Seeding

Catalog initialization writes stock levels directly; it is the one place
besides adjust_stock that may. Seeding appends no audit entries of its own:
the trail starts with the two historical entries below.

Idempotent: a second call finds the catalog present and does nothing.
"""

from __future__ import annotations

from datetime import date

from flask import current_app

from ..extensions import db
from ..models import AuditLogEntry, Product, Sale, StockEntry, Supplier, User, Warehouse
from ..permissions import ROLE_ADMIN, ROLE_AUDITOR, ROLE_STORE_KEEPER, ROLE_STORE_MANAGER
from agrostock.time_utils import parse_iso_datetime


PRODUCTS = [
    # (id, name, category, unit, current_stock, low_stock_threshold)
    ("p1", "Maize Seeds", "Cereals", "kg", 1250, 500),
    ("p2", "NPK Fertilizer", "Chemicals", "Bags", 45, 100),
    ("p3", "Cocoa Beans", "Cash Crop", "Tons", 12, 5),
    ("p4", "Cassava Stems", "Tubers", "Bundles", 800, 200),
]

SUPPLIERS = [
    ("s1", "GreenEarth Agro", "+234 801 234 5678", "Seeds"),
    ("s2", "Global Chemicals Ltd", "+234 902 333 4444", "Fertilizers"),
]

WAREHOUSES = [
    ("w1", "Main Warehouse A", "Lagos"),
    ("w2", "Silo Complex B", "Ibadan"),
]

USERS = [
    ("u1", "Admin Bosun", "bosun@olatunbosun-agro.ng", ROLE_ADMIN),
    ("u2", "Manager Sarah", "sarah@olatunbosun-agro.ng", ROLE_STORE_MANAGER),
    ("u3", "StoreKeeper John", "john@olatunbosun-agro.ng", ROLE_STORE_KEEPER),
    ("u4", "Auditor Mike", "mike@olatunbosun-agro.ng", ROLE_AUDITOR),
]

STOCK_ENTRIES = [
    {
        "id": "st1",
        "product_id": "p1",
        "supplier_id": "s1",
        "warehouse_id": "w1",
        "quantity": 1000,
        "weight": 1000,
        "batch_number": "BT-001",
        "expiry_date": date(2025, 12, 1),
        "received_by": "StoreKeeper John",
        "status": "APPROVED",
        "date": "2024-05-15T10:00:00Z",
    },
    {
        "id": "st2",
        "product_id": "p2",
        "supplier_id": "s2",
        "warehouse_id": "w2",
        "quantity": 50,
        "weight": 2500,
        "batch_number": "F-NPK-99",
        "expiry_date": date(2026, 1, 20),
        "received_by": "StoreKeeper John",
        "status": "PENDING",
        "date": "2024-05-20T14:30:00Z",
    },
]

SALES = [
    {
        "id": "sl1",
        "product_id": "p1",
        "quantity": 50,
        "unit_price_cents": 500_00,
        "total_amount_cents": 25_000_00,
        "customer_name": "Abeokuta Farms Co.",
        "customer_phone": "08122334455",
        "processed_by": "StoreKeeper John",
        "date": "2024-05-21T09:15:00Z",
    },
]

AUDIT_ENTRIES = [
    {
        "id": "au1",
        "user_id": "u1",
        "user_name": "Admin Bosun",
        "action": "USER_LOGIN",
        "details": "Admin logged into the system from IP 192.168.1.1",
        "timestamp": "2024-05-21T08:00:00Z",
        "severity": "INFO",
    },
    {
        "id": "au2",
        "user_id": "u2",
        "user_name": "Manager Sarah",
        "action": "STOCK_ADJUSTMENT",
        "details": "Authorized manual adjustment of Maize Seeds stock (-5kg wastage)",
        "timestamp": "2024-05-21T11:45:00Z",
        "severity": "WARNING",
    },
]


def is_seeded() -> bool:
    return db.session.query(Product).first() is not None


def seed_demo_data() -> bool:
    """
    Load the demo data set into an empty store.

    Returns:
        True if data was loaded, False if the store already had a catalog
    """
    if is_seeded():
        return False

    for pid, name, category, unit, stock, threshold in PRODUCTS:
        db.session.add(Product(
            id=pid, name=name, category=category, unit=unit,
            current_stock=stock, low_stock_threshold=threshold,
        ))
    for sid, name, contact, category in SUPPLIERS:
        db.session.add(Supplier(id=sid, name=name, contact=contact, category=category, is_active=True))
    for wid, name, location in WAREHOUSES:
        db.session.add(Warehouse(id=wid, name=name, location=location))
    for uid, name, email, role in USERS:
        db.session.add(User(id=uid, name=name, email=email, role=role, is_active=True))
    db.session.flush()

    # Historical rows go in oldest first so `sequence` matches their order
    for row in STOCK_ENTRIES:
        db.session.add(StockEntry(**{**row, "date": parse_iso_datetime(row["date"])}))
    for row in SALES:
        db.session.add(Sale(**{**row, "date": parse_iso_datetime(row["date"])}))
    for row in AUDIT_ENTRIES:
        db.session.add(AuditLogEntry(**{**row, "timestamp": parse_iso_datetime(row["timestamp"])}))

    db.session.commit()
    current_app.logger.info(
        "Seeded demo data: %s products, %s suppliers, %s users",
        len(PRODUCTS), len(SUPPLIERS), len(USERS),
    )
    return True
