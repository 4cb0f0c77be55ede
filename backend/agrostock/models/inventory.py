from __future__ import annotations

from ..extensions import db


STOCK_STATUS_PENDING = "PENDING"
STOCK_STATUS_APPROVED = "APPROVED"
STOCK_STATUS_REJECTED = "REJECTED"

STOCK_ENTRY_STATUSES = (STOCK_STATUS_PENDING, STOCK_STATUS_APPROVED, STOCK_STATUS_REJECTED)
TERMINAL_STOCK_STATUSES = frozenset({STOCK_STATUS_APPROVED, STOCK_STATUS_REJECTED})


class Product(db.Model):
    """
    Product master data with its authoritative stock level.

    STOCK OWNERSHIP:
    current_stock is written in exactly two places:
    - catalog initialization / product creation
    - inventory_service.adjust_stock (the single choke point for approvals and sales)

    The CHECK constraint is the last line of defence for current_stock >= 0;
    adjust_stock rejects the change before it ever reaches the database.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("current_stock >= 0", name="ck_products_stock_non_negative"),
        db.CheckConstraint("low_stock_threshold >= 0", name="ck_products_threshold_non_negative"),
        db.Index("ix_products_category_name", "category", "name"),
    )

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    category = db.Column(db.String(64), nullable=False)
    unit = db.Column(db.String(32), nullable=False)

    current_stock = db.Column(db.Integer, nullable=False, default=0)
    low_stock_threshold = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.low_stock_threshold

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} name={self.name!r} stock={self.current_stock}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "unit": self.unit,
            "current_stock": self.current_stock,
            "low_stock_threshold": self.low_stock_threshold,
            "is_low_stock": self.is_low_stock,
        }


class Supplier(db.Model):
    __tablename__ = "suppliers"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True)
    contact = db.Column(db.String(64), nullable=True)
    category = db.Column(db.String(64), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())


class Warehouse(db.Model):
    __tablename__ = "warehouses"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(128), nullable=True)


class StockEntry(db.Model):
    """
    Incoming batch of goods awaiting approval.

    LIFECYCLE:
    1. PENDING: Recorded at intake, does not count toward sellable stock
    2. APPROVED: Manager approved, quantity credited to the product
    3. REJECTED: Manager rejected, stock untouched

    TERMINAL: APPROVED and REJECTED entries never change status again
    (enforced in intake_service and by the ORM listeners in models.immutability).
    """
    __tablename__ = "stock_entries"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_stock_entries_quantity_positive"),
        db.Index("ix_stock_entries_status", "status"),
        {"sqlite_autoincrement": True},
    )

    # Insertion order; the public identifier is `id`
    sequence = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(64), nullable=False, unique=True)

    product_id = db.Column(db.String(64), db.ForeignKey("products.id"), nullable=False, index=True)
    supplier_id = db.Column(db.String(64), db.ForeignKey("suppliers.id"), nullable=False)
    warehouse_id = db.Column(db.String(64), db.ForeignKey("warehouses.id"), nullable=False)

    quantity = db.Column(db.Integer, nullable=False)
    weight = db.Column(db.Integer, nullable=True)
    batch_number = db.Column(db.String(64), nullable=False)
    expiry_date = db.Column(db.Date, nullable=True)
    received_by = db.Column(db.String(128), nullable=False)

    status = db.Column(db.String(16), nullable=False, default=STOCK_STATUS_PENDING)
    date = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    decided_by = db.Column(db.String(128), nullable=True)
    decided_at = db.Column(db.DateTime(timezone=True), nullable=True)

    product = db.relationship("Product", backref=db.backref("stock_entries", lazy=True))
    supplier = db.relationship("Supplier", backref=db.backref("stock_entries", lazy=True))
    warehouse = db.relationship("Warehouse", backref=db.backref("stock_entries", lazy=True))

    def __repr__(self) -> str:
        return f"<StockEntry id={self.id!r} batch={self.batch_number!r} status={self.status}>"
