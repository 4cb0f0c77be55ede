from __future__ import annotations

from decimal import Decimal

from ..extensions import db
from agrostock.time_utils import to_utc_z
from agrostock.validation import cents_to_decimal


class Sale(db.Model):
    """
    Completed sale of one product to one customer.

    MONEY: Authoritative storage in integer minor units (kobo).
    total_amount_cents is always quantity * unit_price_cents.

    IMMUTABLE: Never updated or deleted once flushed (see models.immutability).
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_sales_quantity_positive"),
        db.CheckConstraint("unit_price_cents >= 0", name="ck_sales_unit_price_non_negative"),
        {"sqlite_autoincrement": True},
    )

    sequence = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(64), nullable=False, unique=True)

    product_id = db.Column(db.String(64), db.ForeignKey("products.id"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)

    unit_price_cents = db.Column(db.Integer, nullable=False)
    total_amount_cents = db.Column(db.Integer, nullable=False)

    customer_name = db.Column(db.String(255), nullable=False)
    customer_phone = db.Column(db.String(32), nullable=False, default="N/A")
    processed_by = db.Column(db.String(128), nullable=False)

    date = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    product = db.relationship("Product", backref=db.backref("sales", lazy=True))

    @property
    def unit_price(self) -> Decimal:
        return cents_to_decimal(self.unit_price_cents)

    @property
    def total_amount(self) -> Decimal:
        return cents_to_decimal(self.total_amount_cents)

    def __repr__(self) -> str:
        return f"<Sale id={self.id!r} product_id={self.product_id!r} total_cents={self.total_amount_cents}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "unit_price_cents": self.unit_price_cents,
            "total_amount": str(self.total_amount),
            "total_amount_cents": self.total_amount_cents,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "processed_by": self.processed_by,
            "date": to_utc_z(self.date),
        }
