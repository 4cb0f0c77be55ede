from __future__ import annotations

from ..extensions import db


class User(db.Model):
    """
    Staff accounts for attribution and role lookup.

    There is no authentication here; the role is read from this row every time
    an operation resolves its actor, so a role change applies to the next call.
    """
    __tablename__ = "users"

    id = db.Column(db.String(64), primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True)
    role = db.Column(db.String(32), nullable=False, index=True)

    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    last_login_at = db.Column(db.DateTime(timezone=True), nullable=True)
