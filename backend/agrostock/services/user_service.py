# Overview: Service-layer operations for staff accounts and role assignment.

from __future__ import annotations

import uuid

from flask import current_app

from ..extensions import db
from ..exceptions import InvalidInputError
from ..models import User
from ..permissions import ROLES, validate_role
from ..validation import require_text
from .audit_service import append_audit_entry
from .concurrency import run_atomically
from .permission_service import require_permission
from .session_service import Actor


def list_users(*, active_only: bool = True) -> list[User]:
    query = db.session.query(User)
    if active_only:
        query = query.filter(User.is_active.is_(True))
    return query.order_by(User.id).all()


def create_user(*, name: str, email: str, role: str, actor: Actor) -> User:
    """
    Create a staff account with one of the four roles.

    Raises:
        PermissionDeniedError: Without MANAGE_USERS
        InvalidInputError: On unknown role, empty fields, or a duplicate email
    """
    require_permission(actor, "MANAGE_USERS")

    name = require_text(name, "name", max_length=128)
    email = require_text(email, "email").lower()
    if "@" not in email:
        raise InvalidInputError("email must be a valid address", details={"field": "email"})
    if not validate_role(role):
        raise InvalidInputError(
            f"Invalid role. Must be one of: {', '.join(ROLES)}",
            details={"role": role},
        )

    def _op():
        if db.session.query(User).filter_by(email=email).first():
            raise InvalidInputError(f"User with email {email} already exists", details={"email": email})

        user = User(id=f"u-{uuid.uuid4().hex[:8]}", name=name, email=email, role=role)
        db.session.add(user)
        db.session.flush()

        append_audit_entry(
            action="USER_CREATED",
            details=f"Created user {name} with role {role}",
            actor=actor,
            severity="WARNING",
        )
        return user

    user = run_atomically(_op)
    current_app.logger.info("User %s (%s) created by %s", user.id, role, actor.user_name)
    return user
