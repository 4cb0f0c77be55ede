# Overview: Service-layer operations for the acting user; the role provider for every ledger call.

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from ..extensions import db
from ..exceptions import InvalidInputError, NotFoundError
from ..models import User
from ..permissions import validate_role


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation. Read per call, never cached."""
    user_id: str | None
    user_name: str
    role: str


def resolve_actor(user_id: str) -> Actor:
    """
    Build the actor for a user from the current database row.

    Raises:
        NotFoundError: If the user does not exist or is deactivated
    """
    user = db.session.query(User).filter_by(id=user_id).first()
    if not user or not user.is_active:
        raise NotFoundError(f"User {user_id} not found", details={"user_id": user_id})
    return Actor(user_id=user.id, user_name=user.name, role=user.role)


def actor_for_role(role: str) -> Actor:
    """Anonymous actor labelled by role, for role-switching sessions."""
    if not validate_role(role):
        raise InvalidInputError(f"Unknown role {role!r}", details={"role": role})
    return Actor(user_id="u-current", user_name=f"User ({role})", role=role)


def get_current_actor(user_id: str | None = None) -> Actor:
    """Resolve the given user, falling back to the configured default actor."""
    return resolve_actor(user_id or current_app.config["DEFAULT_ACTOR_ID"])
