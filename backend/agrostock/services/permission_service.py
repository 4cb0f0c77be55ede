# Overview: Service-layer operations for permission checks against the role capability table.

"""
Permission Checking

WHY: Authorization is enforced inside each ledger operation, not only in the
view layer, so calling an operation directly with a disallowed role fails.

DESIGN PRINCIPLES:
- Fail closed: unknown roles and missing actors have no permissions
- Denials are logged to the application log, never to the audit trail
- The role is taken from the actor passed to each call (re-read per call)
"""

from __future__ import annotations

from flask import current_app

from ..exceptions import PermissionDeniedError
from ..permissions import role_has_permission, validate_permission_code
from .session_service import Actor


def actor_has_permission(actor: Actor | None, permission_code: str) -> bool:
    if actor is None:
        return False
    return role_has_permission(actor.role, permission_code)


def require_permission(actor: Actor | None, permission_code: str) -> None:
    """
    Raise PermissionDeniedError unless the actor's role grants permission_code.
    """
    if not validate_permission_code(permission_code):
        raise ValueError(f"Unknown permission code {permission_code!r}")

    if actor_has_permission(actor, permission_code):
        return

    role = actor.role if actor else None
    current_app.logger.warning(
        "Permission denied: role=%s user=%s permission=%s",
        role,
        actor.user_id if actor else None,
        permission_code,
    )
    raise PermissionDeniedError(
        f"Role {role} is not allowed to perform {permission_code}",
        details={"role": role, "permission": permission_code},
    )
