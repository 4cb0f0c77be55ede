# Overview: Service-layer operations for the audit trail; append-only writes and read-only queries.

from __future__ import annotations

import uuid

from sqlalchemy import or_

from ..extensions import db
from ..exceptions import InvalidInputError
from ..models import AuditLogEntry
from ..models.audit import SEVERITIES, SEVERITY_INFO
from agrostock.time_utils import utcnow
from .permission_service import require_permission
from .session_service import Actor
"""
Audit Trail Invariants (authoritative)

- Append-only log of every state-changing action.
- Entries are written inside the same DB transaction as the action they record,
  so a rolled-back action leaves no entry behind.
- `sequence` is the ordering key; reads are most-recent-first.
- Denied or invalid attempts are not recorded here.
"""


def escape_like(text: str) -> str:
    """Make % and _ in user search text match literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def new_audit_id() -> str:
    return f"au-{uuid.uuid4().hex[:12]}"


def append_audit_entry(
    *,
    action: str,
    details: str,
    actor: Actor,
    severity: str = SEVERITY_INFO,
) -> AuditLogEntry:
    """
    Append one audit entry attributed to the actor.

    - No domain logic here.
    - No deletes/updates of existing entries.
    - Flushes without committing; the caller owns the transaction.
    """
    if severity not in SEVERITIES:
        raise InvalidInputError(
            f"Invalid severity. Must be one of: {', '.join(SEVERITIES)}",
            details={"severity": severity},
        )

    entry = AuditLogEntry(
        id=new_audit_id(),
        user_id=actor.user_id,
        user_name=actor.user_name,
        action=action,
        details=details,
        severity=severity,
        timestamp=utcnow(),
    )
    db.session.add(entry)
    db.session.flush()  # assigns sequence without committing
    return entry


def list_audit_entries(
    actor: Actor,
    *,
    severity: str | None = None,
    search: str | None = None,
    limit: int | None = None,
) -> list[AuditLogEntry]:
    """
    Read the audit trail, most recent first.

    Args:
        actor: Must hold VIEW_AUDIT
        severity: Only entries with this severity
        search: Case-insensitive match against details, action or user name
        limit: Maximum number of entries
    """
    require_permission(actor, "VIEW_AUDIT")

    query = db.session.query(AuditLogEntry)

    if severity:
        if severity not in SEVERITIES:
            raise InvalidInputError(
                f"Invalid severity. Must be one of: {', '.join(SEVERITIES)}",
                details={"severity": severity},
            )
        query = query.filter(AuditLogEntry.severity == severity)

    if search and search.strip():
        pattern = f"%{escape_like(search.strip())}%"
        query = query.filter(
            or_(
                AuditLogEntry.details.ilike(pattern, escape="\\"),
                AuditLogEntry.action.ilike(pattern, escape="\\"),
                AuditLogEntry.user_name.ilike(pattern, escape="\\"),
            )
        )

    query = query.order_by(AuditLogEntry.sequence.desc())
    if limit:
        query = query.limit(limit)
    return query.all()
