from __future__ import annotations

from ..extensions import db


SEVERITY_INFO = "INFO"
SEVERITY_WARNING = "WARNING"
SEVERITY_CRITICAL = "CRITICAL"

SEVERITIES = (SEVERITY_INFO, SEVERITY_WARNING, SEVERITY_CRITICAL)


class AuditLogEntry(db.Model):
    """
    Append-only record of state-changing actions.

    ORDERING: `sequence` is the authoritative order (autoincrement, never reused).
    Timestamps share wall-clock granularity under rapid successive writes, so they
    are display data only.

    IMMUTABLE: Never update or delete. Append-only for audit integrity.
    """
    __tablename__ = "audit_log_entries"
    __table_args__ = (
        db.Index("ix_audit_log_entries_severity", "severity"),
        db.Index("ix_audit_log_entries_action", "action"),
        {"sqlite_autoincrement": True},
    )

    sequence = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(64), nullable=False, unique=True)

    user_id = db.Column(db.String(64), nullable=True, index=True)
    user_name = db.Column(db.String(128), nullable=False)

    action = db.Column(db.String(64), nullable=False)  # STOCK_APPROVAL, NEW_SALE, ...
    details = db.Column(db.Text, nullable=False)
    severity = db.Column(db.String(16), nullable=False, default=SEVERITY_INFO)

    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<AuditLogEntry seq={self.sequence} action={self.action!r}>"
