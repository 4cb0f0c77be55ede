# Overview: ORM listeners that keep append-only and terminal records unchanged.

"""
ORM-Level Immutability Enforcement

SQLAlchemy fires events before UPDATE/DELETE statements reach the database.
These listeners check the ledger invariants and abort the flush:

Entity          | When Immutable
----------------|-------------------------------
AuditLogEntry   | ALWAYS (from creation)
Sale            | ALWAYS (from creation)
StockEntry      | After status is APPROVED or REJECTED

Bulk statements issued through Core (table.delete()) bypass these listeners;
only test fixtures do that.
"""

from sqlalchemy import event, inspect

from agrostock.exceptions import ImmutableRecordError
from .audit import AuditLogEntry
from .inventory import StockEntry, TERMINAL_STOCK_STATUSES
from .sales import Sale


def _changed_attributes(target) -> list[str]:
    state = inspect(target)
    return [attr.key for attr in state.attrs if attr.history.has_changes()]


@event.listens_for(AuditLogEntry, "before_update")
def _audit_entry_before_update(mapper, connection, target):
    changed = _changed_attributes(target)
    if changed:
        raise ImmutableRecordError(
            f"Audit log entry {target.id} is append-only",
            details={"changed": changed},
        )


@event.listens_for(AuditLogEntry, "before_delete")
def _audit_entry_before_delete(mapper, connection, target):
    raise ImmutableRecordError(f"Audit log entry {target.id} cannot be deleted")


@event.listens_for(Sale, "before_update")
def _sale_before_update(mapper, connection, target):
    changed = _changed_attributes(target)
    if changed:
        raise ImmutableRecordError(
            f"Sale {target.id} is immutable once recorded",
            details={"changed": changed},
        )


@event.listens_for(Sale, "before_delete")
def _sale_before_delete(mapper, connection, target):
    raise ImmutableRecordError(f"Sale {target.id} cannot be deleted")


@event.listens_for(StockEntry, "before_update")
def _stock_entry_before_update(mapper, connection, target):
    # Compare against the status loaded from the database, not the new one
    history = inspect(target).attrs.status.history
    if history.deleted:
        previous = history.deleted[0]
    else:
        previous = history.unchanged[0] if history.unchanged else None
    if previous in TERMINAL_STOCK_STATUSES and _changed_attributes(target):
        raise ImmutableRecordError(
            f"Stock entry {target.id} is already {previous}",
            details={"status": previous},
        )


@event.listens_for(StockEntry, "before_delete")
def _stock_entry_before_delete(mapper, connection, target):
    raise ImmutableRecordError(f"Stock entry {target.id} cannot be deleted")
