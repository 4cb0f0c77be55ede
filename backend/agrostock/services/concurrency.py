# Overview: Service-layer operations for concurrency; one lock and one transaction per ledger operation.

from __future__ import annotations

import threading
import time

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError

from ..extensions import db


# Guards the product catalog, stock intake registry, sales ledger and audit
# trail as one unit. Re-entrant so read helpers may be called while held.
ledger_lock = threading.RLock()


def lock_for_update(query):
    """
    Apply row-level locking for critical operations.

    NOTE: SQLite ignores SELECT ... FOR UPDATE, but other DBs will honor it.
    """
    return query.with_for_update()


def run_with_retry(func, *, attempts: int = 3, backoff_base: float = 0.1):
    """
    Execute a DB operation with retry on concurrency-related failures.

    Retries on OperationalError (deadlocks, locks) and StaleDataError
    (optimistic locking conflicts). Ledger errors are never retried.
    """
    last_exc = None
    for attempt in range(attempts):
        try:
            return func()
        except (OperationalError, StaleDataError) as exc:
            db.session.rollback()
            last_exc = exc
            if attempt >= attempts - 1:
                raise
            time.sleep(backoff_base * (2 ** attempt))
    if last_exc:
        raise last_exc


def run_atomically(func, *, attempts: int = 3):
    """
    Run a mutating ledger operation as one all-or-nothing unit.

    - Holds ledger_lock for the whole operation, so no other caller can
      observe an intermediate state.
    - Commits once on success; rolls back every pending change on any
      exception and re-raises it unchanged.

    `func` must only flush, never commit.
    """
    def _op():
        try:
            result = func()
            db.session.commit()
            return result
        except Exception:
            db.session.rollback()
            raise

    with ledger_lock:
        return run_with_retry(_op, attempts=attempts)
