# Overview: Error taxonomy shared by every ledger operation.

"""
Ledger errors

Every expected failure of a ledger operation is one of these types. They are
raised before any state is mutated and carry a stable ``code`` the view layer
can show to the actor.
"""


class LedgerError(Exception):
    """Base class for expected, recoverable ledger failures."""

    code = "LEDGER_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PermissionDeniedError(LedgerError):
    """Raised when the actor's role lacks the capability for an operation."""

    code = "PERMISSION_DENIED"


class NotFoundError(LedgerError):
    """Raised when a referenced product, entry, sale or user does not exist."""

    code = "NOT_FOUND"


class InvalidTransitionError(LedgerError):
    """Raised when a stock entry is not in a state that allows the transition."""

    code = "INVALID_TRANSITION"


class InsufficientStockError(LedgerError):
    """Raised when a stock change would drive current stock below zero."""

    code = "INSUFFICIENT_STOCK"


class InvalidInputError(LedgerError):
    """Raised when caller-supplied values fail validation."""

    code = "INVALID_INPUT"


class ImmutableRecordError(LedgerError):
    """Raised by ORM listeners when an append-only or terminal record is changed."""

    code = "IMMUTABLE_RECORD"
