from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from agrostock.exceptions import InvalidInputError


# Maximum price: 9,999,999.99 (999,999,999 kobo)
# This prevents database overflow issues and nonsensical prices
MAX_PRICE_CENTS = 999_999_999

# Largest quantity, weight or stock change accepted in one operation
MAX_QUANTITY = 1_000_000_000

# Ceiling for a product's stock level and for any stored kobo amount;
# SQLite INTEGER is a signed 64-bit value
MAX_STOCK_LEVEL = 10**15
MAX_STORED_INT = 2**63 - 1

MINOR_UNITS = 100
_CENT = Decimal("0.01")


def require_int(value: Any, field: str) -> int:
    """
    Strict integer coercion.

    Accepts ints and plain-digit strings. Rejects bools, floats, decimals
    and scientific notation.
    """
    # Already an int (but not bool which is a subclass of int)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise InvalidInputError(f"{field} must be an integer", details={"field": field})
        if 'e' in stripped.lower():
            raise InvalidInputError(
                f"{field} must be a plain integer (scientific notation not allowed)",
                details={"field": field},
            )
        if '.' in stripped:
            raise InvalidInputError(f"{field} must be an integer (no decimals)", details={"field": field})
        try:
            return int(stripped)
        except ValueError:
            raise InvalidInputError(f"{field} must be an integer", details={"field": field})
    if isinstance(value, float):
        raise InvalidInputError(f"{field} must be an integer, not a decimal", details={"field": field})
    raise InvalidInputError(f"{field} must be an integer", details={"field": field})


def _require_at_most(number: int, field: str, maximum: int) -> None:
    if number > maximum:
        raise InvalidInputError(
            f"{field} cannot exceed {maximum:,}",
            details={"field": field, "value": number, "maximum": maximum},
        )


def require_positive_int(value: Any, field: str, *, maximum: int = MAX_QUANTITY) -> int:
    number = require_int(value, field)
    if number <= 0:
        raise InvalidInputError(f"{field} must be positive", details={"field": field, "value": number})
    _require_at_most(number, field, maximum)
    return number


def require_non_negative_int(value: Any, field: str, *, maximum: int = MAX_QUANTITY) -> int:
    number = require_int(value, field)
    if number < 0:
        raise InvalidInputError(f"{field} cannot be negative", details={"field": field, "value": number})
    _require_at_most(number, field, maximum)
    return number


def require_text(value: Any, field: str, *, max_length: int = 255) -> str:
    """Non-empty, stripped string."""
    if value is None:
        raise InvalidInputError(f"{field} is required", details={"field": field})
    text = str(value).strip()
    if not text:
        raise InvalidInputError(f"{field} is required", details={"field": field})
    if len(text) > max_length:
        raise InvalidInputError(
            f"{field} must be at most {max_length} characters",
            details={"field": field},
        )
    return text


def optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_cents(value: Any, field: str = "unit_price") -> int:
    """
    Convert a major-unit amount (int, Decimal or numeric string) to minor units.

    Floats are accepted only when they carry no sub-kobo precision, so binary
    float drift never reaches the ledger.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{field} must be a number", details={"field": field})

    try:
        if isinstance(value, float):
            amount = Decimal(repr(value))
        else:
            amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidInputError(f"{field} must be a number", details={"field": field})

    if not amount.is_finite():
        raise InvalidInputError(f"{field} must be a finite number", details={"field": field})
    if amount < 0:
        raise InvalidInputError(f"{field} cannot be negative", details={"field": field})
    if amount * MINOR_UNITS > MAX_PRICE_CENTS:
        raise InvalidInputError(f"{field} exceeds the maximum allowed amount", details={"field": field})
    if amount != amount.quantize(_CENT, rounding=ROUND_HALF_UP):
        raise InvalidInputError(
            f"{field} cannot have more than two decimal places",
            details={"field": field},
        )

    return int(amount * MINOR_UNITS)


def cents_to_decimal(cents: int | None) -> Decimal:
    if cents is None:
        return Decimal("0.00")
    return (Decimal(cents) / MINOR_UNITS).quantize(_CENT)
