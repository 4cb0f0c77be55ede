# Overview: UTC helpers for ledger timestamps and business dates.

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime (the stored form)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a delivery or sale timestamp into naive UTC.

    Accepts "2024-05-20T14:30:00Z", offsets such as "+01:00" (converted to
    UTC), and naive values (taken as UTC). Blank input gives None; malformed
    input raises ValueError.
    """
    if _blank(value):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """Parse an expiry date ("YYYY-MM-DD"). Blank input gives None."""
    if _blank(value):
        return None
    return date.fromisoformat(value.strip())


def to_utc_z(dt: Optional[datetime]) -> Optional[str]:
    """Render a stored datetime as second-precision ISO-8601 with a trailing Z."""
    if dt is None:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt.replace(microsecond=0).isoformat() + "Z"
