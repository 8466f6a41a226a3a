"""
Lenient coercion of canonical text values into entity field types.

Eager entity fields are built with these helpers. A value that can not be
coerced becomes 0 / "" / False / None; it is never an error.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from tecdoc.contracts.interfaces import CanonicalRecord

_TRUE_VALUES = {"true", "1", "yes", "y", "t"}


def to_int(value: Any) -> int:
    if value is None or isinstance(value, (CanonicalRecord, tuple)):
        return 0
    try:
        return int(str(value).strip())
    except ValueError:
        try:
            return int(float(str(value).strip()))
        except (ValueError, OverflowError):
            return 0


def to_str(value: Any) -> str:
    if value is None or isinstance(value, (CanonicalRecord, tuple)):
        return ""
    return str(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return to_str(value).strip().lower() in _TRUE_VALUES


def to_month_date(value: Any) -> Optional[date]:
    """Parse a ``YYYYMM`` value (``200512``) into the first day of that month."""
    number = to_int(value)
    if number <= 0:
        return None
    year, month = divmod(number, 100)
    try:
        return date(year, month, 1)
    except ValueError:
        return None


def first_text(records: Any) -> str:
    """Return the first non-empty text found in a sequence of records."""
    for record in records or ():
        for value in record.values():
            if isinstance(value, str) and value:
                return value
    return ""
