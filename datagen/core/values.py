"""Value identity for whitelists, blacklists and in-set operands."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Hashable


def value_key(value: Any) -> tuple[str, Hashable]:
    """Key under which two literal values count as the same value.

    Numbers compare by numeric value whatever their Python type, datetimes
    compare in UTC, and booleans never equal numbers.
    """
    if isinstance(value, bool):
        return ("boolean", value)
    if isinstance(value, float):
        return ("numeric", Decimal(str(value)))
    if isinstance(value, (int, Decimal)):
        return ("numeric", value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return ("datetime", value.replace(tzinfo=timezone.utc))
        return ("datetime", value.astimezone(timezone.utc))
    if isinstance(value, str):
        return ("string", value)
    return (type(value).__name__, value)


def distinct(values) -> tuple:
    """Drop repeated values, keeping first occurrences in order."""
    seen: set[tuple[str, Hashable]] = set()
    result = []
    for value in values:
        key = value_key(value)
        if key not in seen:
            seen.add(key)
            result.append(value)
    return tuple(result)
