"""Operand parsing and validation for constraint records.

Every helper either returns a value that is safe to hand to the atomic
constraint model or raises ``ProfileValidationError`` naming the field and
the constraint type code.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from datagen.core.config import DATETIME_MAX, DATETIME_MIN, NUMERIC_MAX, NUMERIC_MIN
from datagen.core.errors import ProfileValidationError
from datagen.restrictions.linear import Timescale
from datagen.restrictions.standards import StandardFormat
from .schema import ConstraintRecord

DATE_FORMAT = "yyyy-MM-ddTHH:mm:ss.SSS[Z]"

_DATE_RE = re.compile(
    r"(?P<year>[0-9]{4,})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})\.(?P<millis>[0-9]{3})"
    r"(?P<offset>Z|[+-][0-9]{2}:?[0-9]{2})?"
)

_MAX_OFFSET_HOURS = 18


def profile_error(record: ConstraintRecord, detail: str) -> ProfileValidationError:
    return ProfileValidationError(detail, field=record.field, constraint_code=record.type_code)


def _describe_bounds() -> str:
    return (
        f"between {DATETIME_MIN.isoformat(timespec='milliseconds')} "
        f"and {DATETIME_MAX.isoformat(timespec='milliseconds')}"
    )


# =============================================================================
# Dates
# =============================================================================

def _parse_offset(text: str | None) -> timezone | None:
    if text is None or text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours, minutes = int(digits[:2]), int(digits[2:])
    if hours > _MAX_OFFSET_HOURS or minutes >= 60:
        return None
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_date(literal: str, record: ConstraintRecord) -> datetime:
    """Parse a strict ISO-8601 literal into a UTC datetime within years 1-9999."""
    match = _DATE_RE.fullmatch(literal)
    if not match:
        raise profile_error(
            record, f"Date string '{literal}' must be in ISO-8601 format: {DATE_FORMAT}"
        )

    year = int(match["year"])
    if not 1 <= year <= 9999:
        raise profile_error(record, f"Date string '{literal}' must be {_describe_bounds()}")

    tz = _parse_offset(match["offset"])
    if tz is None:
        raise profile_error(record, f"Date string '{literal}' has an invalid UTC offset")

    try:
        parsed = datetime(
            year,
            int(match["month"]),
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            int(match["millis"]) * 1000,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise profile_error(record, f"Date string '{literal}' is not a valid date: {exc}") from exc

    try:
        parsed = parsed.astimezone(timezone.utc)
    except OverflowError:
        raise profile_error(record, f"Date string '{literal}' must be {_describe_bounds()}") from None

    if not DATETIME_MIN <= parsed <= DATETIME_MAX:
        raise profile_error(record, f"Date string '{literal}' must be {_describe_bounds()}")
    return parsed


def parse_date_object(value: Any, record: ConstraintRecord) -> datetime:
    """Parse an operand that must be a ``{"date": "..."}`` object."""
    if not isinstance(value, dict):
        raise profile_error(
            record,
            f"Dates should be expressed in object format e.g. {{ \"date\": \"{DATE_FORMAT}\" }}, "
            f"got {value!r}",
        )
    if set(value) != {"date"}:
        raise profile_error(record, f"Object values must be date objects with a single 'date' key, got {value!r}")
    literal = value["date"]
    if not isinstance(literal, str):
        raise profile_error(record, f"Date value must be a string in format {DATE_FORMAT}, got {literal!r}")
    return parse_date(literal, record)


# =============================================================================
# Numbers
# =============================================================================

def is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def parse_number(value: Any, record: ConstraintRecord) -> Decimal:
    """Parse a finite number within the global numeric bounds."""
    if value is None:
        raise profile_error(record, "Couldn't recognise 'value' property, it must be set to a number")
    if not is_number(value):
        raise profile_error(record, f"Value {value!r} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise profile_error(record, f"Value {value!r} must be a finite number")

    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise profile_error(record, f"Value {value!r} must be a number") from exc
    if not number.is_finite():
        raise profile_error(record, f"Value {value!r} must be a finite number")

    if number < NUMERIC_MIN:
        raise profile_error(record, f"Value {number} must be greater than or equal to {NUMERIC_MIN}")
    if number > NUMERIC_MAX:
        raise profile_error(record, f"Value {number} must be less than or equal to {NUMERIC_MAX}")
    return number


def parse_length(
    value: Any,
    record: ConstraintRecord,
    lower: int,
    upper: int,
    lower_inclusive: bool = True,
    upper_inclusive: bool = True,
) -> int:
    """Parse a whole-number string length within the given bounds."""
    number = parse_number(value, record)
    if number != number.to_integral_value():
        raise profile_error(record, f"Value {value!r} must be an integer")

    length = int(number)
    if length < lower or (length == lower and not lower_inclusive):
        comparison = "greater than or equal to" if lower_inclusive else "greater than"
        raise profile_error(record, f"Value {length} must be {comparison} {lower}")
    if length > upper or (length == upper and not upper_inclusive):
        comparison = "less than or equal to" if upper_inclusive else "less than"
        raise profile_error(record, f"Value {length} must be {comparison} {upper}")
    return length


# =============================================================================
# Granularity, Patterns, Standards
# =============================================================================

def parse_granularity(value: Any, record: ConstraintRecord) -> Decimal | Timescale:
    """Parse a power-of-ten numeric step or a datetime unit name."""
    if isinstance(value, str):
        try:
            return Timescale(value)
        except ValueError:
            options = ", ".join(ts.value for ts in Timescale)
            raise profile_error(
                record, f"Granularity '{value}' is not a datetime unit, expected one of: {options}"
            ) from None

    step = parse_number(value, record)
    digits = step.normalize().as_tuple()
    if step <= 0 or step > 1 or digits.digits != (1,):
        raise profile_error(
            record,
            f"Numeric granularity {value!r} must be 1 or a fractional power of ten (e.g. 0.1, 0.01)",
        )
    return step.normalize()


def parse_regex(value: Any, record: ConstraintRecord) -> str:
    if not isinstance(value, str):
        raise profile_error(record, f"Regular expression must be a string, got {value!r}")
    try:
        re.compile(value)
    except re.error as exc:
        raise profile_error(record, f"Invalid regular expression /{value}/: {exc}") from exc
    return value


def parse_standard(value: Any, record: ConstraintRecord) -> StandardFormat:
    try:
        return StandardFormat(value)
    except ValueError:
        options = ", ".join(s.value for s in StandardFormat)
        raise profile_error(record, f"Unrecognised standard {value!r}, expected one of: {options}") from None


def parse_string(value: Any, record: ConstraintRecord) -> str:
    if not isinstance(value, str):
        raise profile_error(record, f"Value {value!r} must be a string")
    return value


# =============================================================================
# Literals
# =============================================================================

def parse_literal(value: Any, record: ConstraintRecord) -> Any:
    """Normalize an equality or set-member operand.

    Date objects become UTC datetimes and numbers become ``Decimal`` so that
    scalar and set-contained values share one representation.
    """
    if value is None:
        raise profile_error(record, "Couldn't recognise 'value' property, it must be set to a value")
    if isinstance(value, dict):
        return parse_date_object(value, record)
    if isinstance(value, (bool, str)):
        return value
    if is_number(value):
        return parse_number(value, record)
    raise profile_error(
        record, f"Value {value!r} must be a string, number, boolean or date object"
    )
