"""Constraint reader registry.

Maps each wire type code to a parser that validates a ``ConstraintRecord``
and builds the corresponding constraint. The table is an immutable mapping
built once at import, so lookups need no synchronization.

Typical use from a profile reader:

    parser = lookup(record.type_code)
    constraint = parser(record, profile_fields, rule)

or, validating the raw record as well:

    constraint = read_constraint({"field": "price", "is": "greaterThan", "value": 10}, profile_fields, rule)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Callable, Mapping

from pydantic import ValidationError

from datagen.core.config import MAX_INT
from datagen.core.errors import ProfileValidationError
from datagen.core.fields import Field, FieldResolver, FieldType
from datagen.core.rules import ConstraintRule, UNATTRIBUTED
from .atomic import (
    ContainsRegexConstraint,
    EqualToConstraint,
    FormatConstraint,
    IsAfterConstantDateTimeConstraint,
    IsAfterOrEqualToConstantDateTimeConstraint,
    IsBeforeConstantDateTimeConstraint,
    IsBeforeOrEqualToConstantDateTimeConstraint,
    IsGranularToConstraint,
    IsGreaterThanConstantConstraint,
    IsGreaterThanOrEqualToConstantConstraint,
    IsInSetConstraint,
    IsLessThanConstantConstraint,
    IsLessThanOrEqualToConstantConstraint,
    IsNullConstraint,
    IsOfTypeConstraint,
    IsStringLongerThanConstraint,
    IsStringShorterThanConstraint,
    MatchesRegexConstraint,
    MatchesStandardConstraint,
    StringHasLengthConstraint,
)
from .grammatical import AndConstraint, Constraint
from .parsing import (
    parse_date_object,
    parse_granularity,
    parse_length,
    parse_literal,
    parse_number,
    parse_regex,
    parse_standard,
    parse_string,
    profile_error,
)
from .schema import AtomicConstraintType, ConstraintRecord

logger = logging.getLogger(__name__)

ConstraintParser = Callable[[ConstraintRecord, FieldResolver, ConstraintRule], Constraint]

_TYPE_NAMES: dict[str, FieldType] = {
    "decimal": FieldType.NUMERIC,
    "string": FieldType.STRING,
    "datetime": FieldType.DATETIME,
    "boolean": FieldType.BOOLEAN,
}

_LEGACY_TYPE_NAMES: dict[str, str] = {
    "numeric": "Numeric type is ambiguous, use 'decimal' or 'integer' instead",
    "temporal": "Temporal type has been renamed, use 'datetime' instead",
}


# =============================================================================
# Reader Builders
# =============================================================================

def _resolve_field(record: ConstraintRecord, fields: FieldResolver) -> Field:
    try:
        return fields.get_by_name(record.field)
    except ProfileValidationError as exc:
        raise profile_error(record, exc.detail) from exc


def _operand_reader(constraint_cls: type, parse_operand: Callable[[Any, ConstraintRecord], Any]) -> ConstraintParser:
    """Reader for constraints taking a single ``value`` operand."""

    def read(record: ConstraintRecord, fields: FieldResolver, rule: ConstraintRule) -> Constraint:
        operand = parse_operand(record.value, record)
        return constraint_cls(_resolve_field(record, fields), operand, rule=rule)

    return read


def _length_reader(
    constraint_cls: type,
    lower: int,
    upper: int,
    lower_inclusive: bool = True,
    upper_inclusive: bool = True,
) -> ConstraintParser:
    def parse_operand(value: Any, record: ConstraintRecord) -> int:
        return parse_length(value, record, lower, upper, lower_inclusive, upper_inclusive)

    return _operand_reader(constraint_cls, parse_operand)


# =============================================================================
# Specific Readers
# =============================================================================

def _read_in_set(record: ConstraintRecord, fields: FieldResolver, rule: ConstraintRule) -> Constraint:
    if record.values is None:
        raise profile_error(record, "Couldn't recognise 'values' property, it must be set to a list")
    if not record.values:
        raise profile_error(record, "Set must contain at least one value")
    if any(v is None for v in record.values):
        raise profile_error(
            record, "Cannot create an inSet constraint containing null, use a separate null constraint"
        )
    values = tuple(parse_literal(v, record) for v in record.values)
    return IsInSetConstraint(_resolve_field(record, fields), values, rule=rule)


def _read_is_null(record: ConstraintRecord, fields: FieldResolver, rule: ConstraintRule) -> Constraint:
    return IsNullConstraint(_resolve_field(record, fields), rule=rule)


def _read_of_type(record: ConstraintRecord, fields: FieldResolver, rule: ConstraintRule) -> Constraint:
    value = record.value
    if not isinstance(value, str):
        raise profile_error(record, f"Type must be a string, got {value!r}")
    if value in _LEGACY_TYPE_NAMES:
        raise profile_error(record, _LEGACY_TYPE_NAMES[value])

    field = _resolve_field(record, fields)
    if value == "integer":
        return AndConstraint((
            IsOfTypeConstraint(field, FieldType.NUMERIC, rule=rule),
            IsGranularToConstraint(field, Decimal(1), rule=rule),
        ))
    if value not in _TYPE_NAMES:
        options = ", ".join([*_TYPE_NAMES, "integer"])
        raise profile_error(record, f"Unrecognised type '{value}', expected one of: {options}")
    return IsOfTypeConstraint(field, _TYPE_NAMES[value], rule=rule)


# =============================================================================
# Registry
# =============================================================================

_READERS: Mapping[str, ConstraintParser] = MappingProxyType({
    AtomicConstraintType.EQUAL_TO.value: _operand_reader(EqualToConstraint, parse_literal),
    AtomicConstraintType.IN_SET.value: _read_in_set,
    AtomicConstraintType.MATCHING_REGEX.value: _operand_reader(MatchesRegexConstraint, parse_regex),
    AtomicConstraintType.CONTAINING_REGEX.value: _operand_reader(ContainsRegexConstraint, parse_regex),
    AtomicConstraintType.A_VALID.value: _operand_reader(MatchesStandardConstraint, parse_standard),
    AtomicConstraintType.FORMATTED_AS.value: _operand_reader(FormatConstraint, parse_string),
    AtomicConstraintType.IS_NULL.value: _read_is_null,
    AtomicConstraintType.OF_TYPE.value: _read_of_type,
    AtomicConstraintType.GREATER_THAN.value: _operand_reader(IsGreaterThanConstantConstraint, parse_number),
    AtomicConstraintType.GREATER_THAN_OR_EQUAL_TO.value: _operand_reader(
        IsGreaterThanOrEqualToConstantConstraint, parse_number
    ),
    AtomicConstraintType.LESS_THAN.value: _operand_reader(IsLessThanConstantConstraint, parse_number),
    AtomicConstraintType.LESS_THAN_OR_EQUAL_TO.value: _operand_reader(
        IsLessThanOrEqualToConstantConstraint, parse_number
    ),
    AtomicConstraintType.AFTER.value: _operand_reader(IsAfterConstantDateTimeConstraint, parse_date_object),
    AtomicConstraintType.AFTER_OR_AT.value: _operand_reader(
        IsAfterOrEqualToConstantDateTimeConstraint, parse_date_object
    ),
    AtomicConstraintType.BEFORE.value: _operand_reader(IsBeforeConstantDateTimeConstraint, parse_date_object),
    AtomicConstraintType.BEFORE_OR_AT.value: _operand_reader(
        IsBeforeOrEqualToConstantDateTimeConstraint, parse_date_object
    ),
    AtomicConstraintType.GRANULAR_TO.value: _operand_reader(IsGranularToConstraint, parse_granularity),
    AtomicConstraintType.LONGER_THAN.value: _length_reader(
        IsStringLongerThanConstraint, 0, MAX_INT, upper_inclusive=False
    ),
    AtomicConstraintType.SHORTER_THAN.value: _length_reader(
        IsStringShorterThanConstraint, 0, MAX_INT, lower_inclusive=False
    ),
    AtomicConstraintType.OF_LENGTH.value: _length_reader(StringHasLengthConstraint, 0, MAX_INT),
})

logger.debug("Registered %d constraint readers", len(_READERS))


def lookup(type_code: str) -> ConstraintParser | None:
    """Get the parser for a wire type code, or None if the code is unknown."""
    return _READERS.get(type_code)


def type_codes() -> frozenset[str]:
    """All type codes the registry can read."""
    return frozenset(_READERS)


def _to_record(raw: ConstraintRecord | Mapping[str, Any]) -> ConstraintRecord:
    if isinstance(raw, ConstraintRecord):
        return raw
    try:
        return ConstraintRecord.model_validate(raw)
    except ValidationError as exc:
        field = raw.get("field") if isinstance(raw, Mapping) else None
        code = raw.get("is") if isinstance(raw, Mapping) else None
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in exc.errors()
        )
        raise ProfileValidationError(
            f"Malformed constraint record: {problems}", field=field, constraint_code=code
        ) from exc


def read_constraint(
    raw: ConstraintRecord | Mapping[str, Any],
    fields: FieldResolver,
    rule: ConstraintRule = UNATTRIBUTED,
) -> Constraint:
    """Validate a raw constraint record and parse it into a constraint."""
    record = _to_record(raw)
    parser = lookup(record.type_code)
    if parser is None:
        raise ProfileValidationError(
            f"Unrecognised constraint type '{record.type_code}'",
            field=record.field,
            constraint_code=record.type_code,
        )
    try:
        return parser(record, fields, rule)
    except ProfileValidationError as exc:
        logger.debug("Rejected constraint record %s: %s", record.model_dump(by_alias=True), exc)
        raise
