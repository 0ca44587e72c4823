"""Atomic constraints - one indivisible rule on a single field.

Atomic constraints form a closed sum type (``AtomicConstraint``): one frozen
dataclass per constraint kind, plus two wrappers:

- ``NotConstraint`` negates kinds that have no same-family complement
  (equal-to, in-set, regex, standard, null, type, length, granularity,
  format). Numeric and datetime comparisons negate structurally instead,
  e.g. greater-than <-> less-than-or-equal.
- ``ViolatedAtomicConstraint`` changes only rule attribution, so data
  generated from it is reported against the violated rule.

Equality and hash cover the field and the operand, never the rule.
Operands are validated by the constraint readers before they get here; the
only check left at construction is that no operand is missing.
"""

from __future__ import annotations

import re
from dataclasses import KW_ONLY, dataclass, field as dc_field, fields
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, ClassVar, Union

from datagen.core.errors import InvalidArgumentError
from datagen.core.fields import Field, FieldType
from datagen.core.rules import ConstraintRule, UNATTRIBUTED
from datagen.core.values import distinct, value_key
from datagen.restrictions.linear import Timescale
from datagen.restrictions.standards import StandardFormat


# =============================================================================
# Base
# =============================================================================

@dataclass(frozen=True)
class _Atomic:
    """Shared shape of every operand-carrying constraint."""

    field: Field
    _: KW_ONLY
    rule: ConstraintRule = dc_field(default=UNATTRIBUTED, compare=False, repr=False)

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) is None:
                raise InvalidArgumentError(f"Argument '{f.name}' cannot be null.")

    def get_rule(self) -> ConstraintRule:
        return self.rule

    def negate(self) -> AtomicConstraint:
        return NotConstraint(self)

    def to_label(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_label().replace(self.field.name, f"`{self.field.name}`", 1)


def _format_operand(value: Any) -> str:
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


# =============================================================================
# Membership
# =============================================================================

@dataclass(frozen=True, eq=False)
class EqualToConstraint(_Atomic):
    value: Any

    def to_label(self) -> str:
        return f"{self.field.name} = {_format_operand(self.value)}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EqualToConstraint):
            return NotImplemented
        return self.field == other.field and value_key(self.value) == value_key(other.value)

    def __hash__(self) -> int:
        return hash((EqualToConstraint, self.field, value_key(self.value)))


@dataclass(frozen=True, eq=False)
class IsInSetConstraint(_Atomic):
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "values", distinct(self.values))
        if not self.values:
            raise InvalidArgumentError("Argument 'values' cannot be empty.")

    def to_label(self) -> str:
        return f"{self.field.name} in [{', '.join(_format_operand(v) for v in self.values)}]"

    def _keys(self) -> frozenset:
        return frozenset(value_key(v) for v in self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IsInSetConstraint):
            return NotImplemented
        return self.field == other.field and self._keys() == other._keys()

    def __hash__(self) -> int:
        return hash((IsInSetConstraint, self.field, self._keys()))


@dataclass(frozen=True)
class IsNullConstraint(_Atomic):
    def to_label(self) -> str:
        return f"{self.field.name} is null"


@dataclass(frozen=True)
class IsOfTypeConstraint(_Atomic):
    type: FieldType

    def to_label(self) -> str:
        return f"{self.field.name} is {self.type.value}"


# =============================================================================
# Patterns and Standards
# =============================================================================

@dataclass(frozen=True)
class _PatternConstraint(_Atomic):
    """Regex operands are held as source text and compared by it."""

    regex: str

    def __post_init__(self) -> None:
        if isinstance(self.regex, re.Pattern):
            object.__setattr__(self, "regex", self.regex.pattern)
        super().__post_init__()
        try:
            re.compile(self.regex)
        except re.error as exc:
            raise InvalidArgumentError(f"Invalid regular expression /{self.regex}/: {exc}") from exc

    @property
    def pattern(self) -> re.Pattern:
        return re.compile(self.regex)


@dataclass(frozen=True)
class MatchesRegexConstraint(_PatternConstraint):
    def to_label(self) -> str:
        return f"{self.field.name} matches /{self.regex}/"


@dataclass(frozen=True)
class ContainsRegexConstraint(_PatternConstraint):
    def to_label(self) -> str:
        return f"{self.field.name} contains /{self.regex}/"


@dataclass(frozen=True)
class MatchesStandardConstraint(_Atomic):
    standard: StandardFormat

    def to_label(self) -> str:
        return f"{self.field.name} is a valid {self.standard.value}"


@dataclass(frozen=True)
class FormatConstraint(_Atomic):
    format: str

    def to_label(self) -> str:
        return f"{self.field.name} formatted as {self.format!r}"


# =============================================================================
# Numeric Comparisons
# =============================================================================

@dataclass(frozen=True)
class _NumericComparison(_Atomic):
    value: Decimal

    symbol: ClassVar[str] = "?"

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float, Decimal)):
            raise InvalidArgumentError(f"Argument 'value' must be a number, got {self.value!r}")
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(str(self.value)))

    def to_label(self) -> str:
        return f"{self.field.name} {self.symbol} {self.value}"


@dataclass(frozen=True)
class IsGreaterThanConstantConstraint(_NumericComparison):
    symbol: ClassVar[str] = ">"

    def negate(self) -> AtomicConstraint:
        return IsLessThanOrEqualToConstantConstraint(self.field, self.value, rule=self.rule)


@dataclass(frozen=True)
class IsGreaterThanOrEqualToConstantConstraint(_NumericComparison):
    symbol: ClassVar[str] = ">="

    def negate(self) -> AtomicConstraint:
        return IsLessThanConstantConstraint(self.field, self.value, rule=self.rule)


@dataclass(frozen=True)
class IsLessThanConstantConstraint(_NumericComparison):
    symbol: ClassVar[str] = "<"

    def negate(self) -> AtomicConstraint:
        return IsGreaterThanOrEqualToConstantConstraint(self.field, self.value, rule=self.rule)


@dataclass(frozen=True)
class IsLessThanOrEqualToConstantConstraint(_NumericComparison):
    symbol: ClassVar[str] = "<="

    def negate(self) -> AtomicConstraint:
        return IsGreaterThanConstantConstraint(self.field, self.value, rule=self.rule)


# =============================================================================
# Datetime Comparisons
# =============================================================================

@dataclass(frozen=True)
class _DateTimeComparison(_Atomic):
    value: datetime

    keyword: ClassVar[str] = "?"

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.value, datetime):
            raise InvalidArgumentError(f"Argument 'value' must be a datetime, got {self.value!r}")
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))

    def to_label(self) -> str:
        return f"{self.field.name} {self.keyword} {_format_operand(self.value)}"


@dataclass(frozen=True)
class IsAfterConstantDateTimeConstraint(_DateTimeComparison):
    keyword: ClassVar[str] = "after"

    def negate(self) -> AtomicConstraint:
        return IsBeforeOrEqualToConstantDateTimeConstraint(self.field, self.value, rule=self.rule)


@dataclass(frozen=True)
class IsAfterOrEqualToConstantDateTimeConstraint(_DateTimeComparison):
    keyword: ClassVar[str] = "after or at"

    def negate(self) -> AtomicConstraint:
        return IsBeforeConstantDateTimeConstraint(self.field, self.value, rule=self.rule)


@dataclass(frozen=True)
class IsBeforeConstantDateTimeConstraint(_DateTimeComparison):
    keyword: ClassVar[str] = "before"

    def negate(self) -> AtomicConstraint:
        return IsAfterOrEqualToConstantDateTimeConstraint(self.field, self.value, rule=self.rule)


@dataclass(frozen=True)
class IsBeforeOrEqualToConstantDateTimeConstraint(_DateTimeComparison):
    keyword: ClassVar[str] = "before or at"

    def negate(self) -> AtomicConstraint:
        return IsAfterConstantDateTimeConstraint(self.field, self.value, rule=self.rule)


# =============================================================================
# Granularity
# =============================================================================

@dataclass(frozen=True)
class IsGranularToConstraint(_Atomic):
    """Numeric granularity is a power-of-ten step, datetime a Timescale."""

    granularity: Decimal | Timescale

    def to_label(self) -> str:
        value = self.granularity.value if isinstance(self.granularity, Timescale) else self.granularity
        return f"{self.field.name} granular to {value}"


# =============================================================================
# String Lengths
# =============================================================================

@dataclass(frozen=True)
class IsStringLongerThanConstraint(_Atomic):
    length: int

    def to_label(self) -> str:
        return f"{self.field.name} length > {self.length}"


@dataclass(frozen=True)
class IsStringShorterThanConstraint(_Atomic):
    length: int

    def to_label(self) -> str:
        return f"{self.field.name} length < {self.length}"


@dataclass(frozen=True)
class StringHasLengthConstraint(_Atomic):
    length: int

    def to_label(self) -> str:
        return f"{self.field.name} length = {self.length}"


# =============================================================================
# Wrappers
# =============================================================================

@dataclass(frozen=True)
class NotConstraint:
    """Logical complement of a constraint with no structural negation."""

    negated: AtomicConstraint

    def __post_init__(self) -> None:
        if self.negated is None:
            raise InvalidArgumentError("Argument 'negated' cannot be null.")

    @property
    def field(self) -> Field:
        return self.negated.field

    def get_rule(self) -> ConstraintRule:
        return self.negated.get_rule()

    def negate(self) -> AtomicConstraint:
        return self.negated

    def to_label(self) -> str:
        return f"NOT({self.negated.to_label()})"

    def __str__(self) -> str:
        return f"NOT({self.negated})"


@dataclass(frozen=True)
class ViolatedAtomicConstraint:
    """Attributes a constraint to the violated form of its rule."""

    violated: AtomicConstraint

    def __post_init__(self) -> None:
        if self.violated is None:
            raise InvalidArgumentError("Argument 'violated' cannot be null.")

    @property
    def field(self) -> Field:
        return self.violated.field

    def get_rule(self) -> ConstraintRule:
        return self.violated.get_rule().violate()

    def negate(self) -> AtomicConstraint:
        return ViolatedAtomicConstraint(self.violated.negate())

    def to_label(self) -> str:
        return self.violated.to_label()

    def __str__(self) -> str:
        return f"Violated: {self.violated}"


AtomicConstraint = Union[
    EqualToConstraint,
    IsInSetConstraint,
    IsNullConstraint,
    IsOfTypeConstraint,
    MatchesRegexConstraint,
    ContainsRegexConstraint,
    MatchesStandardConstraint,
    FormatConstraint,
    IsGreaterThanConstantConstraint,
    IsGreaterThanOrEqualToConstantConstraint,
    IsLessThanConstantConstraint,
    IsLessThanOrEqualToConstantConstraint,
    IsAfterConstantDateTimeConstraint,
    IsAfterOrEqualToConstantDateTimeConstraint,
    IsBeforeConstantDateTimeConstraint,
    IsBeforeOrEqualToConstantDateTimeConstraint,
    IsGranularToConstraint,
    IsStringLongerThanConstraint,
    IsStringShorterThanConstraint,
    StringHasLengthConstraint,
    NotConstraint,
    ViolatedAtomicConstraint,
]
