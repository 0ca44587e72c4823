"""Constraints domain - atomic constraint model and the reader registry."""

from .atomic import (
    AtomicConstraint,
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
)
from .grammatical import AndConstraint, OrConstraint, Constraint, iter_atomic
from .schema import AtomicConstraintType, ConstraintRecord
from .readers import ConstraintParser, lookup, read_constraint, type_codes

__all__ = [
    # Atomic model
    "AtomicConstraint",
    "EqualToConstraint",
    "IsInSetConstraint",
    "IsNullConstraint",
    "IsOfTypeConstraint",
    "MatchesRegexConstraint",
    "ContainsRegexConstraint",
    "MatchesStandardConstraint",
    "FormatConstraint",
    "IsGreaterThanConstantConstraint",
    "IsGreaterThanOrEqualToConstantConstraint",
    "IsLessThanConstantConstraint",
    "IsLessThanOrEqualToConstantConstraint",
    "IsAfterConstantDateTimeConstraint",
    "IsAfterOrEqualToConstantDateTimeConstraint",
    "IsBeforeConstantDateTimeConstraint",
    "IsBeforeOrEqualToConstantDateTimeConstraint",
    "IsGranularToConstraint",
    "IsStringLongerThanConstraint",
    "IsStringShorterThanConstraint",
    "StringHasLengthConstraint",
    "NotConstraint",
    "ViolatedAtomicConstraint",
    # Grammatical
    "AndConstraint",
    "OrConstraint",
    "Constraint",
    "iter_atomic",
    # Wire schema
    "AtomicConstraintType",
    "ConstraintRecord",
    # Registry
    "ConstraintParser",
    "lookup",
    "read_constraint",
    "type_codes",
]
