"""Translate constraints into the field specs that seed the merge.

Each atomic constraint maps to the field spec of values it permits, built from the
configured type defaults. Folding those seeds with ``FieldSpec.merge`` gives
the field spec for every constraint on a field:

    spec = merge_constraints(constraints, start=FieldSpecFactory.from_type_default(field.type))
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, assert_never

from datagen.core.config import MAX_INT
from datagen.core.values import value_key
from datagen.constraints import (
    AndConstraint,
    AtomicConstraint,
    Constraint,
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
    NotConstraint,
    OrConstraint,
    StringHasLengthConstraint,
    ViolatedAtomicConstraint,
)
from datagen.restrictions import (
    DateTimeGranularity,
    Impossible,
    Limit,
    Nullness,
    NumericGranularity,
    StringRestrictions,
    Timescale,
    default_datetime_restrictions,
    default_numeric_restrictions,
    default_string_restrictions,
)
from .factory import NULL_ONLY, FieldSpecFactory
from .fieldspec import EMPTY_FIELD_SPEC, FieldSpec, FieldSpecSource

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def _restricted(restrictions, source: FieldSpecSource) -> FieldSpec | Impossible:
    if isinstance(restrictions, Impossible):
        logger.debug("Constraint %s admits no value: %s", source.constraints[0], restrictions.reason)
        return restrictions
    return FieldSpec(restrictions=restrictions, source=source)


def _string(source: FieldSpecSource, **kwargs) -> FieldSpec | Impossible:
    """Default string restrictions narrowed by the given attributes."""
    narrowed = StringRestrictions(max_length=kwargs.pop("max_length", MAX_INT), **kwargs)
    return _restricted(default_string_restrictions().intersect(narrowed), source)


# =============================================================================
# Seeds
# =============================================================================

def seed_field_spec(constraint: AtomicConstraint) -> FieldSpec | Impossible:
    """The field spec of values a single atomic constraint permits."""
    source = FieldSpecSource((constraint,))

    match constraint:
        case ViolatedAtomicConstraint(violated=inner):
            seed = seed_field_spec(inner)
            return seed if isinstance(seed, Impossible) else seed.with_source(source)
        case NotConstraint(negated=inner):
            return _negated_seed(inner, source)
        case EqualToConstraint(value=value):
            return FieldSpecFactory.from_whitelist([value]).with_source(source)
        case IsInSetConstraint(values=values):
            return FieldSpecFactory.from_whitelist(values).with_source(source)
        case IsNullConstraint():
            return NULL_ONLY.with_source(source)
        case IsOfTypeConstraint(type=field_type):
            return FieldSpecFactory.from_type_default(field_type).with_source(source)
        case MatchesRegexConstraint(regex=regex):
            return _string(source, matching=frozenset({regex}))
        case ContainsRegexConstraint(regex=regex):
            return _string(source, containing=frozenset({regex}))
        case MatchesStandardConstraint(standard=standard):
            return _string(source, standard=standard)
        case FormatConstraint(format=fmt):
            return FieldSpec(formatting=fmt, source=source)
        case IsGreaterThanConstantConstraint(value=value):
            return _restricted(default_numeric_restrictions().with_min(Limit(value, False)), source)
        case IsGreaterThanOrEqualToConstantConstraint(value=value):
            return _restricted(default_numeric_restrictions().with_min(Limit(value, True)), source)
        case IsLessThanConstantConstraint(value=value):
            return _restricted(default_numeric_restrictions().with_max(Limit(value, False)), source)
        case IsLessThanOrEqualToConstantConstraint(value=value):
            return _restricted(default_numeric_restrictions().with_max(Limit(value, True)), source)
        case IsAfterConstantDateTimeConstraint(value=value):
            return _restricted(default_datetime_restrictions().with_min(Limit(value, False)), source)
        case IsAfterOrEqualToConstantDateTimeConstraint(value=value):
            return _restricted(default_datetime_restrictions().with_min(Limit(value, True)), source)
        case IsBeforeConstantDateTimeConstraint(value=value):
            return _restricted(default_datetime_restrictions().with_max(Limit(value, False)), source)
        case IsBeforeOrEqualToConstantDateTimeConstraint(value=value):
            return _restricted(default_datetime_restrictions().with_max(Limit(value, True)), source)
        case IsGranularToConstraint(granularity=Timescale() as timescale):
            restrictions = default_datetime_restrictions().with_granularity(DateTimeGranularity(timescale))
            return _restricted(restrictions, source)
        case IsGranularToConstraint(granularity=step):
            restrictions = default_numeric_restrictions().with_granularity(NumericGranularity.from_step(step))
            return _restricted(restrictions, source)
        case IsStringLongerThanConstraint(length=length):
            return _string(source, min_length=length + 1)
        case IsStringShorterThanConstraint(length=length):
            return _string(source, max_length=length - 1)
        case StringHasLengthConstraint(length=length):
            return _string(source, min_length=length, max_length=length)
        case _:
            assert_never(constraint)


def _negated_seed(inner: AtomicConstraint, source: FieldSpecSource) -> FieldSpec | Impossible:
    match inner:
        case (
            NotConstraint()
            | ViolatedAtomicConstraint()
            | IsGreaterThanConstantConstraint()
            | IsGreaterThanOrEqualToConstantConstraint()
            | IsLessThanConstantConstraint()
            | IsLessThanOrEqualToConstantConstraint()
            | IsAfterConstantDateTimeConstraint()
            | IsAfterOrEqualToConstantDateTimeConstraint()
            | IsBeforeConstantDateTimeConstraint()
            | IsBeforeOrEqualToConstantDateTimeConstraint()
        ):
            # These negate structurally; never wrapped in practice
            seed = seed_field_spec(inner.negate())
            return seed if isinstance(seed, Impossible) else seed.with_source(source)
        case EqualToConstraint(value=value):
            return FieldSpec(blacklist=frozenset({value_key(value)}), source=source)
        case IsInSetConstraint(values=values):
            return FieldSpec(blacklist=frozenset(value_key(v) for v in values), source=source)
        case IsNullConstraint():
            return FieldSpec(nullness=Nullness.MUST_NOT_BE_NULL, source=source)
        case IsOfTypeConstraint(field=field, type=field_type):
            if field_type is field.type:
                return NULL_ONLY.with_source(source)
            return EMPTY_FIELD_SPEC.with_source(source)
        case MatchesRegexConstraint(regex=regex):
            return _string(source, not_matching=frozenset({regex}))
        case ContainsRegexConstraint(regex=regex):
            return _string(source, not_containing=frozenset({regex}))
        case MatchesStandardConstraint(standard=standard):
            return _string(source, excluded_standards=frozenset({standard}))
        case FormatConstraint() | IsGranularToConstraint():
            return EMPTY_FIELD_SPEC.with_source(source)
        case IsStringLongerThanConstraint(length=length):
            return _string(source, max_length=length)
        case IsStringShorterThanConstraint(length=length):
            return _string(source, min_length=length)
        case StringHasLengthConstraint(length=length):
            return _string(source, excluded_lengths=frozenset({length}))
        case _:
            assert_never(inner)


# =============================================================================
# Combination
# =============================================================================

def field_spec_for(constraint: Constraint) -> FieldSpec | Impossible:
    """Spec for an atomic or grammatical constraint.

    A conjunction merges its children; a disjunction becomes a must-contain
    set holding each satisfiable branch.
    """
    if isinstance(constraint, AndConstraint):
        return merge_constraints(constraint.constraints)
    if isinstance(constraint, OrConstraint):
        return must_contain_field_spec(constraint.constraints)
    return seed_field_spec(constraint)


def must_contain_field_spec(constraints: Iterable[Constraint]) -> FieldSpec | Impossible:
    """Spec whose values must satisfy at least one of the given constraints."""
    constraints = tuple(constraints)
    specs = [spec for spec in map(field_spec_for, constraints) if not isinstance(spec, Impossible)]
    if not specs:
        logger.debug("No alternative of %d constraints is satisfiable", len(constraints))
        return Impossible("no alternative is satisfiable")
    source = reduce(FieldSpecSource.combine, (spec.source for spec in specs))
    return FieldSpec(must_contain=frozenset(specs), source=source)


def merge_constraints(
    constraints: Iterable[Constraint],
    start: FieldSpec = EMPTY_FIELD_SPEC,
) -> FieldSpec | Impossible:
    """Fold the specs of several constraints on one field into one spec."""
    result: FieldSpec | Impossible = start
    for constraint in constraints:
        spec = field_spec_for(constraint)
        if isinstance(spec, Impossible):
            return spec
        result = result.merge(spec)
        if isinstance(result, Impossible):
            return result
    return result
