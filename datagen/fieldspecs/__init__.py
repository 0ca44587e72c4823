"""Field specifications - the merge algebra over per-field value spaces."""

from .whitelist import Whitelist
from .fieldspec import (
    FieldSpec,
    FieldSpecSource,
    FieldValueSource,
    GeneratorSource,
    EMPTY_FIELD_SPEC,
)
from .factory import FieldSpecFactory, NULL_ONLY
from .constraint_mapping import (
    seed_field_spec,
    field_spec_for,
    must_contain_field_spec,
    merge_constraints,
)

__all__ = [
    # Values
    "Whitelist",
    # Specs
    "FieldSpec",
    "FieldSpecSource",
    "FieldValueSource",
    "GeneratorSource",
    "EMPTY_FIELD_SPEC",
    # Factory
    "FieldSpecFactory",
    "NULL_ONLY",
    # Constraint mapping
    "seed_field_spec",
    "field_spec_for",
    "must_contain_field_spec",
    "merge_constraints",
]
