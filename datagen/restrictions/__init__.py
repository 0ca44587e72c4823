"""Typed restrictions - per-datatype value-space limits that intersect."""

from typing import Union

from .impossible import Impossible, IMPOSSIBLE, is_impossible
from .nullness import Nullness
from .boolean import BooleanRestrictions
from .standards import StandardFormat, is_valid_isin, is_valid_sedol, is_valid_cusip
from .linear import (
    Limit,
    Granularity,
    NumericGranularity,
    DateTimeGranularity,
    Timescale,
    LinearRestrictions,
    NumericRestrictions,
    DateTimeRestrictions,
    default_numeric_restrictions,
    default_datetime_restrictions,
)
from .string import StringRestrictions, default_string_restrictions

TypedRestrictions = Union[
    NumericRestrictions,
    DateTimeRestrictions,
    StringRestrictions,
    BooleanRestrictions,
]

__all__ = [
    # Outcome
    "Impossible",
    "IMPOSSIBLE",
    "is_impossible",
    # Null policy
    "Nullness",
    # Boolean
    "BooleanRestrictions",
    # Standards
    "StandardFormat",
    "is_valid_isin",
    "is_valid_sedol",
    "is_valid_cusip",
    # Linear
    "Limit",
    "Granularity",
    "NumericGranularity",
    "DateTimeGranularity",
    "Timescale",
    "LinearRestrictions",
    "NumericRestrictions",
    "DateTimeRestrictions",
    "default_numeric_restrictions",
    "default_datetime_restrictions",
    # String
    "StringRestrictions",
    "default_string_restrictions",
    # Union
    "TypedRestrictions",
]
