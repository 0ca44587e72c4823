"""Core types shared by constraints, restrictions and field specs."""

from .config import (
    Settings,
    get_settings,
    NUMERIC_MAX,
    NUMERIC_MIN,
    MAX_INT,
    DATETIME_MIN,
    DATETIME_MAX,
)
from .errors import ProfileValidationError, InvalidArgumentError, UnsupportedTypeError
from .fields import Field, FieldType, FieldResolver, ProfileFields
from .rules import ConstraintRule, UNATTRIBUTED
from .values import value_key, distinct

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "NUMERIC_MAX",
    "NUMERIC_MIN",
    "MAX_INT",
    "DATETIME_MIN",
    "DATETIME_MAX",
    # Errors
    "ProfileValidationError",
    "InvalidArgumentError",
    "UnsupportedTypeError",
    # Fields
    "Field",
    "FieldType",
    "FieldResolver",
    "ProfileFields",
    # Rules
    "ConstraintRule",
    "UNATTRIBUTED",
    # Values
    "value_key",
    "distinct",
]
