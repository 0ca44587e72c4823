"""Pydantic models for constraint records as they appear in a profile.

A record names the target field, the constraint type code under ``is`` and
its operand under ``value`` (scalars, date objects) or ``values`` (sets):

    {"field": "price", "is": "greaterThan", "value": 10}
    {"field": "settled", "is": "before", "value": {"date": "2020-01-01T00:00:00.000Z"}}
    {"field": "currency", "is": "inSet", "values": ["GBP", "USD"]}
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AtomicConstraintType(str, Enum):
    """Wire type codes of atomic constraints."""

    EQUAL_TO = "equalTo"
    IN_SET = "inSet"
    MATCHING_REGEX = "matchingRegex"
    CONTAINING_REGEX = "containingRegex"
    A_VALID = "aValid"
    FORMATTED_AS = "formattedAs"
    IS_NULL = "null"
    OF_TYPE = "ofType"

    # Numeric
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL_TO = "greaterThanOrEqualTo"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL_TO = "lessThanOrEqualTo"

    # Datetime
    AFTER = "after"
    AFTER_OR_AT = "afterOrAt"
    BEFORE = "before"
    BEFORE_OR_AT = "beforeOrAt"

    GRANULAR_TO = "granularTo"

    # String length
    LONGER_THAN = "longerThan"
    SHORTER_THAN = "shorterThan"
    OF_LENGTH = "ofLength"


class ConstraintRecord(BaseModel):
    """A single constraint record read from a profile."""

    field: str = Field(..., description="Name of the field the constraint targets")
    type_code: str = Field(..., alias="is", description="Constraint type code")
    value: Any = Field(None, description="Scalar or date-object operand")
    values: list[Any] | None = Field(None, description="Set operand")

    model_config = ConfigDict(populate_by_name=True, frozen=True)
