"""Constructors for common field specifications."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from datagen.core.config import Settings
from datagen.core.errors import InvalidArgumentError, UnsupportedTypeError
from datagen.core.fields import FieldType
from datagen.restrictions import (
    BooleanRestrictions,
    Nullness,
    TypedRestrictions,
    default_datetime_restrictions,
    default_numeric_restrictions,
    default_string_restrictions,
)
from .fieldspec import FieldSpec, FieldValueSource, GeneratorSource
from .whitelist import Whitelist

NULL_ONLY = FieldSpec(nullness=Nullness.MUST_BE_NULL)


class FieldSpecFactory:
    """Static constructors for ``FieldSpec``."""

    @staticmethod
    def from_whitelist(values: Iterable[Any], weights: Iterable[float] | None = None) -> FieldSpec:
        whitelist = Whitelist(tuple(values), tuple(weights) if weights is not None else None)
        if whitelist.is_empty():
            raise InvalidArgumentError("Whitelist must contain at least one value")
        return FieldSpec(whitelist=whitelist)

    @staticmethod
    def from_restriction(restrictions: TypedRestrictions) -> FieldSpec:
        return FieldSpec(restrictions=restrictions)

    @staticmethod
    def from_type_default(field_type: FieldType | str, settings: Settings | None = None) -> FieldSpec:
        """Spec permitting every value of a type within the configured limits."""
        try:
            field_type = FieldType(field_type)
        except ValueError:
            raise UnsupportedTypeError(f"No default field spec for type {field_type!r}") from None

        if field_type is FieldType.NUMERIC:
            return FieldSpec(restrictions=default_numeric_restrictions(settings))
        if field_type is FieldType.DATETIME:
            return FieldSpec(restrictions=default_datetime_restrictions(settings))
        if field_type is FieldType.STRING:
            return FieldSpec(restrictions=default_string_restrictions(settings))
        if field_type is FieldType.BOOLEAN:
            return FieldSpec(restrictions=BooleanRestrictions())
        raise UnsupportedTypeError(f"No default field spec for type {field_type!r}")

    @staticmethod
    def null_only() -> FieldSpec:
        return NULL_ONLY

    @staticmethod
    def from_generator_source(source: FieldValueSource, accept: Callable[[Any], bool]) -> FieldSpec:
        return FieldSpec(generator=GeneratorSource(source, accept))

    @staticmethod
    def from_value(value: Any) -> FieldSpec:
        """Spec permitting exactly one value; ``None`` means null only."""
        if value is None:
            return NULL_ONLY
        return FieldSpec(whitelist=Whitelist((value,)), nullness=Nullness.MUST_NOT_BE_NULL)
