"""Profile fields and the registry that resolves them by name."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from .errors import ProfileValidationError


class FieldType(str, Enum):
    """Declared datatype of a field."""

    NUMERIC = "numeric"
    STRING = "string"
    DATETIME = "datetime"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Field:
    """A named profile field with its declared datatype."""

    name: str
    type: FieldType

    def __str__(self) -> str:
        return self.name


class FieldResolver(Protocol):
    """Anything that can turn a field name from the wire into a Field."""

    def get_by_name(self, name: str) -> Field: ...


class ProfileFields:
    """Immutable, ordered collection of the fields declared by a profile."""

    def __init__(self, fields: Iterable[Field]):
        self._fields: tuple[Field, ...] = tuple(fields)
        self._by_name: dict[str, Field] = {}
        for field in self._fields:
            if field.name in self._by_name:
                raise ProfileValidationError(f"Field [{field.name}] is declared more than once")
            self._by_name[field.name] = field

    def get_by_name(self, name: str) -> Field:
        """Resolve a field, failing for names the profile does not declare."""
        try:
            return self._by_name[name]
        except KeyError:
            raise ProfileValidationError(
                f"Constraint targets field [{name}] which is not declared in the profile"
            ) from None

    def __iter__(self):
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name
