"""Boolean restrictions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .impossible import Impossible


@dataclass(frozen=True)
class BooleanRestrictions:
    """The subset of {True, False} a field may take."""

    allowed: frozenset[bool] = frozenset({True, False})

    def intersect(self, other: Any) -> BooleanRestrictions | Impossible:
        if not isinstance(other, BooleanRestrictions):
            return Impossible(f"cannot combine boolean restrictions with {type(other).__name__}")
        return BooleanRestrictions(self.allowed & other.allowed).validated()

    def validated(self) -> BooleanRestrictions | Impossible:
        if not self.allowed:
            return Impossible("no boolean value is allowed")
        return self

    def contains(self, value: Any) -> bool:
        return isinstance(value, bool) and value in self.allowed
