"""Null policy of a field."""

from __future__ import annotations

from enum import Enum

from .impossible import Impossible


class Nullness(str, Enum):
    """Whether null may, must, or must not be produced for a field."""

    MUST_BE_NULL = "must_be_null"
    MUST_NOT_BE_NULL = "must_not_be_null"
    UNCONSTRAINED = "unconstrained"

    def merge(self, other: Nullness) -> Nullness | Impossible:
        if self is Nullness.UNCONSTRAINED:
            return other
        if other is Nullness.UNCONSTRAINED or other is self:
            return self
        return Impossible("field must be null and must not be null")

    def permits_null(self) -> bool:
        return self is not Nullness.MUST_NOT_BE_NULL

    def permits_values(self) -> bool:
        return self is not Nullness.MUST_BE_NULL
