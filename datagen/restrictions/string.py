"""String restrictions: length bounds, accumulated patterns and standards."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from datagen.core.config import Settings, get_settings
from .impossible import Impossible
from .standards import StandardFormat


@dataclass(frozen=True)
class StringRestrictions:
    """Restrictions a string value must satisfy all of.

    Patterns are stored by source text; ``matching`` patterns must match the
    whole value, ``containing`` patterns must be found somewhere in it.
    """

    max_length: int
    min_length: int = 0
    excluded_lengths: frozenset[int] = frozenset()
    matching: frozenset[str] = frozenset()
    not_matching: frozenset[str] = frozenset()
    containing: frozenset[str] = frozenset()
    not_containing: frozenset[str] = frozenset()
    standard: StandardFormat | None = None
    excluded_standards: frozenset[StandardFormat] = frozenset()

    def intersect(self, other: Any) -> StringRestrictions | Impossible:
        if not isinstance(other, StringRestrictions):
            return Impossible(f"cannot combine string restrictions with {type(other).__name__}")
        if self.standard and other.standard and self.standard is not other.standard:
            return Impossible(f"value cannot be both a valid {self.standard.value} and {other.standard.value}")

        merged = StringRestrictions(
            max_length=min(self.max_length, other.max_length),
            min_length=max(self.min_length, other.min_length),
            excluded_lengths=self.excluded_lengths | other.excluded_lengths,
            matching=self.matching | other.matching,
            not_matching=self.not_matching | other.not_matching,
            containing=self.containing | other.containing,
            not_containing=self.not_containing | other.not_containing,
            standard=self.standard or other.standard,
            excluded_standards=self.excluded_standards | other.excluded_standards,
        )
        return merged.validated()

    def validated(self) -> StringRestrictions | Impossible:
        if self.min_length > self.max_length:
            return Impossible(
                f"string length must be at least {self.min_length} and at most {self.max_length}"
            )
        if not self._has_admissible_length():
            return Impossible(
                f"every length between {self.min_length} and {self.max_length} is excluded"
            )
        if self.matching & self.not_matching:
            return Impossible("string must both match and not match the same pattern")
        if self.containing & self.not_containing:
            return Impossible("string must both contain and not contain the same pattern")
        if self.standard is not None and self.standard in self.excluded_standards:
            return Impossible(f"string must both be and not be a valid {self.standard.value}")
        return self

    def _has_admissible_length(self) -> bool:
        # Only len(excluded_lengths) + 1 candidates need checking
        limit = min(self.max_length, self.min_length + len(self.excluded_lengths))
        return any(n not in self.excluded_lengths for n in range(self.min_length, limit + 1))

    def contains(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if not self.min_length <= len(value) <= self.max_length:
            return False
        if len(value) in self.excluded_lengths:
            return False
        if not all(re.fullmatch(p, value) for p in self.matching):
            return False
        if any(re.fullmatch(p, value) for p in self.not_matching):
            return False
        if not all(re.search(p, value) for p in self.containing):
            return False
        if any(re.search(p, value) for p in self.not_containing):
            return False
        if self.standard is not None and not self.standard.is_valid(value):
            return False
        return not any(s.is_valid(value) for s in self.excluded_standards)


def default_string_restrictions(settings: Settings | None = None) -> StringRestrictions:
    settings = settings or get_settings()
    return StringRestrictions(max_length=settings.max_string_length)
