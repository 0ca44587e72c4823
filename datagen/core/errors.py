"""Exceptions raised by the constraint engine.

Contradictory constraints are not errors: merging them yields the
``Impossible`` value from ``datagen.restrictions``.
"""

from __future__ import annotations


class ProfileValidationError(Exception):
    """A constraint record in the profile is malformed or out of range.

    Attributes:
        field: Name of the field the constraint targets (if known).
        constraint_code: Wire type code of the constraint (if known).
        detail: Explanation of what was expected.
    """

    def __init__(self, detail: str, field: str | None = None, constraint_code: str | None = None):
        self.field = field
        self.constraint_code = constraint_code
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        if self.field is None and self.constraint_code is None:
            return self.detail
        return f"Field [{self.field}] '{self.constraint_code}' constraint: {self.detail}"


class InvalidArgumentError(ValueError):
    """A required argument was missing when constructing a value."""


class UnsupportedTypeError(TypeError):
    """A datatype outside numeric, string, datetime and boolean was requested."""
