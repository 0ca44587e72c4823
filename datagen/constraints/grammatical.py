"""Conjunctions and disjunctions of constraints.

Readers only produce these where one wire record expands to several atomic
constraints; expanding them into decision-tree branches is left to callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from datagen.core.errors import InvalidArgumentError
from datagen.core.fields import Field
from .atomic import AtomicConstraint


@dataclass(frozen=True)
class AndConstraint:
    """All sub-constraints must hold."""

    constraints: tuple[Constraint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))
        if not self.constraints:
            raise InvalidArgumentError("Argument 'constraints' cannot be empty.")

    def negate(self) -> OrConstraint:
        return OrConstraint(tuple(c.negate() for c in self.constraints))

    def atomic_constraints(self) -> Iterator[AtomicConstraint]:
        for constraint in self.constraints:
            yield from iter_atomic(constraint)

    @property
    def fields(self) -> frozenset[Field]:
        return frozenset(c.field for c in self.atomic_constraints())

    def __str__(self) -> str:
        return f"AND({', '.join(str(c) for c in self.constraints)})"


@dataclass(frozen=True)
class OrConstraint:
    """At least one sub-constraint must hold."""

    constraints: tuple[Constraint, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))
        if not self.constraints:
            raise InvalidArgumentError("Argument 'constraints' cannot be empty.")

    def negate(self) -> AndConstraint:
        return AndConstraint(tuple(c.negate() for c in self.constraints))

    def atomic_constraints(self) -> Iterator[AtomicConstraint]:
        for constraint in self.constraints:
            yield from iter_atomic(constraint)

    @property
    def fields(self) -> frozenset[Field]:
        return frozenset(c.field for c in self.atomic_constraints())

    def __str__(self) -> str:
        return f"OR({', '.join(str(c) for c in self.constraints)})"


Constraint = Union[AtomicConstraint, AndConstraint, OrConstraint]


def iter_atomic(constraint: Constraint) -> Iterator[AtomicConstraint]:
    """Yield the atomic constraints inside a (possibly grammatical) constraint."""
    if isinstance(constraint, (AndConstraint, OrConstraint)):
        yield from constraint.atomic_constraints()
    else:
        yield constraint
