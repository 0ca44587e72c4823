"""Field specifications and the merge algebra.

A ``FieldSpec`` describes every legal value of one field. Specs are
immutable: ``merge`` combines two of them into a new spec describing the
values both permit, or returns ``Impossible`` when there are none.
``merge`` is commutative and associative under structural equality, which
ignores the diagnostic ``source``.

Canonical form: a whitelist is exact, so once a spec carries one it has
already been filtered through the restriction and blacklist it was merged
with, and carries neither of them itself. The generator source stays: its
identity must still conflict with any different generator merged later.

There is deliberately no ``negate``: a merged spec may blend several rules,
and only constraint-level negation keeps rule attribution correct.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Hashable, Iterable, Protocol

from datagen.core.values import value_key
from datagen.restrictions import Impossible, Nullness, TypedRestrictions
from .whitelist import Whitelist

logger = logging.getLogger(__name__)


# =============================================================================
# Provenance and Generator Sources
# =============================================================================

@dataclass(frozen=True)
class FieldSpecSource:
    """The constraints a spec was built from. Diagnostic only."""

    constraints: tuple[Any, ...] = ()

    def combine(self, other: FieldSpecSource) -> FieldSpecSource:
        return FieldSpecSource(self.constraints + other.constraints)

    @property
    def rules(self) -> tuple[Any, ...]:
        return tuple(c.get_rule() for c in self.constraints if hasattr(c, "get_rule"))

    @property
    def is_violated(self) -> bool:
        return any(getattr(rule, "violated", False) for rule in self.rules)


EMPTY_SOURCE = FieldSpecSource()


class FieldValueSource(Protocol):
    """Opaque producer of literal values, owned by the sampling layer."""

    def generate_all_values(self) -> Iterable[Any]: ...


@dataclass(frozen=True, eq=False)
class GeneratorSource:
    """A value source plus the predicate deciding which set values it accepts."""

    source: FieldValueSource
    accept: Callable[[Any], bool]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneratorSource):
            return NotImplemented
        return self.source is other.source and self.accept == other.accept

    def __hash__(self) -> int:
        return hash((id(self.source), self.accept))


# =============================================================================
# FieldSpec
# =============================================================================

@dataclass(frozen=True)
class FieldSpec:
    """Canonical description of the legal value space of one field.

    Attributes:
        whitelist: Exact set of permitted values, if any.
        restrictions: Typed restriction (numeric, datetime, string, boolean).
        nullness: Null policy.
        blacklist: Value keys (see ``value_key``) that are not permitted.
        must_contain: Sub-specs of which a value must satisfy at least one.
        formatting: Output format for generated values.
        generator: Value source supplied by the sampling layer.
        source: Constraints this spec was built from; not part of equality.
    """

    whitelist: Whitelist | None = None
    restrictions: TypedRestrictions | None = None
    nullness: Nullness = Nullness.UNCONSTRAINED
    blacklist: frozenset[tuple[str, Hashable]] = frozenset()
    must_contain: frozenset[FieldSpec] = frozenset()
    formatting: str | None = None
    generator: GeneratorSource | None = None
    source: FieldSpecSource = field(default=EMPTY_SOURCE, compare=False, repr=False)

    # -------------------------------------------------------------------------
    # Merge
    # -------------------------------------------------------------------------

    def merge(self, other: FieldSpec) -> FieldSpec | Impossible:
        """Combine two specs into one permitting only values both permit."""
        nullness = self.nullness.merge(other.nullness)
        if isinstance(nullness, Impossible):
            return _impossible(nullness.reason)

        if self.formatting and other.formatting and self.formatting != other.formatting:
            return _impossible(f"conflicting formats {self.formatting!r} and {other.formatting!r}")

        if self.generator and other.generator and self.generator != other.generator:
            return _impossible("cannot combine two different generator sources")

        restrictions = self.restrictions
        if self.restrictions is not None and other.restrictions is not None:
            restrictions = self.restrictions.intersect(other.restrictions)
            if isinstance(restrictions, Impossible):
                return _impossible(restrictions.reason)
        elif restrictions is None:
            restrictions = other.restrictions

        whitelist = self.whitelist
        if self.whitelist is not None and other.whitelist is not None:
            whitelist = self.whitelist.intersect(other.whitelist)
        elif whitelist is None:
            whitelist = other.whitelist

        merged = FieldSpec(
            whitelist=whitelist,
            restrictions=restrictions,
            nullness=nullness,
            blacklist=self.blacklist | other.blacklist,
            must_contain=self.must_contain | other.must_contain,
            formatting=self.formatting or other.formatting,
            generator=self.generator or other.generator,
            source=self.source.combine(other.source),
        )
        return merged._settle_whitelist()

    def _settle_whitelist(self) -> FieldSpec | Impossible:
        if self.whitelist is None:
            return self
        whitelist = self.whitelist.filter(self._admits_non_null)
        if whitelist.is_empty():
            return _impossible("no whitelisted value satisfies the other constraints")
        return replace(self, whitelist=whitelist, restrictions=None, blacklist=frozenset())

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def _admits_non_null(self, value: Any) -> bool:
        if value_key(value) in self.blacklist:
            return False
        if self.restrictions is not None and not self.restrictions.contains(value):
            return False
        if self.generator is not None and not self.generator.accept(value):
            return False
        return True

    def permits(self, value: Any) -> bool:
        """Whether a literal value lies in the value space this spec describes."""
        if value is None:
            return self.nullness.permits_null()
        if not self.nullness.permits_values():
            return False
        if self.whitelist is not None and not self.whitelist.contains(value):
            return False
        if not self._admits_non_null(value):
            return False
        if self.must_contain and not any(spec.permits(value) for spec in self.must_contain):
            return False
        return True

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    def with_nullness(self, nullness: Nullness) -> FieldSpec:
        return replace(self, nullness=nullness)

    def with_must_contain(self, specs: Iterable[FieldSpec]) -> FieldSpec:
        return replace(self, must_contain=self.must_contain | frozenset(specs))

    def with_source(self, source: FieldSpecSource) -> FieldSpec:
        return replace(self, source=source)


EMPTY_FIELD_SPEC = FieldSpec()


def _impossible(reason: str) -> Impossible:
    logger.debug("Field spec merge is impossible: %s", reason)
    return Impossible(reason)
