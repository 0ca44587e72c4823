"""Ordered, distinct sets of permitted values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Iterable, Iterator

from datagen.core.errors import InvalidArgumentError
from datagen.core.values import value_key


@dataclass(frozen=True, eq=False)
class Whitelist:
    """Values a field is restricted to, with optional sampling weights.

    Order and weights are kept for the sampling layer but are irrelevant to
    equality: two whitelists are equal when they permit the same values.
    """

    values: tuple[Any, ...]
    weights: tuple[float, ...] | None = None
    _keys: frozenset[tuple[str, Hashable]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        values = tuple(self.values)
        weights = tuple(self.weights) if self.weights is not None else None
        if weights is not None and len(weights) != len(values):
            raise InvalidArgumentError("Whitelist weights must match values one to one")

        seen: set[tuple[str, Hashable]] = set()
        kept_values, kept_weights = [], []
        for i, value in enumerate(values):
            key = value_key(value)
            if key in seen:
                continue
            seen.add(key)
            kept_values.append(value)
            if weights is not None:
                kept_weights.append(weights[i])

        object.__setattr__(self, "values", tuple(kept_values))
        object.__setattr__(self, "weights", tuple(kept_weights) if weights is not None else None)
        object.__setattr__(self, "_keys", frozenset(seen))

    def contains(self, value: Any) -> bool:
        return value_key(value) in self._keys

    def intersect(self, other: Whitelist) -> Whitelist:
        """Values in both lists, in this list's order and with its weights."""
        return self.filter(other.contains)

    def filter(self, predicate: Callable[[Any], bool]) -> Whitelist:
        keep = [i for i, value in enumerate(self.values) if predicate(value)]
        return Whitelist(
            tuple(self.values[i] for i in keep),
            tuple(self.weights[i] for i in keep) if self.weights is not None else None,
        )

    def is_empty(self) -> bool:
        return not self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Whitelist):
            return NotImplemented
        return self._keys == other._keys

    def __hash__(self) -> int:
        return hash(self._keys)

    @classmethod
    def of(cls, values: Iterable[Any]) -> Whitelist:
        return cls(tuple(values))
