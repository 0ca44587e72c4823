"""The non-exceptional "no value satisfies these constraints" outcome."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Impossible:
    """Result of intersecting or merging value spaces that do not overlap.

    All Impossible values are equal; ``reason`` is diagnostic only.
    """

    reason: str = field(default="", compare=False)

    def __repr__(self) -> str:
        return f"Impossible({self.reason!r})" if self.reason else "Impossible()"


IMPOSSIBLE = Impossible()


def is_impossible(value: object) -> bool:
    return isinstance(value, Impossible)
