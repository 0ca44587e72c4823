"""Rule attribution for constraints."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ConstraintRule:
    """The profile rule a constraint was declared under.

    A violated rule marks data generated to deliberately break it.
    """

    description: str
    violated: bool = False

    def violate(self) -> ConstraintRule:
        return replace(self, violated=True)

    def __str__(self) -> str:
        if self.violated:
            return f"Violated: {self.description}"
        return self.description


UNATTRIBUTED = ConstraintRule("unattributed")
