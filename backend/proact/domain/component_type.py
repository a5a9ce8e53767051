"""PrOACT stage identifiers and their fixed ordering.

Pure domain logic with no external dependencies.
"""

from enum import Enum


class ComponentType(str, Enum):
    """The nine PrOACT stages. Declaration order is the workflow order."""

    ISSUE_RAISING = "issue_raising"
    PROBLEM_FRAME = "problem_frame"
    OBJECTIVES = "objectives"
    ALTERNATIVES = "alternatives"
    CONSEQUENCES = "consequences"
    TRADEOFFS = "tradeoffs"
    RECOMMENDATION = "recommendation"
    DECISION_QUALITY = "decision_quality"
    NOTES_NEXT_STEPS = "notes_next_steps"

    @classmethod
    def all(cls) -> list["ComponentType"]:
        return list(cls)

    @classmethod
    def first(cls) -> "ComponentType":
        return cls.ISSUE_RAISING

    @classmethod
    def last(cls) -> "ComponentType":
        return cls.NOTES_NEXT_STEPS

    @property
    def index(self) -> int:
        """Zero-based position in the workflow."""
        return _ORDER.index(self)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    def next(self) -> "ComponentType | None":
        if self.index + 1 < len(_ORDER):
            return _ORDER[self.index + 1]
        return None

    def previous(self) -> "ComponentType | None":
        if self.index > 0:
            return _ORDER[self.index - 1]
        return None

    def prerequisite(self) -> "ComponentType | None":
        """Component that must be started before this one can be."""
        return self.previous()

    def is_before(self, other: "ComponentType") -> bool:
        return self.index < other.index

    def is_after(self, other: "ComponentType") -> bool:
        return self.index > other.index

    # str comparison would order alphabetically; order by workflow position instead
    def __lt__(self, other):
        if not isinstance(other, ComponentType):
            return NotImplemented
        return self.index < other.index

    def __le__(self, other):
        if not isinstance(other, ComponentType):
            return NotImplemented
        return self.index <= other.index

    def __gt__(self, other):
        if not isinstance(other, ComponentType):
            return NotImplemented
        return self.index > other.index

    def __ge__(self, other):
        if not isinstance(other, ComponentType):
            return NotImplemented
        return self.index >= other.index


_ORDER: list[ComponentType] = list(ComponentType)
