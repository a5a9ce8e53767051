"""Decision quality scoring.

The overall score is the weakest element's score, not an average: a
decision is only as good as its weakest link.
"""

from dataclasses import dataclass
from enum import Enum

DQ_ELEMENT_NAMES: list[str] = [
    "Helpful Problem Frame",
    "Clear Objectives",
    "Creative Alternatives",
    "Reliable Consequence Information",
    "Logically Correct Reasoning",
    "Clear Tradeoffs",
    "Commitment to Follow Through",
]

DQ_IMPROVEMENT_THRESHOLD = 70
DQ_ACCEPTABLE_THRESHOLD = 80


@dataclass(frozen=True)
class DQElement:
    name: str
    score: int
    rationale: str | None = None
    improvement_path: str | None = None

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError(f"DQ score must be between 0 and 100, got {self.score}")


class Priority(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class ImprovementSuggestion:
    element_name: str
    score: int
    priority: Priority
    suggestion: str


def compute_overall(elements: list[DQElement]) -> int:
    """Minimum element score; 0 for no elements."""
    if not elements:
        return 0
    return min(e.score for e in elements)


def identify_weakest(elements: list[DQElement]) -> DQElement | None:
    """Element with the lowest score. Ties go to the first in list order."""
    if not elements:
        return None
    return min(elements, key=lambda e: e.score)


def compute_priority(score: int) -> Priority:
    """Bucket a score: <=30 Critical, 31-50 High, 51-70 Medium, else Low."""
    if score <= 30:
        return Priority.CRITICAL
    if score <= 50:
        return Priority.HIGH
    if score <= 70:
        return Priority.MEDIUM
    return Priority.LOW


def sorted_by_priority(elements: list[DQElement]) -> list[DQElement]:
    """Weakest first; stable for equal scores."""
    return sorted(elements, key=lambda e: e.score)


def suggest_improvements(
    elements: list[DQElement],
    threshold: int = DQ_IMPROVEMENT_THRESHOLD,
) -> list[ImprovementSuggestion]:
    """One suggestion per element scoring below ``threshold``, weakest first.

    Uses the element's own improvement path when it has one.
    """
    return [
        ImprovementSuggestion(
            element_name=e.name,
            score=e.score,
            priority=compute_priority(e.score),
            suggestion=e.improvement_path or f"Improve {e.name} (currently at {e.score}%)",
        )
        for e in sorted_by_priority(elements)
        if e.score < threshold
    ]


def has_all_elements(elements: list[DQElement]) -> bool:
    return not missing_elements(elements)


def missing_elements(elements: list[DQElement]) -> list[str]:
    present = {e.name for e in elements}
    return [name for name in DQ_ELEMENT_NAMES if name not in present]


def is_acceptable(elements: list[DQElement], threshold: int = DQ_ACCEPTABLE_THRESHOLD) -> bool:
    return bool(elements) and all(e.score >= threshold for e in elements)
