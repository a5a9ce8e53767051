"""PrOACT letter view and branch tree over a session's cycles.

Pure domain functions, no I/O.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable

from proact.domain.component_type import ComponentType
from proact.domain.cycle import Cycle
from proact.domain.status import ComponentStatus


class PrOACTLetter(str, Enum):
    """The six letters of PrOACT, each covering one or more stages."""

    P = "P"
    R = "R"
    O = "O"
    A = "A"
    C = "C"
    T = "T"

    def component_types(self) -> list[ComponentType]:
        return LETTER_COMPONENTS[self]

    @classmethod
    def for_component(cls, component_type: ComponentType) -> "PrOACTLetter | None":
        """Letter a stage belongs to. IssueRaising and NotesNextSteps have none."""
        for letter, types in LETTER_COMPONENTS.items():
            if component_type in types:
                return letter
        return None


LETTER_COMPONENTS: dict[PrOACTLetter, list[ComponentType]] = {
    PrOACTLetter.P: [ComponentType.PROBLEM_FRAME],
    PrOACTLetter.R: [ComponentType.OBJECTIVES],
    PrOACTLetter.O: [ComponentType.ALTERNATIVES],
    PrOACTLetter.A: [ComponentType.CONSEQUENCES],
    PrOACTLetter.C: [ComponentType.TRADEOFFS],
    PrOACTLetter.T: [ComponentType.RECOMMENDATION, ComponentType.DECISION_QUALITY],
}


class LetterStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def letter_status(statuses: Iterable[ComponentStatus]) -> LetterStatus:
    """Completed if every stage is complete, NotStarted if none started."""
    statuses = list(statuses)
    if statuses and all(s.is_complete() for s in statuses):
        return LetterStatus.COMPLETED
    if any(s.is_started() for s in statuses):
        return LetterStatus.IN_PROGRESS
    return LetterStatus.NOT_STARTED


def letter_statuses(cycle: Cycle) -> dict[PrOACTLetter, LetterStatus]:
    return {
        letter: letter_status(cycle.component_status(ct) for ct in types)
        for letter, types in LETTER_COMPONENTS.items()
    }


@dataclass
class CycleTreeNode:
    cycle_id: uuid.UUID
    label: str
    branch_point: PrOACTLetter | None
    letter_statuses: dict[PrOACTLetter, LetterStatus]
    updated_at: datetime
    children: list["CycleTreeNode"] = field(default_factory=list)


def _node_label(cycle: Cycle) -> str:
    if cycle.branch_label:
        return cycle.branch_label
    if cycle.branch_point is not None:
        return f"Branch at {cycle.branch_point.label}"
    return "Primary Cycle"


def build_cycle_tree(cycles: Iterable[Cycle]) -> list[CycleTreeNode]:
    """Nest branches under their parents.

    Args:
        cycles: All cycles of one session, any order

    Returns:
        Root nodes ordered by creation time. A branch whose parent is not in
        ``cycles`` is returned as a root.
    """
    ordered = sorted(cycles, key=lambda c: c.created_at)
    nodes = {
        c.id: CycleTreeNode(
            cycle_id=c.id,
            label=_node_label(c),
            branch_point=PrOACTLetter.for_component(c.branch_point) if c.branch_point else None,
            letter_statuses=letter_statuses(c),
            updated_at=c.updated_at,
        )
        for c in ordered
    }

    roots: list[CycleTreeNode] = []
    for c in ordered:
        parent = nodes.get(c.parent_cycle_id) if c.parent_cycle_id else None
        if parent is None:
            roots.append(nodes[c.id])
        else:
            parent.children.append(nodes[c.id])
    return roots
