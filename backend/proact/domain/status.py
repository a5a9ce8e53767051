"""Component and cycle lifecycle state machines."""

from enum import Enum


class ComponentStatus(str, Enum):
    """Lifecycle shared by every stage instance."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    NEEDS_REVISION = "needs_revision"

    def is_started(self) -> bool:
        return self is not ComponentStatus.NOT_STARTED

    def accepts_output(self) -> bool:
        return self in (ComponentStatus.IN_PROGRESS, ComponentStatus.NEEDS_REVISION)

    def is_locked(self) -> bool:
        return self is ComponentStatus.COMPLETE

    def is_complete(self) -> bool:
        return self is ComponentStatus.COMPLETE

    def can_transition_to(self, target: "ComponentStatus") -> bool:
        """Self-transitions are always legal; everything else must be listed."""
        if target is self:
            return True
        return target in COMPONENT_TRANSITIONS[self]


COMPONENT_TRANSITIONS: dict[ComponentStatus, list[ComponentStatus]] = {
    ComponentStatus.NOT_STARTED: [ComponentStatus.IN_PROGRESS],
    ComponentStatus.IN_PROGRESS: [ComponentStatus.COMPLETE, ComponentStatus.NEEDS_REVISION],
    ComponentStatus.COMPLETE: [ComponentStatus.NEEDS_REVISION],
    ComponentStatus.NEEDS_REVISION: [ComponentStatus.IN_PROGRESS, ComponentStatus.COMPLETE],
}


class CycleStatus(str, Enum):
    """Cycle lifecycle. Completed and Archived are terminal for edits."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    def is_mutable(self) -> bool:
        return self is CycleStatus.ACTIVE

    def is_finished(self) -> bool:
        return self in (CycleStatus.COMPLETED, CycleStatus.ARCHIVED)

    def can_transition_to(self, target: "CycleStatus") -> bool:
        return target in CYCLE_TRANSITIONS[self]


CYCLE_TRANSITIONS: dict[CycleStatus, list[CycleStatus]] = {
    CycleStatus.ACTIVE: [CycleStatus.COMPLETED, CycleStatus.ARCHIVED],
    CycleStatus.COMPLETED: [CycleStatus.ARCHIVED],
    CycleStatus.ARCHIVED: [],  # Terminal state
}
