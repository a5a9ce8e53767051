"""Deterministic progress computation over a cycle's component statuses.

Pure functions with no external dependencies.
"""

from dataclasses import dataclass

from proact.domain.component_type import ComponentType
from proact.domain.status import ComponentStatus

# NotesNextSteps is optional; every other stage counts toward completion.
REQUIRED_COMPONENTS: list[ComponentType] = [
    ct for ct in ComponentType.all() if ct is not ComponentType.NOTES_NEXT_STEPS
]


@dataclass
class CycleProgress:
    """Read model of where a cycle stands in the workflow."""

    statuses: dict[ComponentType, ComponentStatus]

    def status(self, component_type: ComponentType) -> ComponentStatus:
        return self.statuses.get(component_type, ComponentStatus.NOT_STARTED)

    @property
    def completed_count(self) -> int:
        return sum(1 for s in self.statuses.values() if s.is_complete())

    @property
    def required_count(self) -> int:
        return len(REQUIRED_COMPONENTS)

    @property
    def percent_complete(self) -> int:
        """Integer percentage 0-100 over required components only."""
        done = sum(1 for ct in REQUIRED_COMPONENTS if self.status(ct).is_complete())
        return int(done * 100 / self.required_count)

    def is_complete(self) -> bool:
        return all(self.status(ct).is_complete() for ct in REQUIRED_COMPONENTS)

    def first_incomplete(self) -> ComponentType | None:
        for ct in REQUIRED_COMPONENTS:
            if not self.status(ct).is_complete():
                return ct
        return None

    def step_statuses(self) -> list[tuple[ComponentType, ComponentStatus]]:
        return [(ct, self.status(ct)) for ct in ComponentType.all()]

    def has_revisions_needed(self) -> bool:
        return any(s is ComponentStatus.NEEDS_REVISION for s in self.statuses.values())

    def revisions_needed(self) -> list[ComponentType]:
        return [ct for ct in ComponentType.all() if self.status(ct) is ComponentStatus.NEEDS_REVISION]

    def current_in_progress(self) -> ComponentType | None:
        for ct in ComponentType.all():
            if self.status(ct) is ComponentStatus.IN_PROGRESS:
                return ct
        return None
