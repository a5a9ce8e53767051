"""Per-stage component instance owned by a Cycle."""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from proact.core.exceptions import InvalidStateTransition
from proact.domain.component_type import ComponentType
from proact.domain.status import ComponentStatus

INITIAL_VERSION = 1


@dataclass
class Component:
    """One stage of a cycle: status, structured output and output version.

    ``version`` starts at 1 and increases by exactly one on every accepted
    output write. It never decreases or resets.
    """

    component_type: ComponentType
    status: ComponentStatus = ComponentStatus.NOT_STARTED
    output: dict[str, Any] = field(default_factory=dict)
    version: int = INITIAL_VERSION
    revision_reason: str | None = None
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def _transition(self, target: ComponentStatus, now: datetime | None = None) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStateTransition(
                f"Cannot move {self.component_type.value} from {self.status.value} to {target.value}",
                component_type=self.component_type.value,
                from_status=self.status.value,
                to_status=target.value,
            )
        self.status = target
        self.updated_at = now or datetime.now(UTC)

    def start(self, now: datetime | None = None) -> None:
        self._transition(ComponentStatus.IN_PROGRESS, now)

    def complete(self, now: datetime | None = None) -> None:
        self._transition(ComponentStatus.COMPLETE, now)

    def mark_for_revision(self, reason: str, now: datetime | None = None) -> None:
        self._transition(ComponentStatus.NEEDS_REVISION, now)
        self.revision_reason = reason

    def replace_output(self, output: dict[str, Any], now: datetime | None = None) -> int:
        """Store a new output and bump the version. Returns the new version."""
        self.output = copy.deepcopy(output)
        self.version += 1
        self.updated_at = now or datetime.now(UTC)
        return self.version

    def branch_copy(self) -> "Component":
        """Deep copy for a branched cycle. Status, output and version carry over."""
        clone = copy.deepcopy(self)
        clone.id = uuid.uuid4()
        return clone
