"""Domain events accumulated on the Cycle aggregate.

The aggregate only queues these. The caller drains the queue with
``Cycle.take_events()`` after a successful persistence write and forwards
them to an EventPublisher.
"""

import uuid
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar

from proact.domain.component_type import ComponentType


class CycleEventType:
    """Event type constants used in the published envelope."""

    CREATED = "cycle.created"
    BRANCHED = "cycle.branched"
    COMPLETED = "cycle.completed"
    ARCHIVED = "cycle.archived"
    COMPONENT_STARTED = "cycle.component.started"
    COMPONENT_COMPLETED = "cycle.component.completed"
    COMPONENT_OUTPUT_UPDATED = "cycle.component.output_updated"
    COMPONENT_MARKED_FOR_REVISION = "cycle.component.marked_for_revision"
    NAVIGATED_TO = "cycle.navigated_to"


@dataclass(frozen=True, kw_only=True)
class CycleEvent:
    event_type: ClassVar[str]

    cycle_id: uuid.UUID
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict:
        """Flat envelope with a 'type' discriminator, JSON-friendly values."""
        payload: dict = {"type": self.event_type}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, uuid.UUID):
                value = str(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            payload[f.name] = value
        return payload


@dataclass(frozen=True, kw_only=True)
class CycleCreated(CycleEvent):
    event_type = CycleEventType.CREATED

    session_id: uuid.UUID


@dataclass(frozen=True, kw_only=True)
class CycleBranched(CycleEvent):
    event_type = CycleEventType.BRANCHED

    session_id: uuid.UUID
    parent_cycle_id: uuid.UUID
    branch_point: ComponentType


@dataclass(frozen=True, kw_only=True)
class CycleCompleted(CycleEvent):
    event_type = CycleEventType.COMPLETED


@dataclass(frozen=True, kw_only=True)
class CycleArchivedEvent(CycleEvent):
    event_type = CycleEventType.ARCHIVED


@dataclass(frozen=True, kw_only=True)
class ComponentStarted(CycleEvent):
    event_type = CycleEventType.COMPONENT_STARTED

    component_type: ComponentType


@dataclass(frozen=True, kw_only=True)
class ComponentCompleted(CycleEvent):
    event_type = CycleEventType.COMPONENT_COMPLETED

    component_type: ComponentType


@dataclass(frozen=True, kw_only=True)
class ComponentOutputUpdated(CycleEvent):
    event_type = CycleEventType.COMPONENT_OUTPUT_UPDATED

    component_type: ComponentType
    version: int


@dataclass(frozen=True, kw_only=True)
class ComponentMarkedForRevision(CycleEvent):
    event_type = CycleEventType.COMPONENT_MARKED_FOR_REVISION

    component_type: ComponentType
    reason: str


@dataclass(frozen=True, kw_only=True)
class NavigatedTo(CycleEvent):
    event_type = CycleEventType.NAVIGATED_TO

    component_type: ComponentType
