"""Cycle aggregate: one path through the nine PrOACT stages.

The Cycle owns exactly one Component per ComponentType, enforces stage
ordering and the component state machine, and guards output writes with
per-component optimistic versioning. It performs no I/O: domain events are
queued on the instance and drained by the caller via ``take_events()``.
"""

import copy
import uuid
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any, Mapping

from proact.core.exceptions import (
    CannotBranch,
    ComponentAlreadyStarted,
    ConcurrencyConflict,
    CycleArchived,
    InvalidComponentOutput,
    InvalidStateTransition,
    PreviousComponentRequired,
    ValidationFailed,
)
from proact.domain.component import Component
from proact.domain.component_type import ComponentType
from proact.domain.events import (
    ComponentCompleted,
    ComponentMarkedForRevision,
    ComponentOutputUpdated,
    ComponentStarted,
    CycleArchivedEvent,
    CycleBranched,
    CycleCompleted,
    CycleCreated,
    CycleEvent,
    NavigatedTo,
)
from proact.domain.progress import CycleProgress
from proact.domain.status import ComponentStatus, CycleStatus
from proact.ports.validator import ComponentSchemaValidator
from proact.schemas.validator import PydanticSchemaValidator

DQ_ELEMENT_COUNT = 7
MIN_ALTERNATIVES = 2
BRANCH_REVISION_REASON = "Branched for exploration"


class Cycle:
    """Aggregate root for one attempt at the PrOACT workflow."""

    def __init__(
        self,
        *,
        id: uuid.UUID,
        session_id: uuid.UUID,
        components: Mapping[ComponentType, Component],
        status: CycleStatus = CycleStatus.ACTIVE,
        current_step: ComponentType = ComponentType.ISSUE_RAISING,
        parent_cycle_id: uuid.UUID | None = None,
        branch_point: ComponentType | None = None,
        branch_label: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        validator: ComponentSchemaValidator | None = None,
    ):
        missing = [ct for ct in ComponentType.all() if ct not in components]
        if missing:
            raise ValueError(f"Cycle requires all 9 components, missing: {[ct.value for ct in missing]}")
        for ct, component in components.items():
            if component.component_type is not ct:
                raise ValueError(f"Component stored under {ct.value} is {component.component_type.value}")

        now = datetime.now(UTC)
        self._id = id
        self._session_id = session_id
        self._parent_cycle_id = parent_cycle_id
        self._branch_point = branch_point
        self._branch_label = branch_label
        self._status = status
        self._current_step = current_step
        self._components: dict[ComponentType, Component] = {ct: components[ct] for ct in ComponentType.all()}
        self._created_at = created_at or now
        self._updated_at = updated_at or self._created_at
        self._validator = validator or PydanticSchemaValidator()
        self._events: list[CycleEvent] = []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, session_id: uuid.UUID, validator: ComponentSchemaValidator | None = None) -> "Cycle":
        """Create a fresh cycle with every component NotStarted."""
        cycle = cls(
            id=uuid.uuid4(),
            session_id=session_id,
            components={ct: Component(component_type=ct) for ct in ComponentType.all()},
            validator=validator,
        )
        cycle._record(CycleCreated(cycle_id=cycle.id, session_id=session_id, occurred_at=cycle.created_at))
        return cycle

    @classmethod
    def reconstitute(cls, **state: Any) -> "Cycle":
        """Rebuild a persisted cycle. The event queue starts empty."""
        return cls(**state)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def session_id(self) -> uuid.UUID:
        return self._session_id

    @property
    def parent_cycle_id(self) -> uuid.UUID | None:
        return self._parent_cycle_id

    @property
    def branch_point(self) -> ComponentType | None:
        return self._branch_point

    @property
    def branch_label(self) -> str | None:
        return self._branch_label

    @property
    def status(self) -> CycleStatus:
        return self._status

    @property
    def current_step(self) -> ComponentType:
        return self._current_step

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def validator(self) -> ComponentSchemaValidator:
        return self._validator

    @property
    def components(self) -> Mapping[ComponentType, Component]:
        """Read-only map of component snapshots."""
        return MappingProxyType({ct: copy.deepcopy(c) for ct, c in self._components.items()})

    @property
    def is_branch(self) -> bool:
        return self._parent_cycle_id is not None

    def get_component(self, component_type: ComponentType) -> Component:
        """Snapshot of one component. Changing it does not touch the cycle."""
        return copy.deepcopy(self._components[component_type])

    def component_status(self, component_type: ComponentType) -> ComponentStatus:
        return self._components[component_type].status

    def get_progress(self) -> CycleProgress:
        return CycleProgress({ct: c.status for ct, c in self._components.items()})

    @property
    def pending_events(self) -> list[CycleEvent]:
        return list(self._events)

    def take_events(self) -> list[CycleEvent]:
        """Drain the event queue. Call after the cycle has been persisted."""
        events, self._events = self._events, []
        return events

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _ensure_mutable(self) -> None:
        if not self._status.is_mutable():
            raise CycleArchived(
                f"Cannot modify {self._status.value} cycle",
                cycle_id=self._id,
            )

    def _prerequisite_started(self, component_type: ComponentType) -> bool:
        prereq = component_type.prerequisite()
        return prereq is None or self.component_status(prereq).is_started()

    def _check_version(self, component: Component, expected_version: int) -> None:
        if component.version != expected_version:
            raise ConcurrencyConflict(component.component_type, expected=expected_version, actual=component.version)

    def _validate_schema(self, component_type: ComponentType, output: dict[str, Any]) -> None:
        result = self._validator.validate(component_type, output)
        if not result.valid:
            raise InvalidComponentOutput(component_type, result.errors)

    def _touch(self) -> datetime:
        self._updated_at = datetime.now(UTC)
        return self._updated_at

    def _record(self, event: CycleEvent) -> None:
        self._events.append(event)

    # ------------------------------------------------------------------
    # Component operations
    # ------------------------------------------------------------------

    def validate_can_start(self, component_type: ComponentType) -> None:
        """Raise if ``component_type`` cannot be started right now."""
        self._ensure_mutable()

        current = self.component_status(component_type)
        if current.is_started():
            raise ComponentAlreadyStarted(
                f"{component_type.value} is already {current.value}",
                component_type=component_type.value,
            )

        if not self._prerequisite_started(component_type):
            prereq = component_type.prerequisite()
            raise PreviousComponentRequired(
                f"Cannot start {component_type.value} before {prereq.value} is started",
                component_type=component_type.value,
                prerequisite=prereq.value,
            )

    def start_component(self, component_type: ComponentType) -> None:
        self.validate_can_start(component_type)

        now = self._touch()
        self._components[component_type].start(now)
        self._current_step = component_type
        self._record(ComponentStarted(cycle_id=self._id, component_type=component_type, occurred_at=now))

    def complete_component(
        self,
        component_type: ComponentType,
        output: dict[str, Any] | None = None,
        expected_version: int | None = None,
    ) -> int:
        """Complete a component, optionally writing its final output first.

        The effective output (``output`` if given, else the stored one) must
        pass schema validation and the stage's completion rules. All checks
        run before anything is mutated.

        Returns:
            The component's version after completion
        """
        self._ensure_mutable()

        component = self._components[component_type]
        if not component.status.accepts_output():
            raise InvalidStateTransition(
                f"Cannot complete {component_type.value} from {component.status.value}",
                component_type=component_type.value,
            )
        if expected_version is not None:
            self._check_version(component, expected_version)

        candidate = output if output is not None else component.output
        self._validate_schema(component_type, candidate)
        self.validate_component_completion_rules(component_type, candidate)

        now = self._touch()
        if output is not None:
            version = component.replace_output(output, now)
            self._record(
                ComponentOutputUpdated(
                    cycle_id=self._id, component_type=component_type, version=version, occurred_at=now
                )
            )

        component.complete(now)
        self._record(ComponentCompleted(cycle_id=self._id, component_type=component_type, occurred_at=now))

        next_step = component_type.next()
        if next_step is not None:
            self._current_step = next_step

        return component.version

    def update_component_output(
        self,
        component_type: ComponentType,
        output: dict[str, Any],
        expected_version: int,
    ) -> int:
        """Optimistic-concurrency write of one component's output.

        Versions are per component, so edits to different stages of the same
        cycle never conflict.

        Raises:
            ConcurrencyConflict: if ``expected_version`` is stale (nothing changes)

        Returns:
            The new version (previous + 1)
        """
        self._ensure_mutable()

        component = self._components[component_type]
        self._check_version(component, expected_version)

        if not component.status.accepts_output():
            raise InvalidStateTransition(
                f"Cannot update output for {component_type.value} in {component.status.value} state",
                component_type=component_type.value,
            )

        self._validate_schema(component_type, output)

        now = self._touch()
        version = component.replace_output(output, now)
        self._record(
            ComponentOutputUpdated(cycle_id=self._id, component_type=component_type, version=version, occurred_at=now)
        )
        return version

    def mark_component_for_revision(self, component_type: ComponentType, reason: str) -> None:
        self._ensure_mutable()

        component = self._components[component_type]
        component.mark_for_revision(reason)
        now = self._touch()
        self._current_step = component_type
        self._record(
            ComponentMarkedForRevision(
                cycle_id=self._id, component_type=component_type, reason=reason, occurred_at=now
            )
        )

    def navigate_to(self, target: ComponentType) -> None:
        """Move the cursor without touching any component status or version."""
        self._ensure_mutable()

        if not (self.component_status(target).is_started() or self._prerequisite_started(target)):
            raise InvalidStateTransition(
                f"Cannot navigate to {target.value} - prerequisite not started",
                component_type=target.value,
            )

        now = self._touch()
        self._current_step = target
        self._record(NavigatedTo(cycle_id=self._id, component_type=target, occurred_at=now))

    # ------------------------------------------------------------------
    # Completion rules
    # ------------------------------------------------------------------

    @staticmethod
    def validate_component_completion_rules(component_type: ComponentType, output: dict[str, Any]) -> None:
        """Stage-specific rules checked on completion, beyond schema shape.

        Raises:
            ValidationFailed: naming the offending field
        """
        if component_type is ComponentType.ALTERNATIVES:
            alternatives = output.get("alternatives")
            if not isinstance(alternatives, list):
                raise ValidationFailed("alternatives", "Missing alternatives array")
            if len(alternatives) < MIN_ALTERNATIVES:
                raise ValidationFailed("alternatives", f"Must have at least {MIN_ALTERNATIVES} alternatives")
            if not all(isinstance(alt, dict) for alt in alternatives):
                raise ValidationFailed("alternatives", "Each alternative must be an object")

            status_quo_id = output.get("status_quo_id")
            if not status_quo_id:
                raise ValidationFailed("status_quo_id", "Missing status quo designation")
            if not any(alt.get("id") == status_quo_id for alt in alternatives):
                raise ValidationFailed("status_quo_id", "Status quo ID not found in alternatives")

        elif component_type is ComponentType.OBJECTIVES:
            fundamentals = output.get("fundamental_objectives")
            if not isinstance(fundamentals, list):
                raise ValidationFailed("fundamental_objectives", "Missing fundamental objectives")
            if not fundamentals:
                raise ValidationFailed("fundamental_objectives", "Must have at least 1 fundamental objective")

        elif component_type is ComponentType.CONSEQUENCES:
            table = output.get("table")
            if not isinstance(table, dict):
                raise ValidationFailed("table", "Missing consequence table")
            cells = table.get("cells")
            if not isinstance(cells, dict):
                raise ValidationFailed("cells", "Missing cells object")
            for alt_id in table.get("alternative_ids", []):
                row = cells.get(alt_id) or {}
                for obj_id in table.get("objective_ids", []):
                    if obj_id not in row:
                        raise ValidationFailed(
                            "cells",
                            f"Missing cell for alternative {alt_id} and objective {obj_id}",
                        )

        elif component_type is ComponentType.DECISION_QUALITY:
            elements = output.get("elements")
            if not isinstance(elements, list):
                raise ValidationFailed("elements", "Missing DQ elements")
            if len(elements) != DQ_ELEMENT_COUNT:
                raise ValidationFailed("elements", f"Must have exactly {DQ_ELEMENT_COUNT} DQ elements")

        # Other stages have no rules beyond their schema

    # ------------------------------------------------------------------
    # Branching
    # ------------------------------------------------------------------

    def branch_at(self, branch_point: ComponentType, label: str | None = None) -> "Cycle":
        """Derive a new cycle that re-examines the workflow from ``branch_point``.

        - Stages before the branch point are copied unchanged (version included).
        - The branch point keeps its output but is forced to NeedsRevision.
        - Stages after it start fresh (NotStarted, version 1).
        """
        self._ensure_mutable()

        if not self.component_status(branch_point).is_started():
            raise CannotBranch(
                f"Cannot branch at {branch_point.value} - component not started",
                component_type=branch_point.value,
            )

        components: dict[ComponentType, Component] = {}
        for ct in ComponentType.all():
            if ct.is_before(branch_point):
                components[ct] = self._components[ct].branch_copy()
            elif ct is branch_point:
                branched = self._components[ct].branch_copy()
                branched.mark_for_revision(BRANCH_REVISION_REASON)
                components[ct] = branched
            else:
                components[ct] = Component(component_type=ct)

        branch = Cycle(
            id=uuid.uuid4(),
            session_id=self._session_id,
            components=components,
            current_step=branch_point,
            parent_cycle_id=self._id,
            branch_point=branch_point,
            branch_label=label,
            validator=self._validator,
        )
        branch._record(
            CycleBranched(
                cycle_id=branch.id,
                session_id=self._session_id,
                parent_cycle_id=self._id,
                branch_point=branch_point,
                occurred_at=branch.created_at,
            )
        )
        return branch

    # ------------------------------------------------------------------
    # Cycle lifecycle
    # ------------------------------------------------------------------

    def complete(self) -> None:
        if not self._status.can_transition_to(CycleStatus.COMPLETED):
            raise InvalidStateTransition(
                f"Cycle cannot be completed from {self._status.value}",
                cycle_id=self._id,
            )
        if not self.component_status(ComponentType.DECISION_QUALITY).is_complete():
            raise InvalidStateTransition(
                "DecisionQuality must be complete before completing cycle",
                cycle_id=self._id,
            )

        now = self._touch()
        self._status = CycleStatus.COMPLETED
        self._record(CycleCompleted(cycle_id=self._id, occurred_at=now))

    def archive(self) -> None:
        if not self._status.can_transition_to(CycleStatus.ARCHIVED):
            raise InvalidStateTransition(
                f"Cycle cannot be archived from {self._status.value}",
                cycle_id=self._id,
            )

        now = self._touch()
        self._status = CycleStatus.ARCHIVED
        self._record(CycleArchivedEvent(cycle_id=self._id, occurred_at=now))

    def __repr__(self) -> str:
        return f"Cycle(id={self._id}, status={self._status.value}, current_step={self._current_step.value})"
