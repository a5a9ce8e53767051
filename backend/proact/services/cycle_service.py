"""CycleService -- orchestrates the Cycle aggregate with persistence.

This is the integration point where the pure aggregate meets the ports.
Every mutating method follows the same shape:
- Load the cycle (CycleNotFound if absent)
- Call one aggregate method inside the cycle's log context
- Persist, then drain the event queue and publish each event
"""

import uuid
from typing import Any

import structlog

from proact.core.exceptions import ConcurrencyConflict, CycleNotFound
from proact.core.logging import cycle_context
from proact.domain.component_type import ComponentType
from proact.domain.cycle import Cycle
from proact.domain.tree_view import CycleTreeNode, build_cycle_tree
from proact.ports.events import EventPublisher
from proact.ports.repository import CycleRepository
from proact.ports.validator import ComponentSchemaValidator
from proact.services.analysis_service import AnalysisService

logger = structlog.get_logger(__name__)


class CycleService:
    """Command layer for cycles. No retries: ConcurrencyConflict propagates."""

    def __init__(
        self,
        repository: CycleRepository,
        publisher: EventPublisher,
        validator: ComponentSchemaValidator | None = None,
        analysis: AnalysisService | None = None,
    ):
        """Initialize with dependency-injected ports.

        Args:
            repository: Cycle persistence
            publisher: Sink for drained domain events
            validator: Schema validator given to newly created cycles
            analysis: Optional analysis trigger run after stage completion
        """
        self.repository = repository
        self.publisher = publisher
        self.validator = validator
        self.analysis = analysis

    async def _load(self, cycle_id: uuid.UUID) -> Cycle:
        cycle = await self.repository.find_by_id(cycle_id)
        if cycle is None:
            raise CycleNotFound(cycle_id)
        return cycle

    async def _commit(self, cycle: Cycle, is_new: bool = False) -> None:
        if is_new:
            await self.repository.save(cycle)
        else:
            await self.repository.update(cycle)
        for event in cycle.take_events():
            await self.publisher.publish(event.to_dict())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_cycle(self, cycle_id: uuid.UUID) -> Cycle:
        return await self._load(cycle_id)

    async def list_cycles(self, session_id: uuid.UUID) -> list[Cycle]:
        return await self.repository.find_by_session_id(session_id)

    async def get_cycle_tree(self, session_id: uuid.UUID) -> list[CycleTreeNode]:
        return build_cycle_tree(await self.repository.find_by_session_id(session_id))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_cycle(self, session_id: uuid.UUID) -> Cycle:
        cycle = Cycle.new(session_id, validator=self.validator)
        with cycle_context(cycle_id=cycle.id, session_id=session_id):
            await self._commit(cycle, is_new=True)
            logger.info("cycle_created")
        return cycle

    async def branch_cycle(
        self,
        cycle_id: uuid.UUID,
        branch_point: ComponentType,
        label: str | None = None,
    ) -> Cycle:
        parent = await self._load(cycle_id)
        with cycle_context(cycle_id=parent.id, session_id=parent.session_id):
            branch = parent.branch_at(branch_point, label)
            await self._commit(branch, is_new=True)
            logger.info(
                "cycle_branched",
                branch_cycle_id=str(branch.id),
                branch_point=branch_point.value,
            )
        return branch

    async def start_component(self, cycle_id: uuid.UUID, component_type: ComponentType) -> Cycle:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            cycle.start_component(component_type)
            await self._commit(cycle)
            logger.info("component_started", component_type=component_type.value)
        return cycle

    async def update_component_output(
        self,
        cycle_id: uuid.UUID,
        component_type: ComponentType,
        output: dict[str, Any],
        expected_version: int,
    ) -> int:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            try:
                version = cycle.update_component_output(component_type, output, expected_version)
            except ConcurrencyConflict as exc:
                logger.warning(
                    "concurrency_conflict",
                    component_type=component_type.value,
                    expected_version=exc.expected,
                    actual_version=exc.actual,
                )
                raise
            await self._commit(cycle)
            logger.info("component_output_updated", component_type=component_type.value, version=version)
        return version

    async def complete_component(
        self,
        cycle_id: uuid.UUID,
        component_type: ComponentType,
        output: dict[str, Any] | None = None,
        expected_version: int | None = None,
    ) -> int:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            version = cycle.complete_component(component_type, output, expected_version)
            await self._commit(cycle)
            logger.info(
                "component_completed",
                component_type=component_type.value,
                version=version,
                current_step=cycle.current_step.value,
            )

            if self.analysis is not None:
                await self.analysis.handle_component_completed(cycle, component_type)
        return version

    async def mark_component_for_revision(
        self,
        cycle_id: uuid.UUID,
        component_type: ComponentType,
        reason: str,
    ) -> Cycle:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            cycle.mark_component_for_revision(component_type, reason)
            await self._commit(cycle)
            logger.info("component_marked_for_revision", component_type=component_type.value, reason=reason)
        return cycle

    async def navigate_to(self, cycle_id: uuid.UUID, component_type: ComponentType) -> Cycle:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            cycle.navigate_to(component_type)
            await self._commit(cycle)
            logger.debug("cycle_navigated", component_type=component_type.value)
        return cycle

    async def complete_cycle(self, cycle_id: uuid.UUID) -> Cycle:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            cycle.complete()
            await self._commit(cycle)
            logger.info("cycle_completed")
        return cycle

    async def archive_cycle(self, cycle_id: uuid.UUID) -> Cycle:
        cycle = await self._load(cycle_id)
        with cycle_context(cycle_id=cycle.id, session_id=cycle.session_id):
            cycle.archive()
            await self._commit(cycle)
            logger.info("cycle_archived")
        return cycle
