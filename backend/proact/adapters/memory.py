"""In-memory adapters for the persistence and event ports.

Used by tests and local runs. ``InMemoryCycleRepository`` keeps deep copies
so a stored cycle reflects exactly what was saved, per-component versions
included, and later in-place mutation of the caller's object does not leak.
"""

import uuid

from proact.core.exceptions import CycleNotFound
from proact.domain.cycle import Cycle


def _snapshot(cycle: Cycle) -> Cycle:
    # Pending events belong to the caller, never to the stored copy
    return Cycle.reconstitute(
        id=cycle.id,
        session_id=cycle.session_id,
        components=dict(cycle.components),
        status=cycle.status,
        current_step=cycle.current_step,
        parent_cycle_id=cycle.parent_cycle_id,
        branch_point=cycle.branch_point,
        branch_label=cycle.branch_label,
        created_at=cycle.created_at,
        updated_at=cycle.updated_at,
        validator=cycle.validator,
    )


class InMemoryCycleRepository:
    """Satisfies the CycleRepository protocol."""

    def __init__(self) -> None:
        self._cycles: dict[uuid.UUID, Cycle] = {}

    async def save(self, cycle: Cycle) -> None:
        self._cycles[cycle.id] = _snapshot(cycle)

    async def update(self, cycle: Cycle) -> None:
        if cycle.id not in self._cycles:
            raise CycleNotFound(cycle.id)
        self._cycles[cycle.id] = _snapshot(cycle)

    async def find_by_id(self, cycle_id: uuid.UUID) -> Cycle | None:
        stored = self._cycles.get(cycle_id)
        return _snapshot(stored) if stored else None

    async def find_by_session_id(self, session_id: uuid.UUID) -> list[Cycle]:
        return [_snapshot(c) for c in self._cycles.values() if c.session_id == session_id]

    async def find_branches(self, parent_cycle_id: uuid.UUID) -> list[Cycle]:
        return [_snapshot(c) for c in self._cycles.values() if c.parent_cycle_id == parent_cycle_id]

    async def delete(self, cycle_id: uuid.UUID) -> None:
        if self._cycles.pop(cycle_id, None) is None:
            raise CycleNotFound(cycle_id)


class InMemoryEventPublisher:
    """Records every published envelope in order."""

    def __init__(self) -> None:
        self.published: list[dict] = []

    async def publish(self, event: dict) -> None:
        self.published.append(event)

    def of_type(self, event_type: str) -> list[dict]:
        return [e for e in self.published if e.get("type") == event_type]
