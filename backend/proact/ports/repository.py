"""Persistence port for the Cycle aggregate."""

import uuid
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from proact.domain.cycle import Cycle


@runtime_checkable
class CycleRepository(Protocol):
    """Async persistence for cycles. Must store per-component versions."""

    async def save(self, cycle: "Cycle") -> None:
        """Persist a new cycle."""
        ...

    async def update(self, cycle: "Cycle") -> None:
        """Persist changes to an existing cycle.

        Raises:
            CycleNotFound: if the cycle was never saved
        """
        ...

    async def find_by_id(self, cycle_id: uuid.UUID) -> "Cycle | None":
        ...

    async def find_by_session_id(self, session_id: uuid.UUID) -> list["Cycle"]:
        ...

    async def find_branches(self, parent_cycle_id: uuid.UUID) -> list["Cycle"]:
        ...

    async def delete(self, cycle_id: uuid.UUID) -> None:
        ...
