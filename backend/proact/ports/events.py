"""Event sink port."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EventPublisher(Protocol):
    """Forwards drained domain events and analysis results downstream."""

    async def publish(self, event: dict) -> None:
        """Publish one event envelope (dict with a 'type' discriminator)."""
        ...
