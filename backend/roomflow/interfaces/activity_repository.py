"""
Activity log repository interface.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from roomflow.models.activity import ActivityEvent, ActivityEventCreate


class IActivityRepository(ABC):
    """Interface for activity log persistence."""

    @abstractmethod
    async def record(self, event: ActivityEventCreate) -> ActivityEvent:
        """Record an event."""
        pass

    @abstractmethod
    async def list_by_room(self, room_id: UUID, limit: int = 50) -> list[ActivityEvent]:
        """List events of a room, newest first."""
        pass
