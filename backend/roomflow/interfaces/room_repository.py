"""
Room repository interface.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from roomflow.models.room import Room, RoomCreate


class IRoomRepository(ABC):
    """Interface for room repository operations."""

    @abstractmethod
    async def create(self, room: RoomCreate) -> Room:
        """Create a room together with one NOT_STARTED stage per phase type."""
        pass

    @abstractmethod
    async def get_by_id(self, room_id: UUID) -> Room | None:
        """Get a room by ID."""
        pass

    @abstractmethod
    async def list_by_project(self, project_id: str) -> list[Room]:
        """List rooms of a project, oldest first."""
        pass
