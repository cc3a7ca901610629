"""
Stage repository interface.

Defines the contract for stage data operations.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from roomflow.models.enums import StageStatus
from roomflow.models.phase import Stage, StageUpdate


class IStageRepository(ABC):
    """Interface for stage repository operations."""

    @abstractmethod
    async def get_by_id(self, stage_id: UUID) -> Stage | None:
        """Get a stage by ID, with its assignee resolved."""
        pass

    @abstractmethod
    async def list_by_room(self, room_id: UUID) -> list[Stage]:
        """List the stages of a room in phase sequence order."""
        pass

    @abstractmethod
    async def update(
        self,
        stage_id: UUID,
        update: StageUpdate,
        expected_status: StageStatus | None = None,
    ) -> Stage | None:
        """
        Write the explicitly set fields of update.

        With expected_status, the write only applies while the stored status
        still equals it; None is returned when it does not.

        Raises:
            NotFoundError: unknown stage
        """
        pass
