"""
Room model definitions.

A room owns one stage per phase type; the stages are created with the room.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from roomflow.models.base import CamelModel


class RoomCreate(CamelModel):
    """Schema for creating a room."""

    project_id: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50, description="Room type, e.g. LIVING_ROOM")
    name: Optional[str] = Field(None, max_length=200)


class Room(RoomCreate):
    """Complete room model."""

    id: UUID
    created_at: datetime

    @property
    def display_name(self) -> str:
        """Room name, or the room type in title case."""
        if self.name:
            return self.name
        return self.type.replace("_", " ").title()


class RoomProgress(CamelModel):
    """Room completion summary."""

    room_id: UUID
    completion_percentage: int
    completed_phases: int
    applicable_phases: int
