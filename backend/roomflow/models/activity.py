"""
Activity log model definitions.

Events are recorded by the stage endpoints and rendered by the activity feed.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import Field

from roomflow.models.base import CamelModel
from roomflow.models.enums import ActivityAction


class ActivityEventCreate(CamelModel):
    """Schema for recording an activity event."""

    actor_id: Optional[str] = None
    action: ActivityAction
    entity: str = "Stage"
    entity_id: str
    room_id: Optional[UUID] = None
    details: dict[str, Any] = Field(default_factory=dict)


class ActivityEvent(ActivityEventCreate):
    """Recorded activity event."""

    id: UUID
    created_at: datetime


class ActivityFeedEntry(CamelModel):
    """Rendered activity event."""

    id: UUID
    action: ActivityAction
    text: str
    created_at: datetime
