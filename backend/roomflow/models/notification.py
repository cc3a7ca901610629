"""
Notification model definitions.

Notifications inform team members about assignments and completed phases.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from roomflow.models.base import CamelModel
from roomflow.models.enums import NotificationType


class NotificationCreate(CamelModel):
    """Schema for creating a notification."""

    user_id: str
    type: NotificationType
    title: str = Field(..., max_length=200)
    message: str = Field(..., max_length=500)
    related_id: Optional[str] = None
    related_type: Optional[str] = None


class Notification(NotificationCreate):
    """User notification model."""

    id: UUID
    read: bool = False
    created_at: datetime
