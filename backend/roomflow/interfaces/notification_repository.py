"""
Notification repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from roomflow.models.enums import NotificationType
from roomflow.models.notification import Notification, NotificationCreate


class INotificationRepository(ABC):
    """Abstract interface for notification persistence."""

    @abstractmethod
    async def create(self, notification: NotificationCreate) -> Notification:
        """Create a new notification."""
        pass

    @abstractmethod
    async def create_bulk(self, notifications: list[NotificationCreate]) -> list[Notification]:
        """Create multiple notifications at once."""
        pass

    @abstractmethod
    async def list(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        """List notifications for a user, newest first."""
        pass

    @abstractmethod
    async def exists(
        self, user_id: str, notification_type: NotificationType, related_id: str
    ) -> bool:
        """Check whether a user already has a notification of this type for an entity."""
        pass
