"""
SQLite implementation of notification repository.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import and_, select

from roomflow.infrastructure.local.database import NotificationORM, get_session_factory
from roomflow.interfaces.notification_repository import INotificationRepository
from roomflow.models.enums import NotificationType
from roomflow.models.notification import Notification, NotificationCreate
from roomflow.utils.datetime_utils import ensure_utc, now_utc


class SqliteNotificationRepository(INotificationRepository):
    """SQLite implementation of notification repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: NotificationORM) -> Notification:
        return Notification(
            id=UUID(orm.id),
            user_id=orm.user_id,
            type=NotificationType(orm.type),
            title=orm.title,
            message=orm.message,
            read=orm.read,
            related_id=orm.related_id,
            related_type=orm.related_type,
            created_at=ensure_utc(orm.created_at),
        )

    def _to_orm(self, notification: NotificationCreate) -> NotificationORM:
        return NotificationORM(
            id=str(uuid4()),
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            read=False,
            related_id=notification.related_id,
            related_type=notification.related_type,
            created_at=now_utc(),
        )

    async def create(self, notification: NotificationCreate) -> Notification:
        async with self._session_factory() as session:
            orm = self._to_orm(notification)
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def create_bulk(self, notifications: list[NotificationCreate]) -> list[Notification]:
        if not notifications:
            return []
        async with self._session_factory() as session:
            orms = [self._to_orm(n) for n in notifications]
            session.add_all(orms)
            await session.commit()
            for orm in orms:
                await session.refresh(orm)
            return [self._orm_to_model(orm) for orm in orms]

    async def list(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        async with self._session_factory() as session:
            query = select(NotificationORM).where(NotificationORM.user_id == user_id)
            if unread_only:
                query = query.where(NotificationORM.read.is_(False))
            query = query.order_by(NotificationORM.created_at.desc()).offset(offset).limit(limit)
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def exists(
        self, user_id: str, notification_type: NotificationType, related_id: str
    ) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                select(NotificationORM.id)
                .where(
                    and_(
                        NotificationORM.user_id == user_id,
                        NotificationORM.type == notification_type.value,
                        NotificationORM.related_id == related_id,
                    )
                )
                .limit(1)
            )
            return result.scalar_one_or_none() is not None
