"""
SQLite implementation of activity log repository.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import select

from roomflow.infrastructure.local.database import ActivityLogORM, get_session_factory
from roomflow.interfaces.activity_repository import IActivityRepository
from roomflow.models.activity import ActivityEvent, ActivityEventCreate
from roomflow.models.enums import ActivityAction
from roomflow.utils.datetime_utils import ensure_utc, now_utc


class SqliteActivityRepository(IActivityRepository):
    """SQLite implementation of activity log repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ActivityLogORM) -> ActivityEvent:
        return ActivityEvent(
            id=UUID(orm.id),
            actor_id=orm.actor_id,
            action=ActivityAction(orm.action),
            entity=orm.entity,
            entity_id=orm.entity_id,
            room_id=UUID(orm.room_id) if orm.room_id else None,
            details=orm.details or {},
            created_at=ensure_utc(orm.created_at),
        )

    async def record(self, event: ActivityEventCreate) -> ActivityEvent:
        async with self._session_factory() as session:
            orm = ActivityLogORM(
                id=str(uuid4()),
                actor_id=event.actor_id,
                action=event.action.value,
                entity=event.entity,
                entity_id=event.entity_id,
                room_id=str(event.room_id) if event.room_id else None,
                details=event.details,
                created_at=now_utc(),
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_by_room(self, room_id: UUID, limit: int = 50) -> list[ActivityEvent]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ActivityLogORM)
                .where(ActivityLogORM.room_id == str(room_id))
                .order_by(ActivityLogORM.created_at.desc())
                .limit(limit)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
