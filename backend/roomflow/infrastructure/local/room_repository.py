"""
SQLite implementation of Room repository.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import select

from roomflow.infrastructure.local.database import RoomORM, StageORM, get_session_factory
from roomflow.interfaces.room_repository import IRoomRepository
from roomflow.models.enums import StageStatus
from roomflow.models.room import Room, RoomCreate
from roomflow.services.phase_config import PHASE_SEQUENCE
from roomflow.utils.datetime_utils import ensure_utc, now_utc


class SqliteRoomRepository(IRoomRepository):
    """SQLite implementation of room repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: RoomORM) -> Room:
        return Room(
            id=UUID(orm.id),
            project_id=orm.project_id,
            type=orm.type,
            name=orm.name,
            created_at=ensure_utc(orm.created_at),
        )

    async def create(self, room: RoomCreate) -> Room:
        """Create a room and its stages in one transaction."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = RoomORM(
                id=str(uuid4()),
                project_id=room.project_id,
                type=room.type,
                name=room.name,
                created_at=now,
            )
            session.add(orm)
            await session.flush()
            for phase_type in PHASE_SEQUENCE:
                session.add(
                    StageORM(
                        id=str(uuid4()),
                        room_id=orm.id,
                        type=phase_type.value,
                        status=StageStatus.NOT_STARTED.value,
                        created_at=now,
                        updated_at=now,
                    )
                )
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get_by_id(self, room_id: UUID) -> Room | None:
        async with self._session_factory() as session:
            orm = await session.get(RoomORM, str(room_id))
            return self._orm_to_model(orm) if orm else None

    async def list_by_project(self, project_id: str) -> list[Room]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(RoomORM)
                .where(RoomORM.project_id == project_id)
                .order_by(RoomORM.created_at)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
