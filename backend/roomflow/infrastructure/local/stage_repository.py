"""
SQLite implementation of Stage repository.
"""

from __future__ import annotations

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession

from roomflow.core.exceptions import NotFoundError
from roomflow.infrastructure.local.database import StageORM, TeamMemberORM, get_session_factory
from roomflow.interfaces.stage_repository import IStageRepository
from roomflow.models.enums import PhaseType, StageStatus, UserRole
from roomflow.models.phase import Stage, StageUpdate
from roomflow.models.team import TeamMember
from roomflow.services.phase_config import PHASE_SEQUENCE
from roomflow.utils.datetime_utils import ensure_utc, now_utc


class SqliteStageRepository(IStageRepository):
    """SQLite implementation of stage repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: StageORM, assignee: TeamMember | None = None) -> Stage:
        """Convert ORM object to Pydantic model."""
        return Stage(
            id=UUID(orm.id),
            room_id=UUID(orm.room_id),
            type=PhaseType(orm.type),
            status=StageStatus(orm.status),
            assigned_to=orm.assigned_to,
            assigned_user=assignee,
            due_date=ensure_utc(orm.due_date),
            started_at=ensure_utc(orm.started_at),
            completed_at=ensure_utc(orm.completed_at),
            completed_by_id=orm.completed_by_id,
            updated_by_id=orm.updated_by_id,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _load_assignees(
        self, session: AsyncSession, orms: Sequence[StageORM]
    ) -> dict[str, TeamMember]:
        ids = {orm.assigned_to for orm in orms if orm.assigned_to}
        if not ids:
            return {}
        result = await session.execute(select(TeamMemberORM).where(TeamMemberORM.id.in_(ids)))
        return {
            m.id: TeamMember(id=m.id, name=m.name, email=m.email, role=UserRole(m.role), image=m.image)
            for m in result.scalars().all()
        }

    async def get_by_id(self, stage_id: UUID) -> Stage | None:
        async with self._session_factory() as session:
            orm = await session.get(StageORM, str(stage_id))
            if not orm:
                return None
            assignees = await self._load_assignees(session, [orm])
            return self._orm_to_model(orm, assignees.get(orm.assigned_to))

    async def list_by_room(self, room_id: UUID) -> list[Stage]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(StageORM).where(StageORM.room_id == str(room_id))
            )
            orms = list(result.scalars().all())
            assignees = await self._load_assignees(session, orms)
            order = {phase.value: index for index, phase in enumerate(PHASE_SEQUENCE)}
            orms.sort(key=lambda orm: order.get(orm.type, len(order)))
            return [self._orm_to_model(orm, assignees.get(orm.assigned_to)) for orm in orms]

    async def update(
        self,
        stage_id: UUID,
        update: StageUpdate,
        expected_status: StageStatus | None = None,
    ) -> Stage | None:
        async with self._session_factory() as session:
            values = {}
            for field, value in update.model_dump(exclude_unset=True).items():
                if hasattr(value, "value"):  # Enum
                    value = value.value
                values[field] = value
            values["updated_at"] = now_utc()

            stmt = sa_update(StageORM).where(StageORM.id == str(stage_id))
            if expected_status is not None:
                # Compare-and-set: a concurrent writer that moved the stage first wins
                stmt = stmt.where(StageORM.status == StageStatus(expected_status).value)
            result = await session.execute(stmt.values(**values))

            if result.rowcount == 0:
                if not await session.get(StageORM, str(stage_id)):
                    raise NotFoundError(f"Stage {stage_id} not found")
                return None

            await session.commit()
            orm = await session.get(StageORM, str(stage_id), populate_existing=True)
            assignees = await self._load_assignees(session, [orm])
            return self._orm_to_model(orm, assignees.get(orm.assigned_to))
