"""
SQLite implementation of team member repository.
"""

from __future__ import annotations

from typing import Iterable
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from roomflow.core.exceptions import DuplicateError
from roomflow.infrastructure.local.database import TeamMemberORM, get_session_factory
from roomflow.interfaces.team_member_repository import ITeamMemberRepository
from roomflow.models.enums import UserRole
from roomflow.models.team import TeamMember, TeamMemberCreate


class SqliteTeamMemberRepository(ITeamMemberRepository):
    """SQLite implementation of team member repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: TeamMemberORM) -> TeamMember:
        return TeamMember(
            id=orm.id,
            name=orm.name,
            email=orm.email,
            role=UserRole(orm.role),
            image=orm.image,
        )

    async def create(self, member: TeamMemberCreate) -> TeamMember:
        async with self._session_factory() as session:
            orm = TeamMemberORM(
                id=member.id or str(uuid4()),
                name=member.name,
                email=member.email,
                role=member.role.value,
                image=member.image,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateError(f"Team member {member.email} already exists") from e
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, member_id: str) -> TeamMember | None:
        async with self._session_factory() as session:
            orm = await session.get(TeamMemberORM, member_id)
            return self._orm_to_model(orm) if orm else None

    async def get_many(self, member_ids: Iterable[str]) -> dict[str, TeamMember]:
        ids = {member_id for member_id in member_ids if member_id}
        if not ids:
            return {}
        async with self._session_factory() as session:
            result = await session.execute(
                select(TeamMemberORM).where(TeamMemberORM.id.in_(ids))
            )
            return {orm.id: self._orm_to_model(orm) for orm in result.scalars().all()}

    async def list(self) -> list[TeamMember]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(TeamMemberORM).order_by(TeamMemberORM.name)
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]
