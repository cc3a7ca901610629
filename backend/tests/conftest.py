"""
Shared fixtures.

Each test gets its own SQLite database file so that concurrent requests
(bulk assignment) use separate connections.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from roomflow.infrastructure.local.activity_repository import SqliteActivityRepository
from roomflow.infrastructure.local.database import Base
from roomflow.infrastructure.local.notification_repository import SqliteNotificationRepository
from roomflow.infrastructure.local.room_repository import SqliteRoomRepository
from roomflow.infrastructure.local.stage_repository import SqliteStageRepository
from roomflow.infrastructure.local.team_member_repository import SqliteTeamMemberRepository
from roomflow.models.enums import UserRole
from roomflow.models.room import RoomCreate
from roomflow.models.team import TeamMemberCreate
from roomflow.services.stage_service import StageWorkflowService

TEST_USER_ID = "dev_user"

TEAM = [
    TeamMemberCreate(id="ana", name="Ana Lima", email="ana@studio.test", role=UserRole.DESIGNER),
    TeamMemberCreate(id="rory", name="Rory Chen", email="rory@studio.test", role=UserRole.RENDERER),
    TeamMemberCreate(id="dana", name="Dana Ortiz", email="dana@studio.test", role=UserRole.DRAFTER),
    TeamMemberCreate(id="fern", name="Fern Walsh", email="fern@studio.test", role=UserRole.FFE),
    TeamMemberCreate(id="owen", name="Owen Park", email="owen@studio.test", role=UserRole.OWNER),
]


@pytest.fixture
def test_user_id():
    return TEST_USER_ID


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def stage_repo(session_factory):
    return SqliteStageRepository(session_factory=session_factory)


@pytest.fixture
def room_repo(session_factory):
    return SqliteRoomRepository(session_factory=session_factory)


@pytest.fixture
def member_repo(session_factory):
    return SqliteTeamMemberRepository(session_factory=session_factory)


@pytest.fixture
def activity_repo(session_factory):
    return SqliteActivityRepository(session_factory=session_factory)


@pytest.fixture
def notification_repo(session_factory):
    return SqliteNotificationRepository(session_factory=session_factory)


@pytest_asyncio.fixture
async def team(member_repo):
    """Seeded team: one member per assignable role plus an owner."""
    return {member.id: await member_repo.create(member) for member in TEAM}


@pytest_asyncio.fixture
async def room(room_repo, team):
    return await room_repo.create(RoomCreate(project_id="proj-1", type="LIVING_ROOM"))


@pytest.fixture
def workflow(stage_repo, room_repo, member_repo, activity_repo, notification_repo):
    return StageWorkflowService(
        stage_repo=stage_repo,
        room_repo=room_repo,
        member_repo=member_repo,
        activity_repo=activity_repo,
        notification_repo=notification_repo,
    )


@pytest.fixture
def app(stage_repo, room_repo, member_repo, activity_repo, notification_repo):
    """FastAPI app wired to the test database."""
    from roomflow.api import deps
    from roomflow.main import create_app

    application = create_app()
    application.dependency_overrides[deps.get_stage_repository] = lambda: stage_repo
    application.dependency_overrides[deps.get_room_repository] = lambda: room_repo
    application.dependency_overrides[deps.get_team_member_repository] = lambda: member_repo
    application.dependency_overrides[deps.get_activity_repository] = lambda: activity_repo
    application.dependency_overrides[deps.get_notification_repository] = lambda: notification_repo
    return application


@pytest_asyncio.fixture
async def http_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
