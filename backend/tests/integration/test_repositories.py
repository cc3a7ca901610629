"""
Integration tests for the SQLite repositories.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from roomflow.core.exceptions import DuplicateError, NotFoundError
from roomflow.models.activity import ActivityEventCreate
from roomflow.models.enums import ActivityAction, NotificationType, PhaseType, StageStatus, UserRole
from roomflow.models.notification import NotificationCreate
from roomflow.models.phase import StageUpdate
from roomflow.models.room import RoomCreate
from roomflow.models.team import TeamMemberCreate
from roomflow.services.phase_config import PHASE_SEQUENCE


class TestRoomRepository:
    @pytest.mark.asyncio
    async def test_create_room_creates_one_stage_per_phase(self, room_repo, stage_repo):
        room = await room_repo.create(RoomCreate(project_id="proj-1", type="MASTER_BEDROOM"))

        stages = await stage_repo.list_by_room(room.id)

        assert [s.type for s in stages] == list(PHASE_SEQUENCE)
        assert all(s.status == StageStatus.NOT_STARTED for s in stages)
        assert all(s.room_id == room.id for s in stages)
        assert room.display_name == "Master Bedroom"

    @pytest.mark.asyncio
    async def test_get_and_list_by_project(self, room_repo):
        first = await room_repo.create(RoomCreate(project_id="proj-1", type="KITCHEN", name="Chef's Kitchen"))
        await room_repo.create(RoomCreate(project_id="proj-2", type="BATH"))

        assert (await room_repo.get_by_id(first.id)).name == "Chef's Kitchen"
        assert await room_repo.get_by_id(uuid4()) is None
        assert [r.id for r in await room_repo.list_by_project("proj-1")] == [first.id]


class TestStageRepository:
    @pytest.mark.asyncio
    async def test_update_writes_only_set_fields(self, room, stage_repo):
        stage = (await stage_repo.list_by_room(room.id))[1]
        due = datetime(2026, 4, 1, tzinfo=timezone.utc)

        await stage_repo.update(stage.id, StageUpdate(due_date=due))
        updated = await stage_repo.update(stage.id, StageUpdate(status=StageStatus.IN_PROGRESS))

        assert updated.status == StageStatus.IN_PROGRESS
        assert updated.due_date == due

    @pytest.mark.asyncio
    async def test_explicit_none_clears_field(self, room, stage_repo):
        stage = (await stage_repo.list_by_room(room.id))[0]
        await stage_repo.update(stage.id, StageUpdate(due_date=datetime(2026, 4, 1, tzinfo=timezone.utc)))

        cleared = await stage_repo.update(stage.id, StageUpdate(due_date=None))

        assert cleared.due_date is None

    @pytest.mark.asyncio
    async def test_assignee_is_loaded(self, room, stage_repo):
        stage = (await stage_repo.list_by_room(room.id))[1]

        await stage_repo.update(stage.id, StageUpdate(assigned_to="rory"))
        loaded = await stage_repo.get_by_id(stage.id)

        assert loaded.assigned_to == "rory"
        assert loaded.assigned_user.name == "Rory Chen"
        assert loaded.assigned_user.role == UserRole.RENDERER

    @pytest.mark.asyncio
    async def test_update_missing_stage_raises(self, stage_repo):
        with pytest.raises(NotFoundError):
            await stage_repo.update(uuid4(), StageUpdate(status=StageStatus.COMPLETED))

    @pytest.mark.asyncio
    async def test_update_with_stale_expected_status_is_not_applied(self, room, stage_repo):
        stage = (await stage_repo.list_by_room(room.id))[4]
        await stage_repo.update(
            stage.id,
            StageUpdate(status=StageStatus.NOT_APPLICABLE),
            expected_status=StageStatus.NOT_STARTED,
        )

        stale = await stage_repo.update(
            stage.id,
            StageUpdate(status=StageStatus.IN_PROGRESS),
            expected_status=StageStatus.NOT_STARTED,
        )

        assert stale is None
        assert (await stage_repo.get_by_id(stage.id)).status == StageStatus.NOT_APPLICABLE

    @pytest.mark.asyncio
    async def test_update_missing_stage_with_expected_status_raises(self, stage_repo):
        with pytest.raises(NotFoundError):
            await stage_repo.update(
                uuid4(),
                StageUpdate(status=StageStatus.IN_PROGRESS),
                expected_status=StageStatus.NOT_STARTED,
            )


class TestTeamMemberRepository:
    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, member_repo, team):
        names = [m.name for m in await member_repo.list()]
        assert names == sorted(names)
        assert len(names) == 5

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, member_repo, team):
        with pytest.raises(DuplicateError):
            await member_repo.create(
                TeamMemberCreate(name="Ana Again", email="ana@studio.test", role=UserRole.DESIGNER)
            )

    @pytest.mark.asyncio
    async def test_get_many(self, member_repo, team):
        found = await member_repo.get_many(["ana", "fern", "nobody", ""])
        assert set(found) == {"ana", "fern"}


class TestActivityRepository:
    @pytest.mark.asyncio
    async def test_record_and_list_newest_first(self, room, activity_repo):
        for action in (ActivityAction.STAGE_STARTED, ActivityAction.STAGE_COMPLETED):
            await activity_repo.record(ActivityEventCreate(
                actor_id="ana",
                action=action,
                entity_id=str(uuid4()),
                room_id=room.id,
                details={"phase_type": PhaseType.THREE_D.value},
            ))

        events = await activity_repo.list_by_room(room.id)

        assert [e.action for e in events] == [ActivityAction.STAGE_COMPLETED, ActivityAction.STAGE_STARTED]
        assert events[0].details == {"phase_type": "THREE_D"}
        assert await activity_repo.list_by_room(uuid4()) == []


class TestNotificationRepository:
    @pytest.mark.asyncio
    async def test_exists_matches_user_type_and_related_id(self, notification_repo):
        related_id = str(uuid4())
        await notification_repo.create(NotificationCreate(
            user_id="dana",
            type=NotificationType.STAGE_COMPLETED,
            title="Drawings is ready to start",
            message="Client Approval was completed.",
            related_id=related_id,
            related_type="stage",
        ))

        assert await notification_repo.exists("dana", NotificationType.STAGE_COMPLETED, related_id)
        assert not await notification_repo.exists("fern", NotificationType.STAGE_COMPLETED, related_id)
        assert not await notification_repo.exists("dana", NotificationType.STAGE_ASSIGNED, related_id)

    @pytest.mark.asyncio
    async def test_list_for_user(self, notification_repo):
        created = await notification_repo.create_bulk([
            NotificationCreate(user_id="dana", type=NotificationType.STAGE_ASSIGNED, title="t1", message="m1"),
            NotificationCreate(user_id="fern", type=NotificationType.STAGE_ASSIGNED, title="t2", message="m2"),
        ])

        assert len(created) == 2
        listed = await notification_repo.list("dana")
        assert [n.title for n in listed] == ["t1"]
        assert listed[0].read is False
