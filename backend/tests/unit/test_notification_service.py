"""
Unit tests for notification_service.

Uses a mock repository to verify which notifications are created for
assignment and phase-completion events.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from roomflow.models.enums import NotificationType, PhaseType, StageStatus, UserRole
from roomflow.models.phase import NextPhaseInfo, Stage
from roomflow.models.team import TeamMember
from roomflow.services import notification_service as notify

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)
DANA = TeamMember(id="dana", name="Dana Ortiz", email="dana@studio.test", role=UserRole.DRAFTER)
FERN = TeamMember(id="fern", name="Fern Walsh", email="fern@studio.test", role=UserRole.FFE)


def _stage(phase_type: PhaseType, assignee: TeamMember | None = None, room_id=None) -> Stage:
    return Stage(
        id=uuid4(),
        room_id=room_id or uuid4(),
        type=phase_type,
        status=StageStatus.COMPLETED if phase_type == PhaseType.CLIENT_APPROVAL else StageStatus.NOT_STARTED,
        assigned_to=assignee.id if assignee else None,
        assigned_user=assignee,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def mock_repo():
    """Mock notification repository."""
    repo = AsyncMock()
    repo.create = AsyncMock()
    repo.exists = AsyncMock(return_value=False)
    return repo


class TestCollectNextPhaseInfo:
    def test_only_assigned_next_phases(self):
        room_id = uuid4()
        approval = _stage(PhaseType.CLIENT_APPROVAL, room_id=room_id)
        drawings = _stage(PhaseType.DRAWINGS, DANA, room_id=room_id)
        ffe = _stage(PhaseType.FFE, room_id=room_id)

        infos = notify.collect_next_phase_info(approval, [approval, drawings, ffe])

        assert infos == [NextPhaseInfo(stage_id=drawings.id, stage_type=PhaseType.DRAWINGS, assignee=DANA)]

    def test_final_phase_has_none(self):
        ffe = _stage(PhaseType.FFE, FERN)
        assert notify.collect_next_phase_info(ffe, [ffe]) == []


class TestNotifyStageAssigned:
    @pytest.mark.asyncio
    async def test_assignee_is_notified(self, mock_repo):
        stage = _stage(PhaseType.DRAWINGS, DANA)

        await notify.notify_stage_assigned(mock_repo, stage, DANA, "owen", "Kitchen")

        mock_repo.create.assert_called_once()
        notification = mock_repo.create.call_args[0][0]
        assert notification.user_id == "dana"
        assert notification.type == NotificationType.STAGE_ASSIGNED
        assert notification.title == "You were assigned Drawings"
        assert "Kitchen" in notification.message
        assert notification.related_id == str(stage.id)

    @pytest.mark.asyncio
    async def test_self_assignment_is_silent(self, mock_repo):
        await notify.notify_stage_assigned(mock_repo, _stage(PhaseType.DRAWINGS, DANA), DANA, "dana", "Kitchen")
        mock_repo.create.assert_not_called()


class TestNotifyNextPhaseAssignees:
    @pytest.mark.asyncio
    async def test_counts_sent_skipped_and_failed(self, mock_repo):
        completed = _stage(PhaseType.CLIENT_APPROVAL)
        owen = TeamMember(id="owen", name="Owen Park", email="owen@studio.test", role=UserRole.OWNER)
        infos = [
            NextPhaseInfo(stage_id=uuid4(), stage_type=PhaseType.DRAWINGS, assignee=DANA),
            NextPhaseInfo(stage_id=uuid4(), stage_type=PhaseType.FFE, assignee=FERN),
            NextPhaseInfo(stage_id=uuid4(), stage_type=PhaseType.FFE, assignee=owen),
        ]
        mock_repo.create.side_effect = [None, RuntimeError("db down")]

        result = await notify.notify_next_phase_assignees(
            mock_repo, completed, infos, "owen", "Kitchen", "Harbor House"
        )

        assert (result.sent_count, result.skipped_count, result.failed_count) == (1, 1, 1)
        first = mock_repo.create.call_args_list[0][0][0]
        assert first.type == NotificationType.STAGE_COMPLETED
        assert first.title == "Drawings is ready to start"
        assert first.message == (
            "Client Approval completed for Kitchen in Harbor House. Next phases: Drawings, FFE."
        )
        assert first.related_id == str(completed.id)

    @pytest.mark.asyncio
    async def test_already_notified_is_skipped(self, mock_repo):
        mock_repo.exists.return_value = True
        infos = [NextPhaseInfo(stage_id=uuid4(), stage_type=PhaseType.DRAWINGS, assignee=DANA)]

        result = await notify.notify_next_phase_assignees(
            mock_repo, _stage(PhaseType.CLIENT_APPROVAL), infos, "owen", "Kitchen", "Harbor House"
        )

        assert result.skipped_count == 1
        mock_repo.create.assert_not_called()
