"""
Stage workflow service.

Server-side authority for phase transitions: validates each requested action
against the state machine, enforces assignment roles, persists the result and
records activity and notifications.
"""

from __future__ import annotations

from datetime import datetime
from typing import NoReturn, Optional
from uuid import UUID

from roomflow.core.exceptions import InvalidTransitionError, NotFoundError, ValidationError
from roomflow.core.logger import setup_logger
from roomflow.interfaces.activity_repository import IActivityRepository
from roomflow.interfaces.notification_repository import INotificationRepository
from roomflow.interfaces.room_repository import IRoomRepository
from roomflow.interfaces.stage_repository import IStageRepository
from roomflow.interfaces.team_member_repository import ITeamMemberRepository
from roomflow.models.activity import ActivityEventCreate, ActivityFeedEntry
from roomflow.models.enums import ActivityAction, PhaseStatus, StageAction
from roomflow.models.phase import (
    NotifyNextResult,
    RoomPhase,
    Stage,
    StageActionRequest,
    StageActionResult,
    StageUpdate,
)
from roomflow.models.room import Room, RoomProgress
from roomflow.models.team import TeamMember
from roomflow.services.activity_feed import build_feed
from roomflow.services.assignment import ensure_assignable
from roomflow.services.due_dates import DEFAULT_DUE_SOON_DAYS, classify_due_date
from roomflow.services.notification_service import (
    collect_next_phase_info,
    notify_next_phase_assignees,
    notify_stage_assigned,
)
from roomflow.services.phase_config import get_phase_display_name
from roomflow.services.phase_state_machine import (
    available_actions,
    phase_status_for,
    stage_status_for,
    stage_to_phase,
    transition,
)
from roomflow.services.room_progress import room_completion_percentage
from roomflow.utils.datetime_utils import ensure_utc, now_utc

logger = setup_logger(__name__)

_ACTION_EVENTS: dict[StageAction, ActivityAction] = {
    StageAction.START: ActivityAction.STAGE_STARTED,
    StageAction.COMPLETE: ActivityAction.STAGE_COMPLETED,
    StageAction.REOPEN: ActivityAction.STAGE_REOPENED,
    StageAction.MARK_NOT_APPLICABLE: ActivityAction.STAGE_MARKED_NOT_APPLICABLE,
    StageAction.MARK_APPLICABLE: ActivityAction.STAGE_MARKED_APPLICABLE,
}


def _event_for(current: PhaseStatus, action: StageAction) -> ActivityAction:
    # mark_applicable from IN_PROGRESS is the board's "close", not a reactivation
    if action == StageAction.MARK_APPLICABLE and current == PhaseStatus.IN_PROGRESS:
        return ActivityAction.STAGE_CLOSED
    return _ACTION_EVENTS[action]


class StageWorkflowService:
    """Applies stage actions and serves the room phase board."""

    def __init__(
        self,
        stage_repo: IStageRepository,
        room_repo: IRoomRepository,
        member_repo: ITeamMemberRepository,
        activity_repo: IActivityRepository,
        notification_repo: INotificationRepository,
        due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
    ):
        self._stage_repo = stage_repo
        self._room_repo = room_repo
        self._member_repo = member_repo
        self._activity_repo = activity_repo
        self._notification_repo = notification_repo
        self._due_soon_days = due_soon_days

    # ------------------------------------------
    # Reads
    # ------------------------------------------

    async def get_room(self, room_id: UUID) -> Room:
        room = await self._room_repo.get_by_id(room_id)
        if not room:
            raise NotFoundError(f"Room {room_id} not found")
        return room

    async def get_stage(self, stage_id: UUID) -> Stage:
        stage = await self._stage_repo.get_by_id(stage_id)
        if not stage:
            raise NotFoundError(f"Stage {stage_id} not found")
        return stage

    async def list_room_phases(self, room_id: UUID, now: Optional[datetime] = None) -> list[RoomPhase]:
        """Phases of a room with due state and available actions derived at `now`."""
        await self.get_room(room_id)
        now = now or now_utc()
        phases = []
        for stage in await self._stage_repo.list_by_room(room_id):
            phase = stage_to_phase(stage)
            phases.append(
                RoomPhase(
                    **phase.model_dump(),
                    label=get_phase_display_name(phase.phase_type),
                    due_state=classify_due_date(now, phase.due_date, phase.status, self._due_soon_days),
                    available_actions=available_actions(phase.status),
                )
            )
        return phases

    async def room_progress(self, room_id: UUID) -> RoomProgress:
        await self.get_room(room_id)
        phases = [stage_to_phase(s) for s in await self._stage_repo.list_by_room(room_id)]
        applicable = [p for p in phases if p.status != PhaseStatus.NOT_APPLICABLE]
        return RoomProgress(
            room_id=room_id,
            completion_percentage=room_completion_percentage(phases),
            completed_phases=sum(1 for p in applicable if p.status == PhaseStatus.COMPLETE),
            applicable_phases=len(applicable),
        )

    async def room_activity(self, room_id: UUID, limit: int = 50) -> list[ActivityFeedEntry]:
        await self.get_room(room_id)
        events = await self._activity_repo.list_by_room(room_id, limit=limit)
        actors = await self._member_repo.get_many(e.actor_id for e in events if e.actor_id)
        return build_feed(events, {member_id: m.name for member_id, m in actors.items()})

    # ------------------------------------------
    # Mutations
    # ------------------------------------------

    async def perform_action(
        self,
        stage_id: UUID,
        request: StageActionRequest,
        actor_id: str,
        now: Optional[datetime] = None,
    ) -> StageActionResult:
        """
        Apply a stage action.

        Raises:
            NotFoundError: unknown stage
            InvalidTransitionError: action not allowed from the current status
            RoleMismatchError: assignee lacks the phase's required role
            ValidationError: unknown assignee
        """
        stage = await self.get_stage(stage_id)
        now = now or now_utc()

        if request.action == StageAction.ASSIGN:
            return await self._assign(stage, request.assigned_to, actor_id)

        current = phase_status_for(stage.status)
        outcome = transition(current, request.action, stage.started_at, stage.completed_at, now)

        update = StageUpdate(
            status=stage_status_for(outcome.status),
            started_at=outcome.started_at,
            completed_at=outcome.completed_at,
            updated_by_id=actor_id,
        )
        if outcome.status == PhaseStatus.COMPLETE:
            update.completed_by_id = actor_id
        elif outcome.completed_at is None:
            update.completed_by_id = None

        updated = await self._stage_repo.update(stage.id, update, expected_status=stage.status)
        if updated is None:
            await self._reject_stale(stage, request.action)
        logger.info(
            "Stage %s (%s) %s -> %s by %s",
            stage.id, stage.type.value, current.value, outcome.status.value, actor_id,
        )

        await self._activity_repo.record(ActivityEventCreate(
            actor_id=actor_id,
            action=_event_for(current, request.action),
            entity_id=str(stage.id),
            room_id=stage.room_id,
            details={
                "phase_type": stage.type.value,
                "from_status": current.value,
                "to_status": outcome.status.value,
            },
        ))

        next_phase_info = []
        if outcome.status == PhaseStatus.COMPLETE:
            room_stages = await self._stage_repo.list_by_room(stage.room_id)
            next_phase_info = collect_next_phase_info(updated, room_stages)

        return StageActionResult(
            **updated.model_dump(),
            affected_stage_ids=[updated.id],
            next_phase_info=next_phase_info,
        )

    async def _assign(self, stage: Stage, member_id: Optional[str], actor_id: str) -> StageActionResult:
        member: Optional[TeamMember] = None
        if member_id:
            member = await self._member_repo.get(member_id)
            if not member:
                raise ValidationError(f"Team member {member_id} not found")

        ensure_assignable(stage.type, phase_status_for(stage.status), member)

        updated = await self._stage_repo.update(
            stage.id,
            StageUpdate(assigned_to=member.id if member else None, updated_by_id=actor_id),
            expected_status=stage.status,
        )
        if updated is None:
            await self._reject_stale(stage, StageAction.ASSIGN)
        logger.info(
            "Stage %s (%s) assigned to %s by %s",
            stage.id, stage.type.value, member.id if member else None, actor_id,
        )

        await self._activity_repo.record(ActivityEventCreate(
            actor_id=actor_id,
            action=ActivityAction.STAGE_ASSIGNED if member else ActivityAction.STAGE_UNASSIGNED,
            entity_id=str(stage.id),
            room_id=stage.room_id,
            details={
                "phase_type": stage.type.value,
                "assignee_id": member.id if member else None,
                "assignee_name": member.name if member else None,
                "previous_assignee_id": stage.assigned_to,
            },
        ))

        if member and member.id != stage.assigned_to:
            room = await self.get_room(stage.room_id)
            await notify_stage_assigned(
                self._notification_repo, updated, member, actor_id, room.display_name
            )

        return StageActionResult(**updated.model_dump(), affected_stage_ids=[updated.id])

    async def _reject_stale(self, stage: Stage, action: StageAction) -> NoReturn:
        """Raise for a write that lost a race with another request on the same stage."""
        latest = await self.get_stage(stage.id)
        logger.info(
            "Stage %s (%s) changed to %s before %s applied",
            stage.id, stage.type.value, latest.status.value, action.value,
        )
        raise InvalidTransitionError(phase_status_for(latest.status), action)

    async def update_due_date(
        self, stage_id: UUID, due_date: Optional[datetime], actor_id: str
    ) -> Stage:
        """Set or clear a stage's due date. Independent of status."""
        stage = await self.get_stage(stage_id)
        due = ensure_utc(due_date)
        updated = await self._stage_repo.update(
            stage.id, StageUpdate(due_date=due, updated_by_id=actor_id)
        )
        await self._activity_repo.record(ActivityEventCreate(
            actor_id=actor_id,
            action=ActivityAction.STAGE_DUE_DATE_CHANGED,
            entity_id=str(stage.id),
            room_id=stage.room_id,
            details={
                "phase_type": stage.type.value,
                "due_date": due.isoformat() if due else None,
            },
        ))
        return updated

    async def notify_next(self, stage_id: UUID, actor_id: str) -> NotifyNextResult:
        """Notify the assignees of the phases after a completed phase."""
        stage = await self.get_stage(stage_id)
        if phase_status_for(stage.status) != PhaseStatus.COMPLETE:
            raise ValidationError(
                f"{get_phase_display_name(stage.type)} is not complete",
                details={"status": stage.status.value},
            )
        room = await self.get_room(stage.room_id)
        room_stages = await self._stage_repo.list_by_room(stage.room_id)
        next_infos = collect_next_phase_info(stage, room_stages)
        result = await notify_next_phase_assignees(
            self._notification_repo, stage, next_infos, actor_id, room.display_name, room.project_id
        )
        logger.info(
            "Next-phase notifications for stage %s: sent=%d skipped=%d failed=%d",
            stage.id, result.sent_count, result.skipped_count, result.failed_count,
        )
        return result
