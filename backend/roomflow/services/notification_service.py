"""
Notification helper functions for the phase workflow.

Each function creates notifications for one kind of stage event and handles
recipient filtering (the acting user is never notified of their own action).
"""

from __future__ import annotations

from typing import Sequence

from roomflow.core.logger import setup_logger
from roomflow.interfaces.notification_repository import INotificationRepository
from roomflow.models.enums import NotificationType
from roomflow.models.notification import NotificationCreate
from roomflow.models.phase import NextPhaseInfo, NotifyNextResult, Stage
from roomflow.models.team import TeamMember
from roomflow.services.phase_config import get_phase_display_name, next_phases_to_notify
from roomflow.services.room_progress import transition_summary

logger = setup_logger(__name__)


def collect_next_phase_info(completed: Stage, room_stages: Sequence[Stage]) -> list[NextPhaseInfo]:
    """Next-phase stages of the room that have an assignee to notify."""
    by_type = {stage.type: stage for stage in room_stages}
    infos: list[NextPhaseInfo] = []
    for phase_type in next_phases_to_notify(completed.type):
        stage = by_type.get(phase_type)
        if stage and stage.assigned_user:
            infos.append(
                NextPhaseInfo(
                    stage_id=stage.id,
                    stage_type=phase_type,
                    assignee=stage.assigned_user,
                )
            )
    return infos


async def notify_stage_assigned(
    notification_repo: INotificationRepository,
    stage: Stage,
    assignee: TeamMember,
    actor_user_id: str,
    room_name: str,
) -> None:
    """Tell a team member they were assigned a phase."""
    if assignee.id == actor_user_id:
        return

    phase_name = get_phase_display_name(stage.type)
    await notification_repo.create(NotificationCreate(
        user_id=assignee.id,
        type=NotificationType.STAGE_ASSIGNED,
        title=f"You were assigned {phase_name}",
        message=f"{phase_name} for {room_name} is now assigned to you",
        related_id=str(stage.id),
        related_type="stage",
    ))


async def notify_next_phase_assignees(
    notification_repo: INotificationRepository,
    completed: Stage,
    next_phases: Sequence[NextPhaseInfo],
    actor_user_id: str,
    room_name: str,
    project_name: str,
) -> NotifyNextResult:
    """
    Notify assignees of the phases that follow a completed phase.

    Assignees who were already notified about this completion are skipped, so
    the prompt can be answered twice without duplicate notifications.
    """
    result = NotifyNextResult()
    summary = transition_summary(
        completed.type, next_phases_to_notify(completed.type), room_name, project_name
    )
    related_id = str(completed.id)

    for info in next_phases:
        assignee = info.assignee
        if assignee.id == actor_user_id or await notification_repo.exists(
            assignee.id, NotificationType.STAGE_COMPLETED, related_id
        ):
            result.skipped_count += 1
            continue

        next_name = get_phase_display_name(info.stage_type)
        try:
            await notification_repo.create(NotificationCreate(
                user_id=assignee.id,
                type=NotificationType.STAGE_COMPLETED,
                title=f"{next_name} is ready to start",
                message=summary,
                related_id=related_id,
                related_type="stage",
            ))
        except Exception:
            logger.exception("Failed to notify %s about stage %s", assignee.id, related_id)
            result.failed_count += 1
        else:
            result.sent_count += 1

    return result
