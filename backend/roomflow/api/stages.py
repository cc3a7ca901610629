"""
Stage API endpoints.

PATCH endpoints accept intents; the service decides whether they are legal.
Rejections come back as {"error": "..."} via the application error handler.
"""

from uuid import UUID

from fastapi import APIRouter

from roomflow.api.deps import CurrentUser, StageService
from roomflow.models.phase import (
    DueDateUpdate,
    NotifyNextResult,
    Stage,
    StageActionRequest,
    StageActionResult,
)

router = APIRouter()


@router.get("/{stage_id}", response_model=Stage)
async def get_stage(
    stage_id: UUID,
    user: CurrentUser,
    service: StageService,
) -> Stage:
    """Get a stage by ID."""
    return await service.get_stage(stage_id)


@router.patch("/{stage_id}", response_model=StageActionResult)
async def update_stage(
    stage_id: UUID,
    request: StageActionRequest,
    user: CurrentUser,
    service: StageService,
) -> StageActionResult:
    """Apply an action (start, complete, reopen, mark_(not_)applicable, assign)."""
    return await service.perform_action(stage_id, request, actor_id=user.id)


@router.patch("/{stage_id}/due-date", response_model=Stage)
async def update_stage_due_date(
    stage_id: UUID,
    body: DueDateUpdate,
    user: CurrentUser,
    service: StageService,
) -> Stage:
    """Set or clear a stage's due date."""
    return await service.update_due_date(stage_id, body.due_date, actor_id=user.id)


@router.post("/{stage_id}/notify-next", response_model=NotifyNextResult)
async def notify_next_phase(
    stage_id: UUID,
    user: CurrentUser,
    service: StageService,
) -> NotifyNextResult:
    """Notify the assignees of the phases that follow a completed stage."""
    return await service.notify_next(stage_id, actor_id=user.id)
