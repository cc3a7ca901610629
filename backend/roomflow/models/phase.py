"""
Phase and stage model definitions.

A Stage is the persisted record; a Phase is the board-facing view of it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from roomflow.models.base import CamelModel
from roomflow.models.enums import (
    DueState,
    PhaseStatus,
    PhaseType,
    StageAction,
    StageStatus,
    UserRole,
)
from roomflow.models.team import TeamMember


class PhaseConfig(CamelModel):
    """Static display and assignment configuration for a phase type."""

    phase_type: PhaseType
    label: str
    icon: str
    color: str
    description: str = ""
    required_role: Optional[UserRole] = None


class Stage(CamelModel):
    """Persisted stage record."""

    id: UUID
    room_id: UUID
    type: PhaseType
    status: StageStatus = StageStatus.NOT_STARTED
    assigned_to: Optional[str] = None
    assigned_user: Optional[TeamMember] = None
    due_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completed_by_id: Optional[str] = None
    updated_by_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class Phase(CamelModel):
    """Board-facing phase of a room."""

    id: PhaseType
    phase_type: PhaseType
    status: PhaseStatus = PhaseStatus.PENDING
    assigned_user: Optional[TeamMember] = None
    due_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    stage_id: Optional[UUID] = None


class RoomPhase(Phase):
    """Phase with values derived at read time."""

    label: str
    due_state: DueState = DueState.NORMAL
    available_actions: list[StageAction] = Field(default_factory=list)


class StageActionRequest(CamelModel):
    """Body of PATCH /api/stages/{stage_id}."""

    action: StageAction
    assigned_to: Optional[str] = None


class DueDateUpdate(CamelModel):
    """Body of PATCH /api/stages/{stage_id}/due-date."""

    due_date: Optional[datetime] = None


class NextPhaseInfo(CamelModel):
    """A following phase whose assignee may be notified on completion."""

    stage_id: UUID
    stage_type: PhaseType
    assignee: TeamMember


class StageActionResult(Stage):
    """Updated stage plus the stages the client should refetch."""

    affected_stage_ids: list[UUID] = Field(default_factory=list)
    next_phase_info: list[NextPhaseInfo] = Field(default_factory=list)


class NotifyNextResult(CamelModel):
    """Outcome of notifying next-phase assignees."""

    sent_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0


class StageUpdate(CamelModel):
    """
    Internal field update for a stage.

    Only fields that were explicitly set are written, so None clears a value.
    """

    status: Optional[StageStatus] = None
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    completed_by_id: Optional[str] = None
    updated_by_id: Optional[str] = None
