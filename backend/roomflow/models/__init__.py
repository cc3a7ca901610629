"""Pydantic models (schemas) for the application."""

from roomflow.models.enums import (
    ActivityAction,
    DueState,
    NotificationType,
    PhaseStatus,
    PhaseType,
    RequestState,
    StageAction,
    StageStatus,
    UserRole,
)
from roomflow.models.activity import ActivityEvent, ActivityEventCreate, ActivityFeedEntry
from roomflow.models.batch import BatchFailure, BatchResult
from roomflow.models.notification import Notification, NotificationCreate
from roomflow.models.phase import (
    DueDateUpdate,
    NextPhaseInfo,
    NotifyNextResult,
    Phase,
    PhaseConfig,
    RoomPhase,
    Stage,
    StageActionRequest,
    StageActionResult,
    StageUpdate,
)
from roomflow.models.room import Room, RoomCreate, RoomProgress
from roomflow.models.team import TeamMember, TeamMemberCreate

__all__ = [
    # Enums
    "ActivityAction",
    "DueState",
    "NotificationType",
    "PhaseStatus",
    "PhaseType",
    "RequestState",
    "StageAction",
    "StageStatus",
    "UserRole",
    # Models
    "ActivityEvent",
    "ActivityEventCreate",
    "ActivityFeedEntry",
    "BatchFailure",
    "BatchResult",
    "DueDateUpdate",
    "NextPhaseInfo",
    "Notification",
    "NotificationCreate",
    "NotifyNextResult",
    "Phase",
    "PhaseConfig",
    "Room",
    "RoomCreate",
    "RoomPhase",
    "RoomProgress",
    "Stage",
    "StageActionRequest",
    "StageActionResult",
    "StageUpdate",
    "TeamMember",
    "TeamMemberCreate",
]
