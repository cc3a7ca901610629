"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the infrastructure
implementations. Tests override these through app.dependency_overrides.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from roomflow.core.config import get_settings
from roomflow.core.exceptions import AuthenticationError
from roomflow.interfaces.activity_repository import IActivityRepository
from roomflow.interfaces.auth_provider import IAuthProvider, User
from roomflow.interfaces.notification_repository import INotificationRepository
from roomflow.interfaces.room_repository import IRoomRepository
from roomflow.interfaces.stage_repository import IStageRepository
from roomflow.interfaces.team_member_repository import ITeamMemberRepository
from roomflow.services.stage_service import StageWorkflowService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_stage_repository() -> IStageRepository:
    """Get stage repository instance."""
    from roomflow.infrastructure.local.stage_repository import SqliteStageRepository
    return SqliteStageRepository()


@lru_cache()
def get_room_repository() -> IRoomRepository:
    """Get room repository instance."""
    from roomflow.infrastructure.local.room_repository import SqliteRoomRepository
    return SqliteRoomRepository()


@lru_cache()
def get_team_member_repository() -> ITeamMemberRepository:
    """Get team member repository instance."""
    from roomflow.infrastructure.local.team_member_repository import SqliteTeamMemberRepository
    return SqliteTeamMemberRepository()


@lru_cache()
def get_activity_repository() -> IActivityRepository:
    """Get activity log repository instance."""
    from roomflow.infrastructure.local.activity_repository import SqliteActivityRepository
    return SqliteActivityRepository()


@lru_cache()
def get_notification_repository() -> INotificationRepository:
    """Get notification repository instance."""
    from roomflow.infrastructure.local.notification_repository import SqliteNotificationRepository
    return SqliteNotificationRepository()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    from roomflow.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=get_settings().AUTH_ENABLED)


# ===========================================
# Repository Type Aliases
# ===========================================

StageRepo = Annotated[IStageRepository, Depends(get_stage_repository)]
RoomRepo = Annotated[IRoomRepository, Depends(get_room_repository)]
TeamMemberRepo = Annotated[ITeamMemberRepository, Depends(get_team_member_repository)]
ActivityRepo = Annotated[IActivityRepository, Depends(get_activity_repository)]
NotificationRepo = Annotated[INotificationRepository, Depends(get_notification_repository)]


# ===========================================
# Services
# ===========================================


def get_stage_service(
    stage_repo: StageRepo,
    room_repo: RoomRepo,
    member_repo: TeamMemberRepo,
    activity_repo: ActivityRepo,
    notification_repo: NotificationRepo,
) -> StageWorkflowService:
    """Build the stage workflow service for a request."""
    return StageWorkflowService(
        stage_repo=stage_repo,
        room_repo=room_repo,
        member_repo=member_repo,
        activity_repo=activity_repo,
        notification_repo=notification_repo,
        due_soon_days=get_settings().DUE_SOON_DAYS,
    )


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    With auth disabled, every request acts as the configured default actor.
    """
    if not auth_provider.is_enabled():
        actor_id = get_settings().DEFAULT_ACTOR_ID
        return User(id=actor_id, email=f"{actor_id}@example.com", display_name=actor_id)

    if not authorization:
        raise AuthenticationError("Authorization header required")

    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise AuthenticationError("Invalid authorization header format")

    return await auth_provider.verify_token(token)


StageService = Annotated[StageWorkflowService, Depends(get_stage_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
