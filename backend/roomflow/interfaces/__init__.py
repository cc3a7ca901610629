"""Abstract interfaces for infrastructure abstraction."""

from roomflow.interfaces.activity_repository import IActivityRepository
from roomflow.interfaces.auth_provider import IAuthProvider, User
from roomflow.interfaces.notification_repository import INotificationRepository
from roomflow.interfaces.room_repository import IRoomRepository
from roomflow.interfaces.stage_repository import IStageRepository
from roomflow.interfaces.team_member_repository import ITeamMemberRepository

__all__ = [
    "IActivityRepository",
    "IAuthProvider",
    "INotificationRepository",
    "IRoomRepository",
    "IStageRepository",
    "ITeamMemberRepository",
    "User",
]
