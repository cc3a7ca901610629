"""
Notification API endpoints.
"""

from fastapi import APIRouter, Query

from roomflow.api.deps import CurrentUser, NotificationRepo
from roomflow.models.notification import Notification

router = APIRouter()


@router.get("", response_model=list[Notification])
async def list_notifications(
    user: CurrentUser,
    repo: NotificationRepo,
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
) -> list[Notification]:
    """List the current user's notifications."""
    return await repo.list(user.id, unread_only=unread_only, limit=limit, offset=offset)
