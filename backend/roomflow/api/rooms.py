"""
Room API endpoints.

Rooms are created with their five stages; the phase board reads them here.
"""

from uuid import UUID

from fastapi import APIRouter, Query, status

from roomflow.api.deps import CurrentUser, RoomRepo, StageService
from roomflow.core.logger import setup_logger
from roomflow.models.activity import ActivityFeedEntry
from roomflow.models.phase import RoomPhase
from roomflow.models.room import Room, RoomCreate, RoomProgress

logger = setup_logger(__name__)

router = APIRouter()


@router.post("", response_model=Room, status_code=status.HTTP_201_CREATED)
async def create_room(
    room: RoomCreate,
    user: CurrentUser,
    repo: RoomRepo,
) -> Room:
    """Create a room and one stage per phase."""
    created = await repo.create(room)
    logger.info("Room %s created in project %s by %s", created.id, created.project_id, user.id)
    return created


@router.get("/project/{project_id}", response_model=list[Room])
async def list_rooms_by_project(
    project_id: str,
    user: CurrentUser,
    repo: RoomRepo,
) -> list[Room]:
    """List all rooms of a project."""
    return await repo.list_by_project(project_id)


@router.get("/{room_id}", response_model=Room)
async def get_room(
    room_id: UUID,
    user: CurrentUser,
    service: StageService,
) -> Room:
    """Get a room by ID."""
    return await service.get_room(room_id)


@router.get("/{room_id}/phases", response_model=list[RoomPhase])
async def list_room_phases(
    room_id: UUID,
    user: CurrentUser,
    service: StageService,
) -> list[RoomPhase]:
    """List a room's phases with due state and available actions."""
    return await service.list_room_phases(room_id)


@router.get("/{room_id}/progress", response_model=RoomProgress)
async def get_room_progress(
    room_id: UUID,
    user: CurrentUser,
    service: StageService,
) -> RoomProgress:
    """Completion percentage over applicable phases."""
    return await service.room_progress(room_id)


@router.get("/{room_id}/activity", response_model=list[ActivityFeedEntry])
async def get_room_activity(
    room_id: UUID,
    user: CurrentUser,
    service: StageService,
    limit: int = Query(50, ge=1, le=200),
) -> list[ActivityFeedEntry]:
    """Recent stage events of a room, newest first."""
    return await service.room_activity(room_id, limit=limit)
