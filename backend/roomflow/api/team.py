"""
Team API endpoints.
"""

from fastapi import APIRouter, Query, status

from roomflow.api.deps import CurrentUser, TeamMemberRepo
from roomflow.models.enums import PhaseType
from roomflow.models.team import TeamMember, TeamMemberCreate
from roomflow.services.assignment import filter_assignable, search_members

router = APIRouter()


@router.get("", response_model=list[TeamMember])
async def list_team_members(
    user: CurrentUser,
    repo: TeamMemberRepo,
    q: str = Query("", max_length=200),
) -> list[TeamMember]:
    """List team members, optionally filtered by name/email."""
    return search_members(await repo.list(), q)


@router.post("", response_model=TeamMember, status_code=status.HTTP_201_CREATED)
async def create_team_member(
    member: TeamMemberCreate,
    user: CurrentUser,
    repo: TeamMemberRepo,
) -> TeamMember:
    """Add a team member."""
    return await repo.create(member)


@router.get("/eligible/{phase_type}", response_model=list[TeamMember])
async def list_eligible_members(
    phase_type: PhaseType,
    user: CurrentUser,
    repo: TeamMemberRepo,
    q: str = Query("", max_length=200),
) -> list[TeamMember]:
    """Team members who may be assigned to a phase type."""
    return filter_assignable(phase_type, await repo.list(), q)
