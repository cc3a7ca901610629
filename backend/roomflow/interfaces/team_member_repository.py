"""
Team member repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from roomflow.models.team import TeamMember, TeamMemberCreate


class ITeamMemberRepository(ABC):
    """Interface for team member repository operations."""

    @abstractmethod
    async def create(self, member: TeamMemberCreate) -> TeamMember:
        """Create a team member. Raises DuplicateError if the email is taken."""
        pass

    @abstractmethod
    async def get(self, member_id: str) -> TeamMember | None:
        """Get a team member by ID."""
        pass

    @abstractmethod
    async def get_many(self, member_ids: Iterable[str]) -> dict[str, TeamMember]:
        """Get team members keyed by ID; unknown IDs are omitted."""
        pass

    @abstractmethod
    async def list(self) -> list[TeamMember]:
        """List all team members ordered by name."""
        pass
