"""
Team member model definitions.
"""

from typing import Optional

from pydantic import Field

from roomflow.models.base import CamelModel
from roomflow.models.enums import UserRole


class TeamMemberBase(CamelModel):
    """Base team member fields."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    role: UserRole = UserRole.DESIGNER
    image: Optional[str] = Field(None, max_length=1000)


class TeamMemberCreate(TeamMemberBase):
    """Schema for creating a team member."""

    id: Optional[str] = Field(None, min_length=1, max_length=255)


class TeamMember(TeamMemberBase):
    """Complete team member model."""

    id: str
