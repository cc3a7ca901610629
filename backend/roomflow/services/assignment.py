"""
Phase assignment rules.

Eligibility filtering and search are what the assignment picker shows;
ensure_assignable is the server-side check that the picker cannot bypass.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from roomflow.core.exceptions import BusinessLogicError, RoleMismatchError
from roomflow.models.enums import PhaseStatus, PhaseType
from roomflow.models.team import TeamMember
from roomflow.services.phase_config import get_phase_config


def list_eligible_members(
    phase_type: PhaseType, members: Sequence[TeamMember]
) -> list[TeamMember]:
    """Members whose role matches the phase's required role, or all members if none is required."""
    required_role = get_phase_config(phase_type).required_role
    if required_role is None:
        return list(members)
    return [member for member in members if member.role == required_role]


def search_members(members: Iterable[TeamMember], term: str) -> list[TeamMember]:
    """Case-insensitive substring match over name and email. Preserves input order."""
    needle = term.strip().lower()
    if not needle:
        return list(members)
    return [
        member
        for member in members
        if needle in member.name.lower() or needle in member.email.lower()
    ]


def filter_assignable(
    phase_type: PhaseType, members: Sequence[TeamMember], term: str = ""
) -> list[TeamMember]:
    return search_members(list_eligible_members(phase_type, members), term)


def can_submit_assignment(current_assignee_id: Optional[str], selected_id: Optional[str]) -> bool:
    """The assign action is only enabled when the selection differs from the current assignee."""
    return (current_assignee_id or None) != (selected_id or None)


def ensure_assignable(
    phase_type: PhaseType,
    status: PhaseStatus,
    member: Optional[TeamMember],
) -> None:
    """
    Validate an assignment on the server.

    Raises:
        BusinessLogicError: if the phase is marked not applicable
        RoleMismatchError: if the member lacks the phase's required role
    """
    if PhaseStatus(status) == PhaseStatus.NOT_APPLICABLE:
        raise BusinessLogicError("Cannot assign a phase that is marked not applicable")
    if member is None:
        return
    config = get_phase_config(phase_type)
    if config.required_role is not None and member.role != config.required_role:
        raise RoleMismatchError(config.label, config.required_role, member.role)
