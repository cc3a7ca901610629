"""
Human-readable rendering of recorded stage events.

The feed only reads events; they are written by the stage endpoints.
"""

from typing import Mapping, Optional, Sequence

from roomflow.models.activity import ActivityEvent, ActivityFeedEntry
from roomflow.models.enums import ActivityAction
from roomflow.services.phase_config import get_phase_display_name

_TEMPLATES: dict[ActivityAction, str] = {
    ActivityAction.STAGE_STARTED: "{actor} started {phase}",
    ActivityAction.STAGE_COMPLETED: "{actor} completed {phase}",
    ActivityAction.STAGE_REOPENED: "{actor} reopened {phase}",
    ActivityAction.STAGE_MARKED_NOT_APPLICABLE: "{actor} marked {phase} as not applicable",
    ActivityAction.STAGE_MARKED_APPLICABLE: "{actor} reactivated {phase}",
    ActivityAction.STAGE_CLOSED: "{actor} moved {phase} back to pending",
}


def _phase_name(event: ActivityEvent) -> str:
    phase_type = event.details.get("phase_type")
    if not phase_type:
        return "a phase"
    try:
        return get_phase_display_name(phase_type)
    except ValueError:
        return str(phase_type)


def describe_event(event: ActivityEvent, actor_name: Optional[str] = None) -> str:
    """Render one event, e.g. "Ana completed 3D Rendering"."""
    actor = actor_name or "Someone"
    phase = _phase_name(event)
    details = event.details

    if event.action in _TEMPLATES:
        return _TEMPLATES[event.action].format(actor=actor, phase=phase)
    if event.action == ActivityAction.STAGE_ASSIGNED:
        assignee = details.get("assignee_name") or "a team member"
        return f"{actor} assigned {phase} to {assignee}"
    if event.action == ActivityAction.STAGE_UNASSIGNED:
        return f"{actor} unassigned {phase}"
    if event.action == ActivityAction.STAGE_DUE_DATE_CHANGED:
        due = details.get("due_date")
        if due:
            return f"{actor} set the due date of {phase} to {str(due)[:10]}"
        return f"{actor} cleared the due date of {phase}"
    return f"{actor} updated {phase}"


def build_feed(
    events: Sequence[ActivityEvent],
    actor_names: Mapping[str, str],
) -> list[ActivityFeedEntry]:
    """Render events newest first."""
    ordered = sorted(events, key=lambda e: e.created_at, reverse=True)
    return [
        ActivityFeedEntry(
            id=event.id,
            action=event.action,
            text=describe_event(event, actor_names.get(event.actor_id or "")),
            created_at=event.created_at,
        )
        for event in ordered
    ]
