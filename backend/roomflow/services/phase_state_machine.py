"""
Phase state machine.

Transition rules for a room phase and the timestamp side effects that go with
each transition. Everything here is pure: the current time is passed in.

    PENDING --start--> IN_PROGRESS --complete--> COMPLETE
    IN_PROGRESS --mark_applicable--> PENDING       (close)
    COMPLETE --reopen--> IN_PROGRESS
    PENDING | IN_PROGRESS | COMPLETE --mark_not_applicable--> NOT_APPLICABLE
    NOT_APPLICABLE --mark_applicable--> PENDING
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from roomflow.core.exceptions import InvalidTransitionError
from roomflow.models.enums import PhaseStatus, StageAction, StageStatus
from roomflow.models.phase import Phase, Stage

TRANSITIONS: dict[tuple[PhaseStatus, StageAction], PhaseStatus] = {
    (PhaseStatus.PENDING, StageAction.START): PhaseStatus.IN_PROGRESS,
    (PhaseStatus.IN_PROGRESS, StageAction.COMPLETE): PhaseStatus.COMPLETE,
    (PhaseStatus.IN_PROGRESS, StageAction.MARK_APPLICABLE): PhaseStatus.PENDING,
    (PhaseStatus.COMPLETE, StageAction.REOPEN): PhaseStatus.IN_PROGRESS,
    (PhaseStatus.PENDING, StageAction.MARK_NOT_APPLICABLE): PhaseStatus.NOT_APPLICABLE,
    (PhaseStatus.IN_PROGRESS, StageAction.MARK_NOT_APPLICABLE): PhaseStatus.NOT_APPLICABLE,
    (PhaseStatus.COMPLETE, StageAction.MARK_NOT_APPLICABLE): PhaseStatus.NOT_APPLICABLE,
    (PhaseStatus.NOT_APPLICABLE, StageAction.MARK_APPLICABLE): PhaseStatus.PENDING,
}

# Order matters: the board renders controls in this order.
_ACTION_ORDER = (
    StageAction.START,
    StageAction.COMPLETE,
    StageAction.REOPEN,
    StageAction.MARK_APPLICABLE,
    StageAction.MARK_NOT_APPLICABLE,
)

_STAGE_TO_PHASE: dict[StageStatus, PhaseStatus] = {
    StageStatus.NOT_STARTED: PhaseStatus.PENDING,
    StageStatus.COMPLETED: PhaseStatus.COMPLETE,
    StageStatus.NOT_APPLICABLE: PhaseStatus.NOT_APPLICABLE,
}

_PHASE_TO_STAGE: dict[PhaseStatus, StageStatus] = {
    PhaseStatus.PENDING: StageStatus.NOT_STARTED,
    PhaseStatus.IN_PROGRESS: StageStatus.IN_PROGRESS,
    PhaseStatus.COMPLETE: StageStatus.COMPLETED,
    PhaseStatus.NOT_APPLICABLE: StageStatus.NOT_APPLICABLE,
}


@dataclass(frozen=True)
class TransitionOutcome:
    """New status and timestamps after a transition."""

    status: PhaseStatus
    started_at: Optional[datetime]
    completed_at: Optional[datetime]


def phase_status_for(stage_status: StageStatus) -> PhaseStatus:
    """Collapse a stored stage status into the four board statuses."""
    return _STAGE_TO_PHASE.get(StageStatus(stage_status), PhaseStatus.IN_PROGRESS)


def stage_status_for(phase_status: PhaseStatus) -> StageStatus:
    return _PHASE_TO_STAGE[PhaseStatus(phase_status)]


def can_transition(status: PhaseStatus, action: StageAction) -> bool:
    return (PhaseStatus(status), StageAction(action)) in TRANSITIONS


def next_state(status: PhaseStatus, action: StageAction) -> PhaseStatus:
    """Return the status reached by applying action, or raise InvalidTransitionError."""
    key = (PhaseStatus(status), StageAction(action))
    if key not in TRANSITIONS:
        raise InvalidTransitionError(status, action)
    return TRANSITIONS[key]


def available_actions(status: PhaseStatus) -> list[StageAction]:
    """Status-changing actions the board offers for a phase in this status."""
    return [action for action in _ACTION_ORDER if can_transition(status, action)]


def action_for_target(current: PhaseStatus, target: PhaseStatus) -> StageAction:
    """Map a requested status change onto the intent sent to the server."""
    for action in _ACTION_ORDER:
        if TRANSITIONS.get((PhaseStatus(current), action)) == PhaseStatus(target):
            return action
    raise InvalidTransitionError(current, f"move to {PhaseStatus(target).value}")


def transition(
    status: PhaseStatus,
    action: StageAction,
    started_at: Optional[datetime],
    completed_at: Optional[datetime],
    now: datetime,
) -> TransitionOutcome:
    """
    Apply an action to a status and its timestamps.

    - start keeps an existing started_at so the first start time survives a
      complete/reopen cycle
    - complete stamps completed_at
    - reopen clears completed_at
    - returning to PENDING (close or reactivate) clears both timestamps
    - mark_not_applicable leaves timestamps untouched
    """
    new_status = next_state(status, action)

    if new_status == PhaseStatus.IN_PROGRESS:
        return TransitionOutcome(new_status, started_at or now, None)
    if new_status == PhaseStatus.COMPLETE:
        return TransitionOutcome(new_status, started_at or now, now)
    if new_status == PhaseStatus.PENDING:
        return TransitionOutcome(new_status, None, None)
    return TransitionOutcome(new_status, started_at, completed_at)


def apply_action(phase: Phase, action: StageAction, now: datetime) -> Phase:
    """Return a copy of phase with the action applied."""
    outcome = transition(phase.status, action, phase.started_at, phase.completed_at, now)
    return phase.model_copy(
        update={
            "status": outcome.status,
            "started_at": outcome.started_at,
            "completed_at": outcome.completed_at,
        }
    )


def stage_to_phase(stage: Stage) -> Phase:
    """Build the board view of a stored stage."""
    return Phase(
        id=stage.type,
        phase_type=stage.type,
        status=phase_status_for(stage.status),
        assigned_user=stage.assigned_user,
        due_date=stage.due_date,
        started_at=stage.started_at,
        completed_at=stage.completed_at,
        stage_id=stage.id,
    )
