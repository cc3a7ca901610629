"""
Room progress helpers.
"""

from typing import Iterable, Sequence

from roomflow.models.enums import PhaseStatus, PhaseType
from roomflow.models.phase import Phase
from roomflow.services.phase_config import get_phase_display_name


def room_completion_percentage(phases: Iterable[Phase]) -> int:
    """Completed phases as a share of applicable phases, rounded to a whole percent."""
    applicable = [p for p in phases if p.status != PhaseStatus.NOT_APPLICABLE]
    if not applicable:
        return 0
    completed = sum(1 for p in applicable if p.status == PhaseStatus.COMPLETE)
    # Round half up rather than Python's banker's rounding
    return int(completed * 100 / len(applicable) + 0.5)


def transition_summary(
    completed_phase: PhaseType,
    next_phases: Sequence[PhaseType],
    room_name: str,
    project_name: str,
) -> str:
    """One-line summary of a completed phase and what comes next."""
    summary = f"{get_phase_display_name(completed_phase)} completed for {room_name} in {project_name}."
    if next_phases:
        names = ", ".join(get_phase_display_name(p) for p in next_phases)
        plural = "s" if len(next_phases) > 1 else ""
        summary += f" Next phase{plural}: {names}."
    else:
        summary += " This was the final phase."
    return summary
