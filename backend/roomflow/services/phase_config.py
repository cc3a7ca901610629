"""
Static configuration for the room phase workflow.

Defines the five phases in sequence order, their display data and the role
an assignee must hold.
"""

from __future__ import annotations

from dataclasses import dataclass

from roomflow.models.enums import PhaseType, UserRole
from roomflow.models.phase import PhaseConfig

PHASE_SEQUENCE: tuple[PhaseType, ...] = (
    PhaseType.DESIGN_CONCEPT,
    PhaseType.THREE_D,
    PhaseType.CLIENT_APPROVAL,
    PhaseType.DRAWINGS,
    PhaseType.FFE,
)

PHASE_CONFIGS: dict[PhaseType, PhaseConfig] = {
    PhaseType.DESIGN_CONCEPT: PhaseConfig(
        phase_type=PhaseType.DESIGN_CONCEPT,
        label="Design Concept",
        icon="🎨",
        color="purple",
        description="Create mood boards, material selections, and design concepts",
        required_role=UserRole.DESIGNER,
    ),
    PhaseType.THREE_D: PhaseConfig(
        phase_type=PhaseType.THREE_D,
        label="3D Rendering",
        icon="🎥",
        color="orange",
        description="Generate photorealistic 3D visualizations and renderings",
        required_role=UserRole.RENDERER,
    ),
    PhaseType.CLIENT_APPROVAL: PhaseConfig(
        phase_type=PhaseType.CLIENT_APPROVAL,
        label="Client Approval",
        icon="👥",
        color="blue",
        description="Client review and approval process with presentation materials",
    ),
    PhaseType.DRAWINGS: PhaseConfig(
        phase_type=PhaseType.DRAWINGS,
        label="Drawings",
        icon="📐",
        color="indigo",
        description="Create detailed technical drawings and construction specifications",
        required_role=UserRole.DRAFTER,
    ),
    PhaseType.FFE: PhaseConfig(
        phase_type=PhaseType.FFE,
        label="FFE",
        icon="🛋️",
        color="pink",
        description="Furniture, fixtures, and equipment sourcing with detailed specifications",
        required_role=UserRole.FFE,
    ),
}


@dataclass(frozen=True)
class PhaseSequenceInfo:
    """Position of a phase within the workflow sequence."""

    current_phase: PhaseType
    next_phase: PhaseType | None
    previous_phase: PhaseType | None
    is_first_phase: bool
    is_last_phase: bool
    phase_order: int


def get_phase_config(phase_type: PhaseType | str) -> PhaseConfig:
    """Get configuration for a phase type. Raises ValueError for unknown types."""
    return PHASE_CONFIGS[PhaseType(phase_type)]


def get_phase_display_name(phase_type: PhaseType | str) -> str:
    return get_phase_config(phase_type).label


def get_phase_sequence_info(phase_type: PhaseType | str) -> PhaseSequenceInfo:
    """Get sequence information for a phase."""
    phase = PhaseType(phase_type)
    index = PHASE_SEQUENCE.index(phase)
    last = len(PHASE_SEQUENCE) - 1
    return PhaseSequenceInfo(
        current_phase=phase,
        next_phase=PHASE_SEQUENCE[index + 1] if index < last else None,
        previous_phase=PHASE_SEQUENCE[index - 1] if index > 0 else None,
        is_first_phase=index == 0,
        is_last_phase=index == last,
        phase_order=index + 1,
    )


def next_phases_to_notify(completed_phase: PhaseType | str) -> list[PhaseType]:
    """
    Phases whose assignees hear about a completion.

    Client approval unlocks drawings and FFE together; every other phase hands
    off to the next one in sequence.
    """
    phase = PhaseType(completed_phase)
    if phase == PhaseType.CLIENT_APPROVAL:
        return [PhaseType.DRAWINGS, PhaseType.FFE]
    next_phase = get_phase_sequence_info(phase).next_phase
    return [next_phase] if next_phase else []
