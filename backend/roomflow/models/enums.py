"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/role values.
"""

from enum import Enum


class PhaseType(str, Enum):
    """Workflow phase of a room, in sequence order."""

    DESIGN_CONCEPT = "DESIGN_CONCEPT"
    THREE_D = "THREE_D"
    CLIENT_APPROVAL = "CLIENT_APPROVAL"
    DRAWINGS = "DRAWINGS"
    FFE = "FFE"


class PhaseStatus(str, Enum):
    """Phase status as shown on the room board."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class StageStatus(str, Enum):
    """
    Status stored on the stage record.

    Only NOT_STARTED, IN_PROGRESS, COMPLETED and NOT_APPLICABLE are written by
    the phase workflow; the remaining values exist on older records.
    """

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ON_HOLD = "ON_HOLD"
    NEEDS_ATTENTION = "NEEDS_ATTENTION"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    REVISION_REQUESTED = "REVISION_REQUESTED"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class StageAction(str, Enum):
    """Intent sent to the stage endpoint."""

    START = "start"
    COMPLETE = "complete"
    REOPEN = "reopen"
    MARK_NOT_APPLICABLE = "mark_not_applicable"
    MARK_APPLICABLE = "mark_applicable"
    ASSIGN = "assign"


class UserRole(str, Enum):
    """Team member role."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    DESIGNER = "DESIGNER"
    RENDERER = "RENDERER"
    DRAFTER = "DRAFTER"
    FFE = "FFE"
    VIEWER = "VIEWER"


class DueState(str, Enum):
    """Derived due-date display state."""

    OVERDUE = "OVERDUE"
    DUE_SOON = "DUE_SOON"
    NORMAL = "NORMAL"


class RequestState(str, Enum):
    """Client-side state of the latest request for one phase."""

    IDLE = "IDLE"
    IN_FLIGHT = "IN_FLIGHT"
    FAILED = "FAILED"
    SUCCEEDED = "SUCCEEDED"


class NotificationType(str, Enum):
    """Types of in-app notifications."""

    STAGE_ASSIGNED = "STAGE_ASSIGNED"
    STAGE_COMPLETED = "STAGE_COMPLETED"
    DUE_DATE_REMINDER = "DUE_DATE_REMINDER"


class ActivityAction(str, Enum):
    """Recorded stage events."""

    STAGE_STARTED = "STAGE_STARTED"
    STAGE_COMPLETED = "STAGE_COMPLETED"
    STAGE_REOPENED = "STAGE_REOPENED"
    STAGE_MARKED_NOT_APPLICABLE = "STAGE_MARKED_NOT_APPLICABLE"
    STAGE_MARKED_APPLICABLE = "STAGE_MARKED_APPLICABLE"
    STAGE_CLOSED = "STAGE_CLOSED"
    STAGE_ASSIGNED = "STAGE_ASSIGNED"
    STAGE_UNASSIGNED = "STAGE_UNASSIGNED"
    STAGE_DUE_DATE_CHANGED = "STAGE_DUE_DATE_CHANGED"
