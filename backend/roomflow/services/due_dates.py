"""
Due-date classification for phases.

A pure function of (now, due_date, status); callers always pass the clock.
"""

from datetime import datetime, timedelta
from typing import Optional

from roomflow.models.enums import DueState, PhaseStatus
from roomflow.utils.datetime_utils import ensure_utc

DEFAULT_DUE_SOON_DAYS = 3


def classify_due_date(
    now: datetime,
    due_date: Optional[datetime],
    status: PhaseStatus,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> DueState:
    """
    Classify a phase's due date.

    OVERDUE: due date has passed and the phase is not complete.
    DUE_SOON: due within the next due_soon_days days (inclusive).
    NORMAL: anything else, including no due date. Completed work is never overdue.
    """
    if due_date is None:
        return DueState.NORMAL

    now = ensure_utc(now)
    due = ensure_utc(due_date)

    if due < now:
        if PhaseStatus(status) != PhaseStatus.COMPLETE:
            return DueState.OVERDUE
        return DueState.NORMAL

    if due <= now + timedelta(days=due_soon_days):
        return DueState.DUE_SOON
    return DueState.NORMAL
