"""
Unit tests for activity feed rendering.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from roomflow.models.activity import ActivityEvent
from roomflow.models.enums import ActivityAction
from roomflow.services.activity_feed import build_feed, describe_event

T0 = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


def _event(action: ActivityAction, actor_id="ana", minutes=0, **details) -> ActivityEvent:
    return ActivityEvent(
        id=uuid4(),
        actor_id=actor_id,
        action=action,
        entity_id=str(uuid4()),
        details={"phase_type": "THREE_D", **details},
        created_at=T0 + timedelta(minutes=minutes),
    )


def test_status_events():
    assert describe_event(_event(ActivityAction.STAGE_COMPLETED), "Ana") == "Ana completed 3D Rendering"
    assert describe_event(_event(ActivityAction.STAGE_STARTED), "Ana") == "Ana started 3D Rendering"
    assert (
        describe_event(_event(ActivityAction.STAGE_MARKED_NOT_APPLICABLE), "Ana")
        == "Ana marked 3D Rendering as not applicable"
    )
    assert describe_event(_event(ActivityAction.STAGE_MARKED_APPLICABLE), "Ana") == "Ana reactivated 3D Rendering"
    assert (
        describe_event(_event(ActivityAction.STAGE_CLOSED), "Ana")
        == "Ana moved 3D Rendering back to pending"
    )


def test_unknown_actor():
    assert describe_event(_event(ActivityAction.STAGE_REOPENED)) == "Someone reopened 3D Rendering"


def test_assignment_events():
    assigned = _event(ActivityAction.STAGE_ASSIGNED, assignee_name="Rory Chen")
    assert describe_event(assigned, "Ana") == "Ana assigned 3D Rendering to Rory Chen"
    assert describe_event(_event(ActivityAction.STAGE_UNASSIGNED), "Ana") == "Ana unassigned 3D Rendering"


def test_due_date_events():
    set_event = _event(ActivityAction.STAGE_DUE_DATE_CHANGED, due_date="2026-03-20T00:00:00+00:00")
    assert describe_event(set_event, "Ana") == "Ana set the due date of 3D Rendering to 2026-03-20"
    cleared = _event(ActivityAction.STAGE_DUE_DATE_CHANGED, due_date=None)
    assert describe_event(cleared, "Ana") == "Ana cleared the due date of 3D Rendering"


def test_build_feed_newest_first_with_actor_names():
    older = _event(ActivityAction.STAGE_STARTED, minutes=0)
    newer = _event(ActivityAction.STAGE_COMPLETED, actor_id="rory", minutes=5)

    feed = build_feed([older, newer], {"ana": "Ana", "rory": "Rory"})

    assert [entry.id for entry in feed] == [newer.id, older.id]
    assert feed[0].text == "Rory completed 3D Rendering"
    assert feed[1].text == "Ana started 3D Rendering"
