"""
Unit tests for per-phase request state tracking.
"""

import pytest

from roomflow.core.exceptions import StageRequestError
from roomflow.models.enums import PhaseType, RequestState
from roomflow.services.request_tracker import BULK, RequestInFlightError, RequestTracker


def test_initial_state_is_idle():
    tracker = RequestTracker()
    assert tracker.state(PhaseType.FFE) == RequestState.IDLE
    assert not tracker.is_busy(PhaseType.FFE)
    assert tracker.error(PhaseType.FFE) is None


def test_single_flight_per_key():
    tracker = RequestTracker()
    assert tracker.begin(PhaseType.THREE_D)
    assert not tracker.begin(PhaseType.THREE_D)
    assert tracker.is_busy(PhaseType.THREE_D)


def test_different_keys_may_be_in_flight_together():
    tracker = RequestTracker()
    assert tracker.begin(PhaseType.THREE_D)
    assert tracker.begin(PhaseType.DRAWINGS)
    assert tracker.in_flight() == {PhaseType.THREE_D, PhaseType.DRAWINGS}


def test_bulk_blocks_every_key():
    tracker = RequestTracker()
    assert tracker.begin(BULK)
    for phase_type in PhaseType:
        assert tracker.is_busy(phase_type)
        assert not tracker.begin(phase_type)


def test_bulk_refused_while_a_phase_is_in_flight():
    tracker = RequestTracker()
    tracker.begin(PhaseType.FFE)
    assert not tracker.begin(BULK)
    tracker.succeed(PhaseType.FFE)
    assert tracker.begin(BULK)


def test_fail_records_error_and_begin_clears_it():
    tracker = RequestTracker()
    tracker.begin(PhaseType.FFE)
    tracker.fail(PhaseType.FFE, "boom")
    assert tracker.state(PhaseType.FFE) == RequestState.FAILED
    assert tracker.error(PhaseType.FFE) == "boom"

    assert tracker.begin(PhaseType.FFE)
    assert tracker.error(PhaseType.FFE) is None


def test_reset():
    tracker = RequestTracker()
    tracker.begin(PhaseType.FFE)
    tracker.fail(PhaseType.FFE, "boom")
    tracker.reset(PhaseType.FFE)
    assert tracker.state(PhaseType.FFE) == RequestState.IDLE
    assert tracker.error(PhaseType.FFE) is None


@pytest.mark.asyncio
async def test_track_marks_success():
    tracker = RequestTracker()
    async with tracker.track(PhaseType.DRAWINGS):
        assert tracker.state(PhaseType.DRAWINGS) == RequestState.IN_FLIGHT
    assert tracker.state(PhaseType.DRAWINGS) == RequestState.SUCCEEDED


@pytest.mark.asyncio
async def test_track_marks_failure_with_message():
    tracker = RequestTracker()
    with pytest.raises(StageRequestError):
        async with tracker.track(PhaseType.DRAWINGS):
            raise StageRequestError("Cannot start a phase that is COMPLETE", status_code=400)
    assert tracker.state(PhaseType.DRAWINGS) == RequestState.FAILED
    assert tracker.error(PhaseType.DRAWINGS) == "Cannot start a phase that is COMPLETE"


@pytest.mark.asyncio
async def test_track_refuses_busy_key():
    tracker = RequestTracker()
    tracker.begin(PhaseType.DRAWINGS)
    with pytest.raises(RequestInFlightError):
        async with tracker.track(PhaseType.DRAWINGS):
            pass
    assert tracker.state(PhaseType.DRAWINGS) == RequestState.IN_FLIGHT
