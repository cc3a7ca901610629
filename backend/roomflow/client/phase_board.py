"""
Phase board controller.

Client-side state for one room's phase board. Mutations are sent as intents;
the affected phase is held in flight until the server answers and the room's
phase set has been refetched. The server's response is never merged locally.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import AsyncIterator, Mapping, Optional
from uuid import UUID

from roomflow.client.stage_client import StageClient
from roomflow.core.config import get_settings
from roomflow.core.exceptions import NotFoundError, StageRequestError
from roomflow.core.logger import setup_logger
from roomflow.models.batch import BatchFailure, BatchResult
from roomflow.models.enums import PhaseStatus, PhaseType, RequestState, StageAction
from roomflow.models.phase import NotifyNextResult, RoomPhase, StageActionResult
from roomflow.services.assignment import can_submit_assignment
from roomflow.services.phase_config import PHASE_SEQUENCE
from roomflow.services.phase_state_machine import action_for_target
from roomflow.services.request_tracker import BULK, RequestTracker

logger = setup_logger(__name__)


class PhaseBoardController:
    """Holds a room's phases and sends phase changes to the server."""

    def __init__(
        self,
        client: StageClient,
        room_id: UUID,
        tracker: Optional[RequestTracker] = None,
    ):
        self._client = client
        self._room_id = room_id
        self._tracker = tracker or RequestTracker()
        self._phases: dict[PhaseType, RoomPhase] = {}

    @property
    def room_id(self) -> UUID:
        return self._room_id

    @property
    def tracker(self) -> RequestTracker:
        return self._tracker

    @property
    def phases(self) -> list[RoomPhase]:
        """Loaded phases in sequence order."""
        return [self._phases[t] for t in PHASE_SEQUENCE if t in self._phases]

    def phase(self, phase_type: PhaseType) -> Optional[RoomPhase]:
        return self._phases.get(PhaseType(phase_type))

    def is_busy(self, phase_type: PhaseType) -> bool:
        """Whether the phase's controls should be disabled."""
        return self._tracker.is_busy(PhaseType(phase_type))

    def request_state(self, phase_type: PhaseType) -> RequestState:
        return self._tracker.state(PhaseType(phase_type))

    def error(self, phase_type: PhaseType) -> Optional[str]:
        """Last error message shown for the phase, if its last request failed."""
        return self._tracker.error(PhaseType(phase_type))

    async def refresh(self) -> list[RoomPhase]:
        """Refetch the room's full phase set."""
        phases = await self._client.get_room_phases(self._room_id)
        self._phases = {p.phase_type: p for p in phases}
        return self.phases

    async def _refresh_after_change(self) -> None:
        # The change is already applied on the server; a failed refetch leaves
        # the board stale until the next refresh or poll.
        try:
            await self.refresh()
        except StageRequestError as e:
            logger.warning("Refetch of room %s after a change failed: %s", self._room_id, e.message)

    async def _require(self, phase_type: PhaseType) -> RoomPhase:
        phase_type = PhaseType(phase_type)
        if phase_type not in self._phases:
            await self.refresh()
        phase = self._phases.get(phase_type)
        if phase is None or phase.stage_id is None:
            raise NotFoundError(f"Phase {phase_type.value} not found in room {self._room_id}")
        return phase

    # ------------------------------------------
    # Status changes
    # ------------------------------------------

    async def perform(self, phase_type: PhaseType, action: StageAction) -> StageActionResult:
        """
        Send a status action for one phase.

        Raises:
            RequestInFlightError: the phase (or a bulk operation) is busy
            StageRequestError: the server rejected the action
        """
        phase = await self._require(phase_type)
        async with self._tracker.track(phase.phase_type):
            result = await self._client.perform_action(phase.stage_id, action)
            await self._refresh_after_change()
        return result

    async def change_status(self, phase_type: PhaseType, target: PhaseStatus) -> StageActionResult:
        """Request a move of the phase to target status."""
        phase = await self._require(phase_type)
        action = action_for_target(phase.status, target)
        return await self.perform(phase.phase_type, action)

    # ------------------------------------------
    # Assignment and due dates
    # ------------------------------------------

    async def assign(self, phase_type: PhaseType, member_id: Optional[str]) -> Optional[StageActionResult]:
        """Assign (or unassign with None). Returns None when nothing would change."""
        phase = await self._require(phase_type)
        current = phase.assigned_user.id if phase.assigned_user else None
        if not can_submit_assignment(current, member_id):
            return None
        async with self._tracker.track(phase.phase_type):
            result = await self._client.assign(phase.stage_id, member_id)
            await self._refresh_after_change()
        return result

    async def bulk_assign(self, assignments: Mapping[PhaseType, Optional[str]]) -> BatchResult[PhaseType]:
        """
        Assign several phases concurrently.

        Each assignment succeeds or fails on its own; nothing is rolled back.
        Failed phases keep their error message in the tracker.
        """
        targets = [(await self._require(t), member_id) for t, member_id in assignments.items()]
        result: BatchResult[PhaseType] = BatchResult()

        async with self._tracker.track(BULK):
            outcomes = await asyncio.gather(
                *(self._client.assign(phase.stage_id, member_id) for phase, member_id in targets),
                return_exceptions=True,
            )
            for (phase, _), outcome in zip(targets, outcomes):
                if isinstance(outcome, StageRequestError):
                    result.failed.append(
                        BatchFailure(id=phase.phase_type, error=outcome.message, status_code=outcome.status_code)
                    )
                elif isinstance(outcome, BaseException):
                    raise outcome
                else:
                    result.succeeded.append(phase.phase_type)
            await self._refresh_after_change()

        for failure in result.failed:
            self._tracker.fail(failure.id, failure.error)
        for phase_type in result.succeeded:
            self._tracker.succeed(phase_type)
        if not result.ok:
            self._tracker.fail(BULK, result.summary)
            logger.warning("Bulk assignment in room %s: %s", self._room_id, result.summary)
        return result

    async def set_due_date(self, phase_type: PhaseType, due_date: Optional[datetime]) -> None:
        phase = await self._require(phase_type)
        async with self._tracker.track(phase.phase_type):
            await self._client.update_due_date(phase.stage_id, due_date)
            await self._refresh_after_change()

    async def notify_next(self, phase_type: PhaseType) -> NotifyNextResult:
        """Notify the assignees of the phases after a completed phase."""
        phase = await self._require(phase_type)
        return await self._client.notify_next(phase.stage_id)

    # ------------------------------------------
    # Polling
    # ------------------------------------------

    async def poll(self, interval: Optional[float] = None) -> AsyncIterator[list[RoomPhase]]:
        """
        Yield a fresh phase set every interval seconds.

        Failed polls are logged and skipped; the loop keeps going until the
        consumer stops iterating.
        """
        interval = interval if interval is not None else get_settings().POLL_INTERVAL_SECONDS
        while True:
            try:
                yield await self.refresh()
            except StageRequestError as e:
                logger.warning("Polling room %s failed: %s", self._room_id, e.message)
            await asyncio.sleep(interval)
