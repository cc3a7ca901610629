"""
Per-phase request state tracking.

Each phase has at most one request in flight. A bulk operation holds the
BULK token, which blocks every phase until it finishes. There is no queue:
a second request for a busy key is refused, not deferred.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable, Optional

from roomflow.core.exceptions import BusinessLogicError
from roomflow.models.enums import RequestState

BULK = "bulk"


class RequestInFlightError(BusinessLogicError):
    """A request for this key (or a bulk request) is already running."""

    def __init__(self, key: Hashable):
        super().__init__(f"A request for {key} is already in progress", details={"key": str(key)})
        self.key = key


class RequestTracker:
    """Tracks the latest request state per entity key."""

    def __init__(self) -> None:
        self._states: dict[Hashable, RequestState] = {}
        self._errors: dict[Hashable, str] = {}

    def state(self, key: Hashable) -> RequestState:
        return self._states.get(key, RequestState.IDLE)

    def error(self, key: Hashable) -> Optional[str]:
        return self._errors.get(key)

    def is_busy(self, key: Hashable) -> bool:
        """True if this key's control should be disabled."""
        return (
            self.state(key) == RequestState.IN_FLIGHT
            or self.state(BULK) == RequestState.IN_FLIGHT
        )

    def in_flight(self) -> set[Hashable]:
        return {key for key, state in self._states.items() if state == RequestState.IN_FLIGHT}

    def begin(self, key: Hashable) -> bool:
        """Mark key in flight. Returns False (and changes nothing) if it is busy."""
        if self.is_busy(key):
            return False
        if key == BULK and self.in_flight():
            return False
        self._states[key] = RequestState.IN_FLIGHT
        self._errors.pop(key, None)
        return True

    def succeed(self, key: Hashable) -> None:
        self._states[key] = RequestState.SUCCEEDED

    def fail(self, key: Hashable, error: str) -> None:
        self._states[key] = RequestState.FAILED
        self._errors[key] = error

    def reset(self, key: Hashable) -> None:
        self._states.pop(key, None)
        self._errors.pop(key, None)

    @asynccontextmanager
    async def track(self, key: Hashable) -> AsyncIterator[None]:
        """
        Hold key in flight for the duration of the block.

        Raises:
            RequestInFlightError: if key is already busy
        """
        if not self.begin(key):
            raise RequestInFlightError(key)
        try:
            yield
        except BaseException as e:
            self.fail(key, getattr(e, "message", None) or str(e) or type(e).__name__)
            raise
        else:
            self.succeed(key)
