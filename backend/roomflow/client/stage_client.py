"""
HTTP client for the stage API.

Every call is a single request: there are no retries. A non-2xx response is
raised as StageRequestError carrying the server's {"error"} message; transport
failures are logged and raised as a generic StageRequestError.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

import httpx

from roomflow.core.config import get_settings
from roomflow.core.exceptions import StageRequestError
from roomflow.core.logger import setup_logger
from roomflow.models.enums import PhaseType, StageAction
from roomflow.models.phase import NotifyNextResult, RoomPhase, Stage, StageActionResult
from roomflow.models.room import RoomProgress
from roomflow.models.team import TeamMember

logger = setup_logger(__name__)

NETWORK_ERROR_MESSAGE = "Could not reach the server. Please try again."


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"


class StageClient:
    """Async client for the room/stage endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        token: Optional[str] = None,
    ):
        """
        Initialize client.

        Args:
            base_url: API origin, defaults to STAGES_API_BASE_URL
            timeout: Request timeout in seconds, defaults to HTTP_TIMEOUT_SECONDS
            transport: Optional httpx transport (for testing)
            token: Optional bearer token
        """
        settings = get_settings()
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.STAGES_API_BASE_URL,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
            headers=headers,
        )

    async def __aenter__(self) -> StageClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self, method: str, path: str, json: Any = None, params: Optional[dict[str, str]] = None
    ) -> Any:
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise StageRequestError(NETWORK_ERROR_MESSAGE) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s rejected (%d): %s", method, path, response.status_code, message)
            raise StageRequestError(message, status_code=response.status_code)
        return response.json()

    # ------------------------------------------
    # Reads
    # ------------------------------------------

    async def get_room_phases(self, room_id: UUID) -> list[RoomPhase]:
        data = await self._request("GET", f"/api/rooms/{room_id}/phases")
        return [RoomPhase.model_validate(item) for item in data]

    async def get_room_progress(self, room_id: UUID) -> RoomProgress:
        data = await self._request("GET", f"/api/rooms/{room_id}/progress")
        return RoomProgress.model_validate(data)

    async def get_stage(self, stage_id: UUID) -> Stage:
        data = await self._request("GET", f"/api/stages/{stage_id}")
        return Stage.model_validate(data)

    async def list_eligible_members(self, phase_type: PhaseType, term: str = "") -> list[TeamMember]:
        data = await self._request(
            "GET",
            f"/api/team/eligible/{PhaseType(phase_type).value}",
            params={"q": term} if term else None,
        )
        return [TeamMember.model_validate(item) for item in data]

    # ------------------------------------------
    # Mutations
    # ------------------------------------------

    async def perform_action(
        self,
        stage_id: UUID,
        action: StageAction,
        assigned_to: Optional[str] = None,
    ) -> StageActionResult:
        """Send an intent to PATCH /api/stages/{stage_id}."""
        body: dict[str, Any] = {"action": StageAction(action).value}
        if StageAction(action) == StageAction.ASSIGN:
            body["assignedTo"] = assigned_to
        data = await self._request("PATCH", f"/api/stages/{stage_id}", json=body)
        return StageActionResult.model_validate(data)

    async def start(self, stage_id: UUID) -> StageActionResult:
        return await self.perform_action(stage_id, StageAction.START)

    async def complete(self, stage_id: UUID) -> StageActionResult:
        return await self.perform_action(stage_id, StageAction.COMPLETE)

    async def reopen(self, stage_id: UUID) -> StageActionResult:
        return await self.perform_action(stage_id, StageAction.REOPEN)

    async def mark_not_applicable(self, stage_id: UUID) -> StageActionResult:
        return await self.perform_action(stage_id, StageAction.MARK_NOT_APPLICABLE)

    async def mark_applicable(self, stage_id: UUID) -> StageActionResult:
        """Reactivate a not-applicable phase, or close an in-progress one."""
        return await self.perform_action(stage_id, StageAction.MARK_APPLICABLE)

    async def assign(self, stage_id: UUID, member_id: Optional[str]) -> StageActionResult:
        """Assign a member, or unassign with None."""
        return await self.perform_action(stage_id, StageAction.ASSIGN, assigned_to=member_id)

    async def update_due_date(self, stage_id: UUID, due_date: Optional[datetime]) -> Stage:
        body = {"dueDate": due_date.isoformat() if due_date else None}
        data = await self._request("PATCH", f"/api/stages/{stage_id}/due-date", json=body)
        return Stage.model_validate(data)

    async def notify_next(self, stage_id: UUID) -> NotifyNextResult:
        data = await self._request("POST", f"/api/stages/{stage_id}/notify-next")
        return NotifyNextResult.model_validate(data)
