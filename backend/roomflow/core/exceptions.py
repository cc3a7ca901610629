"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class RoomflowError(Exception):
    """Base exception for roomflow."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(RoomflowError):
    """Resource not found."""

    pass


class DuplicateError(RoomflowError):
    """Duplicate resource detected."""

    pass


class ValidationError(RoomflowError):
    """Validation error."""

    pass


class AuthenticationError(RoomflowError):
    """Authentication failed."""

    pass


class BusinessLogicError(RoomflowError):
    """Business logic constraint violation."""

    pass


class InvalidTransitionError(BusinessLogicError):
    """A stage action is not allowed from the stage's current status."""

    def __init__(self, current_status: Any, action: Any):
        status_value = getattr(current_status, "value", current_status)
        action_value = getattr(action, "value", action)
        super().__init__(
            f"Cannot {action_value} a phase that is {status_value}",
            details={"status": status_value, "action": action_value},
        )
        self.current_status = current_status
        self.action = action


class RoleMismatchError(BusinessLogicError):
    """Assignee does not hold the role a phase requires."""

    def __init__(self, phase_label: str, required_role: Any, actual_role: Any):
        required = getattr(required_role, "value", required_role)
        actual = getattr(actual_role, "value", actual_role)
        super().__init__(
            f"{phase_label} requires a {required} assignee (got {actual})",
            details={"required_role": required, "actual_role": actual},
        )


class StageRequestError(RoomflowError):
    """A stage API request was rejected or could not be delivered."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.status_code = status_code
