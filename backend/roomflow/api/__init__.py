"""API routers."""

from roomflow.api import notifications, rooms, stages, team

__all__ = [
    "notifications",
    "rooms",
    "stages",
    "team",
]
