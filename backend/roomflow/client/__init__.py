"""Async client for the stage API."""

from roomflow.client.phase_board import PhaseBoardController
from roomflow.client.stage_client import StageClient

__all__ = [
    "PhaseBoardController",
    "StageClient",
]
