"""
Batch result model.

Bulk operations report each item instead of failing the whole batch.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

K = TypeVar("K")


class BatchFailure(BaseModel, Generic[K]):
    """One failed item of a batch."""

    id: K
    error: str
    status_code: int | None = None


class BatchResult(BaseModel, Generic[K]):
    """Per-item outcome of a bulk operation."""

    succeeded: list[K] = Field(default_factory=list)
    failed: list[BatchFailure[K]] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def summary(self) -> str:
        total = len(self.succeeded) + len(self.failed)
        if self.ok:
            return f"Saved {total} assignment{'s' if total != 1 else ''}"
        return f"{len(self.failed)} of {total} assignments failed"
