"""Step store abstraction."""

from __future__ import annotations

from typing import Protocol

from ..contracts import Step, TaskLogMessage, UpdateResult


class StepStore(Protocol):
    """Protocol for the source of truth of step state."""

    async def connect(self) -> None:
        """Authenticate against the store."""

    async def get_step(self, step_id: str) -> Step:
        """Retrieve a step by id."""

    async def update_step(self, step_did: str, step: Step) -> UpdateResult:
        """Write the full step record back."""

    async def log_task(self, entry: TaskLogMessage) -> None:
        """Append an entry to the task log."""

    async def disconnect(self) -> None:
        """Release any open connection."""
