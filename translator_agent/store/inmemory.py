"""In-memory implementation of the step store."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..contracts import Step, TaskLogMessage, UpdateResult
from .base import StepStore


class InMemoryStepStore(StepStore):
    """Keep steps in local memory.

    Useful for tests and local runs. Every update and task log entry is
    recorded so callers can inspect what reached the store.
    """

    def __init__(self, steps: List[Step] | None = None) -> None:
        self._steps: Dict[str, Step] = {}
        self.updates: List[Tuple[str, Step]] = []
        self.logs: List[TaskLogMessage] = []
        self.reject_updates_with: int | None = None
        self.connected = False
        for step in steps or []:
            self.add_step(step)

    def add_step(self, step: Step) -> None:
        self._steps[step.step_id] = step

    # ------------------------------------------------------------------
    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def get_step(self, step_id: str) -> Step:
        try:
            return self._steps[step_id].model_copy(deep=True)
        except KeyError:
            raise LookupError(f"Step {step_id} not found") from None

    async def update_step(self, step_did: str, step: Step) -> UpdateResult:
        self.updates.append((step_did, step))
        if self.reject_updates_with is not None:
            return UpdateResult(
                status_code=self.reject_updates_with,
                data={"message": "Update rejected"},
            )
        target = next(
            (s for s in self._steps.values() if s.store_id == step_did), None
        )
        if target is None:
            return UpdateResult(status_code=404, data={"message": "Step not found"})
        self._steps[target.step_id] = step.model_copy(deep=True)
        return UpdateResult(status_code=201, data=step.to_payload())

    async def log_task(self, entry: TaskLogMessage) -> None:
        self.logs.append(entry)
