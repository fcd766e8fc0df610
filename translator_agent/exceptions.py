"""Error taxonomy for the translator agent."""

from __future__ import annotations

from typing import Any, Optional


class TranslatorAgentError(Exception):
    """Base class for all translator agent errors."""


class DecodeError(TranslatorAgentError):
    """Raised when an incoming event payload cannot be decoded."""


class FetchError(TranslatorAgentError):
    """Raised when a step cannot be retrieved from the store."""

    def __init__(self, step_id: str, detail: Any) -> None:
        super().__init__(f"Failed to fetch step {step_id}: {detail}")
        self.step_id = step_id
        self.detail = detail


class StaleStepError(TranslatorAgentError):
    """Raised when a step is no longer pending and must not be reprocessed."""

    def __init__(self, step_id: str, status: str) -> None:
        super().__init__(f"Step {step_id} is not pending ({status})")
        self.step_id = step_id
        self.status = status


class BackendError(TranslatorAgentError):
    """Raised when the translation backend fails or returns nothing."""


class UpdateRejectedError(TranslatorAgentError):
    """Raised when the store declines a completion write."""

    def __init__(
        self,
        step_id: str,
        task_id: str,
        status_code: int,
        data: Optional[Any] = None,
    ) -> None:
        super().__init__(
            f"Store rejected update of step {step_id} with status {status_code}"
        )
        self.step_id = step_id
        self.task_id = task_id
        self.status_code = status_code
        self.data = data


class BootstrapError(TranslatorAgentError):
    """Raised when the agent cannot start (credentials, login, subscribe)."""
