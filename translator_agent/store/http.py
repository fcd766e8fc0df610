"""HTTP step store talking to the step service REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..contracts import Step, TaskLogMessage, UpdateResult
from ..exceptions import BootstrapError
from .base import StepStore

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class HttpStepStore(StepStore):
    """Step store backed by the remote step service."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                timeout=self._timeout,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    # ------------------------------------------------------------------
    async def connect(self) -> None:
        """Verify the API key by requesting the caller's account."""
        if not self._api_key:
            raise BootstrapError("No API key configured for the step store")
        try:
            response = await self._get_client().get(
                f"{API_PREFIX}/auth/me", headers=self._headers()
            )
        except httpx.HTTPError as e:
            raise BootstrapError(f"Step store unreachable: {e}") from e
        if response.status_code != 200:
            raise BootstrapError(
                f"Failed to login to step store ({response.status_code})"
            )
        logger.info(f"Connected to step store at {self.base_url}")

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_step(self, step_id: str) -> Step:
        response = await self._get_client().get(
            f"{API_PREFIX}/agents/steps/{step_id}", headers=self._headers()
        )
        response.raise_for_status()
        return Step.model_validate(response.json())

    async def update_step(self, step_did: str, step: Step) -> UpdateResult:
        response = await self._get_client().put(
            f"{API_PREFIX}/agents/steps/{step_did}",
            json=step.to_payload(),
            headers=self._headers(),
        )
        return UpdateResult(status_code=response.status_code, data=_body(response))

    async def log_task(self, entry: TaskLogMessage) -> None:
        response = await self._get_client().post(
            f"{API_PREFIX}/agents/tasks/{entry.task_id}/log",
            json=entry.to_payload(),
            headers=self._headers(),
        )
        response.raise_for_status()


def _body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
