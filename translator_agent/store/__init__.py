"""Step store backends."""

from __future__ import annotations

from typing import Optional

from ..config import AgentConfig, load_config
from .base import StepStore
from .http import HttpStepStore
from .inmemory import InMemoryStepStore


def get_step_store(
    backend: Optional[str] = None, config: Optional[AgentConfig] = None
) -> StepStore:
    """Factory function to get the configured step store."""

    config = config or load_config()
    store_conf = config.store
    backend = (backend or store_conf.backend).lower()

    if backend == "inmemory":
        return InMemoryStepStore()
    elif backend == "http":
        api_key = store_conf.api_key.get_secret_value() if store_conf.api_key else ""
        return HttpStepStore(
            base_url=store_conf.base_url,
            api_key=api_key,
            timeout=store_conf.timeout,
        )
    else:
        raise ValueError(f"Unsupported step store backend: {backend}")


__all__ = ["StepStore", "InMemoryStepStore", "HttpStepStore", "get_step_store"]
