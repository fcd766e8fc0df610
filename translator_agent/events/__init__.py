"""Event source factory and initialization."""

from __future__ import annotations

from typing import Optional

from ..config import AgentConfig, load_config
from .base import BaseEventSource, EventHandler, RawEvent
from .inmemory import InMemoryEventSource


def get_event_source(
    backend: Optional[str] = None, config: Optional[AgentConfig] = None
) -> BaseEventSource:
    """Factory function to get the configured event source."""

    config = config or load_config()
    backend = (backend or config.events.backend).lower()

    if backend == "inmemory":
        return InMemoryEventSource()
    elif backend == "redis":
        from .redis import RedisEventSource

        redis_conf = config.events.redis
        return RedisEventSource(
            host=redis_conf.host,
            port=redis_conf.port,
            db=redis_conf.db,
            password=redis_conf.password,
            prefix=redis_conf.prefix,
        )
    else:
        raise ValueError(f"Unsupported event source backend: {backend}")


__all__ = [
    "BaseEventSource",
    "EventHandler",
    "InMemoryEventSource",
    "RawEvent",
    "get_event_source",
]
