"""Redis pub/sub event source for cross-process delivery."""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator, List, Optional

import redis.asyncio as redis

from ..contracts import SubscribeOptions
from .base import BaseEventSource, RawEvent


class RedisEventSource(BaseEventSource):
    """Receives events published on Redis channels.

    Each joined room and event type maps to the channel
    ``<prefix>:<room>:<event_type>``. Events published while the agent was
    offline can be queued on the list ``<channel>:pending`` and are replayed
    on subscribe when ``get_pending_events_on_subscribe`` is set.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        prefix: str = "translator-agent",
        account_id: Optional[str] = None,
    ) -> None:
        super().__init__(account_id)
        self.host = host
        self.port = port
        self.db = db
        self.password = password
        self.prefix = prefix
        self._redis: Optional[Any] = None
        self._pubsub: Optional[Any] = None
        self._backlog: List[RawEvent] = []

    def channels(self, options: SubscribeOptions) -> List[str]:
        return [f"{self.prefix}:{channel}" for channel in super().channels(options)]

    async def connect(self) -> None:
        """Connect to Redis."""
        self._redis = redis.Redis(
            host=self.host,
            port=self.port,
            db=self.db,
            password=self.password,
            decode_responses=True,
        )
        # Test connection
        await self._redis.ping()

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        await super().disconnect()
        if self._pubsub:
            await self._pubsub.aclose()
            self._pubsub = None
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def _on_subscribe(self, channels: List[str], options: SubscribeOptions) -> None:
        if not self._redis:
            await self.connect()

        if options.get_pending_events_on_subscribe:
            for channel in channels:
                while True:
                    pending = await self._redis.rpop(f"{channel}:pending")
                    if pending is None:
                        break
                    self._backlog.append(pending)

        self._pubsub = self._redis.pubsub()
        await self._pubsub.subscribe(*channels)

    async def _listen(self, lifespan: Optional[float] = None) -> AsyncIterator[RawEvent]:
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        while self._backlog:
            yield self._backlog.pop(0)

        while True:
            if lifespan is not None and loop.time() - start_time >= lifespan:
                break

            message = await self._pubsub.get_message(
                ignore_subscribe_messages=True, timeout=1.0
            )
            if message and message.get("type") == "message":
                yield message["data"]
