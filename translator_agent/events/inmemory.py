"""In-memory event source for tests and local runs."""

from __future__ import annotations

import asyncio
from collections import defaultdict, deque
from typing import AsyncIterator, Deque, Dict, List, Optional

from ..contracts import SubscribeOptions
from .base import BaseEventSource, RawEvent


class InMemoryEventSource(BaseEventSource):
    """Simple in-process channels."""

    poll_interval = 0.01

    def __init__(self, account_id: Optional[str] = None) -> None:
        super().__init__(account_id)
        self._queues: Dict[str, Deque[RawEvent]] = defaultdict(deque)
        self._channels: List[str] = []
        self._lock = asyncio.Lock()

    async def publish(self, room: str, event_type: str, data: RawEvent) -> None:
        """Publish a serialized event to ``room``."""
        async with self._lock:
            self._queues[f"{room}:{event_type}"].append(data)

    async def _on_subscribe(self, channels: List[str], options: SubscribeOptions) -> None:
        async with self._lock:
            if not options.get_pending_events_on_subscribe:
                for channel in channels:
                    self._queues[channel].clear()
            self._channels = channels

    async def _listen(self, lifespan: Optional[float] = None) -> AsyncIterator[RawEvent]:
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        while True:
            if lifespan is not None and loop.time() - start_time >= lifespan:
                break

            raw_event = None
            async with self._lock:
                for channel in self._channels:
                    if self._queues[channel]:
                        raw_event = self._queues[channel].popleft()
                        break
            if raw_event is not None:
                yield raw_event
                continue

            await asyncio.sleep(self.poll_interval)
