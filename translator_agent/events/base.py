"""Base event source interface."""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, List, Optional, Set, Union

from ..contracts import SubscribeOptions

logger = logging.getLogger(__name__)

RawEvent = Union[bytes, str]
EventHandler = Callable[[RawEvent], Awaitable[None]]


class BaseEventSource(metaclass=abc.ABCMeta):
    """Delivers serialized events to a single registered handler.

    Each delivery is scheduled as its own task and is not awaited by the
    delivery loop, so handlers for different events may overlap.
    """

    def __init__(self, account_id: Optional[str] = None) -> None:
        self.account_id = account_id
        self._handler: Optional[EventHandler] = None
        self._tasks: Set[asyncio.Task] = set()

    async def connect(self) -> None:
        """Open connection to the broker (no-op by default)."""
        pass

    async def disconnect(self) -> None:
        """Wait for in-flight handlers, then close the connection."""
        await self.drain()

    def channels(self, options: SubscribeOptions) -> List[str]:
        """Channel names for every joined room and subscribed event type."""
        rooms = list(options.join_agent_rooms)
        if options.join_account_room:
            if self.account_id:
                rooms.append(f"account-{self.account_id}")
            else:
                logger.warning("No account id configured; not joining account room")
        return [
            f"{room}:{event_type}"
            for room in rooms
            for event_type in options.subscribe_event_types
        ]

    async def subscribe(self, handler: EventHandler, options: SubscribeOptions) -> None:
        """Register ``handler`` for the rooms and event types in ``options``."""
        if self._handler is not None:
            raise RuntimeError("A handler is already subscribed")
        self._handler = handler
        await self._on_subscribe(self.channels(options), options)

    @abc.abstractmethod
    async def _on_subscribe(self, channels: List[str], options: SubscribeOptions) -> None:
        """Join ``channels`` on the underlying broker."""
        raise NotImplementedError

    @abc.abstractmethod
    def _listen(self, lifespan: Optional[float] = None) -> AsyncIterator[RawEvent]:
        """Yield raw events until ``lifespan`` seconds have passed (or forever)."""
        raise NotImplementedError

    async def run(self, lifespan: Optional[float] = None) -> None:
        """Pump events to the handler.

        Args:
            lifespan: Maximum time in seconds to keep listening. If None, runs indefinitely.
        """
        if self._handler is None:
            raise RuntimeError("subscribe() must be called before run()")
        async for raw_event in self._listen(lifespan):
            self._dispatch(raw_event)

    def _dispatch(self, raw_event: RawEvent) -> None:
        task = asyncio.create_task(self._handler(raw_event))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait until every dispatched handler has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
