"""Agent runtime wiring the store, translator, processor and event source."""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import AgentConfig
from .contracts import SubscribeOptions
from .events import BaseEventSource, get_event_source
from .exceptions import BootstrapError
from .processor import StepProcessor
from .store import StepStore, get_step_store
from .translation import Translator

logger = logging.getLogger(__name__)


class AgentRuntime:
    """Owns the agent's collaborators and its process lifecycle."""

    def __init__(
        self,
        config: AgentConfig,
        store: StepStore,
        translator: Translator,
        event_source: BaseEventSource,
    ) -> None:
        self.config = config
        self.store = store
        self.translator = translator
        self.event_source = event_source
        self.processor = StepProcessor(store, translator, settings=config.processor)

    @classmethod
    def from_config(cls, config: AgentConfig) -> "AgentRuntime":
        """Build every collaborator from ``config``.

        Raises:
            BootstrapError: If a required credential is missing.
        """
        missing = [
            name
            for name, value in (
                ("NVM_API_KEY", config.store.api_key),
                ("AGENT_DID", config.agent_did),
                ("OPENAI_API_KEY", config.translation.api_key),
            )
            if not value
        ]
        if missing:
            raise BootstrapError(f"Missing required settings: {', '.join(missing)}")

        # pydantic-ai providers read credentials from the environment.
        os.environ.setdefault(
            "OPENAI_API_KEY", config.translation.api_key.get_secret_value()
        )

        try:
            store = get_step_store(config=config)
            event_source = get_event_source(config=config)
            translator = Translator(
                model=config.translation.model,
                target_language=config.translation.target_language,
            )
        except Exception as e:
            raise BootstrapError(f"Failed to initialize agent: {e}") from e
        return cls(config, store, translator, event_source)

    @property
    def subscribe_options(self) -> SubscribeOptions:
        return SubscribeOptions.for_agent(self.config.agent_did or "")

    async def start(self) -> None:
        """Log in to the store and subscribe the processor to step events.

        Raises:
            BootstrapError: If login or subscription fails. The store is
                disconnected before the error propagates.
        """
        logger.info("Starting AI Translator Agent...")
        try:
            await self.store.connect()
            logger.info(f"Connected to step store: {self.config.store.environment}")
            await self.event_source.connect()
            await self.event_source.subscribe(
                self.processor.handle, self.subscribe_options
            )
        except Exception as e:
            logger.error(f"Error in main function: {e}")
            await self.store.disconnect()
            if isinstance(e, BootstrapError):
                raise
            raise BootstrapError(str(e)) from e
        logger.info("Waiting for events!")

    async def run(self, lifespan: Optional[float] = None) -> None:
        """Start the agent and process events until ``lifespan`` expires.

        Args:
            lifespan: Seconds to keep listening. If None, runs indefinitely.
        """
        await self.start()
        try:
            await self.event_source.run(lifespan=lifespan)
        finally:
            await self.event_source.disconnect()
            await self.store.disconnect()
            logger.info("Agent stopped")
