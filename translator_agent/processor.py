"""Step processing for the translator agent."""

from __future__ import annotations

import json
import logging
from typing import Optional, Set

from pydantic import ValidationError

from .config import ProcessorConfig
from .constants import STEP_COST
from .contracts import (
    AgentExecutionStatus,
    Step,
    StepEvent,
    TaskLogMessage,
)
from .events import RawEvent
from .exceptions import (
    DecodeError,
    FetchError,
    StaleStepError,
    UpdateRejectedError,
)
from .store import StepStore
from .translation import Translator
from .utils.logging import log_at

logger = logging.getLogger(__name__)


class StepProcessor:
    """Processes one ``step-updated`` event at a time.

    ``handle`` decodes the event, fetches the step, checks it is still
    pending, translates its input and writes the result back. It never
    raises; every outcome is visible only through the logs and the stored
    step.
    """

    def __init__(
        self,
        store: StepStore,
        translator: Translator,
        settings: Optional[ProcessorConfig] = None,
    ) -> None:
        self._store = store
        self._translator = translator
        self.settings = settings or ProcessorConfig()
        self._in_flight: Set[str] = set()

    async def handle(self, raw_event: RawEvent) -> None:
        """Handle a serialized event delivered by the event source."""
        try:
            event = self._decode(raw_event)
            if event.step_id in self._in_flight:
                logger.warning(
                    f"Step {event.step_id} is already being processed. Skipping..."
                )
                return
            self._in_flight.add(event.step_id)
            try:
                await self._process(event)
            finally:
                self._in_flight.discard(event.step_id)
        except StaleStepError as e:
            logger.warning(
                f"Step {e.step_id} is not pending [{e.status}]. Skipping..."
            )
        except UpdateRejectedError as e:
            await self.log_message(
                TaskLogMessage(
                    task_id=e.task_id,
                    level="error",
                    message=f"Error updating step {e.step_id} - {json.dumps(e.data, default=str)}",
                    task_status=AgentExecutionStatus.Failed,
                )
            )
        except Exception as e:
            logger.error(f"Error processing steps: {e}")

    def _decode(self, raw_event: RawEvent) -> StepEvent:
        try:
            event = StepEvent.from_json(raw_event)
        except ValidationError as e:
            raise DecodeError(f"Malformed event payload: {raw_event!r}") from e
        logger.info(f"Received event: {event.model_dump_json()}")
        return event

    async def _fetch(self, step_id: str) -> Step:
        try:
            step = await self._store.get_step(step_id)
        except Exception as e:
            raise FetchError(step_id, e) from e
        logger.info(
            f"Processing Step {step.task_id} - {step.step_id} "
            f"[{step.step_status}]: {step.input_query}"
        )
        return step

    async def _process(self, event: StepEvent) -> None:
        step = await self._fetch(event.step_id)
        if not step.is_pending:
            raise StaleStepError(step.step_id, step.step_status)

        await self.log_message(
            TaskLogMessage(
                task_id=step.task_id,
                level="info",
                message="Starting translation...",
            )
        )

        try:
            translated = await self._translator.translate(step.input_query)
        except Exception as e:
            await self._translation_failed(step, e)
            return

        logger.info(f"Translation: {translated}")
        await self._commit(step, translated)

    async def _translation_failed(self, step: Step, error: Exception) -> None:
        await self.log_message(
            TaskLogMessage(
                task_id=step.task_id,
                level="error",
                message=f"Error during translation: {error}",
                task_status=AgentExecutionStatus.Failed,
            )
        )
        if not self.settings.mark_failed_on_translation_error:
            return

        failed = step.model_copy(
            update={"step_status": AgentExecutionStatus.Failed.value, "is_last": True}
        )
        result = await self._store.update_step(step.store_id, failed)
        if not result.accepted:
            logger.error(
                f"Could not mark step {step.step_id} as failed - {json.dumps(result.data, default=str)}"
            )

    async def _commit(self, step: Step, translated: str) -> None:
        completed = step.model_copy(
            update={
                "step_status": AgentExecutionStatus.Completed.value,
                "is_last": True,
                "output": translated,
                "cost": STEP_COST,
            }
        )
        try:
            result = await self._store.update_step(step.store_id, completed)
        except Exception as e:
            await self.log_message(
                TaskLogMessage(
                    task_id=step.task_id,
                    level="error",
                    message=f"Error updating step {step.step_id} - {e}",
                    task_status=AgentExecutionStatus.Failed,
                )
            )
            return
        if not result.accepted:
            raise UpdateRejectedError(
                step.step_id, step.task_id, result.status_code, result.data
            )

        await self.log_message(
            TaskLogMessage(
                task_id=step.task_id,
                level="info",
                message="Translation completed.",
                task_status=AgentExecutionStatus.Completed,
            )
        )

    async def log_message(self, entry: TaskLogMessage) -> None:
        """Log ``entry`` locally and forward it to the store's task log.

        Delivery failures are reported locally and never interrupt
        step processing.
        """
        log_at(logger, entry.level, entry.message)
        try:
            await self._store.log_task(entry)
        except Exception as e:
            logger.warning(f"Failed to deliver task log for task {entry.task_id}: {e}")
