"""Text translation backed by a pydantic-ai agent."""

from __future__ import annotations

import logging
from typing import Union

from pydantic_ai import Agent
from pydantic_ai.models import Model

from .constants import DEFAULT_MODEL, DEFAULT_TARGET_LANGUAGE
from .exceptions import BackendError

logger = logging.getLogger(__name__)


class Translator:
    """Translates text with a single LLM round trip per call.

    The model is configuration: pass a pydantic-ai model name such as
    ``"openai:gpt-4o-mini"`` or any ``Model`` instance.
    """

    def __init__(
        self,
        model: Union[str, Model] = DEFAULT_MODEL,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
    ) -> None:
        self.target_language = target_language
        self._agent: Agent[None, str] = Agent(
            model,
            output_type=str,
            system_prompt=f"You are a {target_language} language translator.",
            name="translator",
        )

    def build_prompt(self, text: str) -> str:
        return f"Translate the following text to {self.target_language}:\n\n{text}"

    async def translate(self, text: str) -> str:
        """Return ``text`` translated to the target language.

        Raises:
            BackendError: If the backend call fails or yields no text.
        """
        try:
            result = await self._agent.run(self.build_prompt(text))
        except Exception as e:
            logger.error(f"Error during translation: {e}")
            raise BackendError(str(e)) from e

        translated = result.output.strip() if result.output else ""
        if not translated:
            raise BackendError("Translation failed: received empty response")
        return translated
