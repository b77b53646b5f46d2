"""Conversational assistant responses."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from skillpath.exceptions import GenerationExhaustedError

from .base import RECOVERABLE_ERRORS, BaseGenerator, require_text
from .prompts import CHAT_PROMPT


@dataclass
class ChatContext:
    """Optional conversation context; blank fields resolve to defaults."""

    topic: str | None = None
    level: str | None = None
    focus: str | None = None

    def resolved(self) -> ChatContext:
        return ChatContext(
            topic=(self.topic or "").strip() or "General",
            level=(self.level or "").strip() or "Intermediate",
            focus=(self.focus or "").strip() or "General understanding",
        )


class ChatGenerator(BaseGenerator):
    async def generate_chat_response(self, message: str, context: ChatContext | None = None) -> str:
        """
        Single-shot answer with no retry and no fallback.

        Raises:
            GenerationExhaustedError: The provider call failed
        """
        message = require_text(message, "message")
        context = (context or ChatContext()).resolved()
        prompt = CHAT_PROMPT.format(
            topic=context.topic,
            level=context.level,
            focus=context.focus,
            message=message,
        )

        try:
            return await self.adapter.complete(prompt)
        except RECOVERABLE_ERRORS as e:
            logger.error(f"Chat generation failed: {e}")
            raise GenerationExhaustedError(f"Failed to generate response: {e}") from e
