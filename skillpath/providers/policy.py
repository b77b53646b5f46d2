"""Retry and sampling policy shared by the completion adapter and every generator."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .base import ProviderId

if TYPE_CHECKING:
    from config import Settings


@dataclass(frozen=True)
class GenerationPolicy:
    """
    Explicit generation configuration.

    Passed to the adapter and generators at construction time so tests can
    override retry counts and delays per call site.
    """

    max_retries: int = 3
    retry_delay: float = 1.0
    temperature: float = 0.3
    max_output_tokens: int = 4096
    grounding_char_budget: int = 5000
    family_order: tuple[ProviderId, ...] = (ProviderId.GROQ, ProviderId.GEMINI)
    preferred_models: dict[ProviderId, str] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> GenerationPolicy:
        return cls(
            max_retries=settings.max_retries,
            retry_delay=settings.retry_delay_seconds,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            grounding_char_budget=settings.grounding_char_budget,
        )

    def replace(self, **overrides) -> GenerationPolicy:
        return dataclasses.replace(self, **overrides)

    def preferred_model(self, provider_id: ProviderId) -> str | None:
        return self.preferred_models.get(provider_id)
