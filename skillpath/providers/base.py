"""
Provider abstractions.

A provider family is one upstream text-generation service exposing an
ordered ladder of candidate models.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum


class ProviderId(str, Enum):
    """Supported provider families."""

    GROQ = "groq"  # fast/cheap family
    GEMINI = "gemini"


@dataclass
class CompletionResult:
    """Outcome of trying one provider family: text on success, failures otherwise."""

    provider: ProviderId
    text: str | None = None
    model: str | None = None
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.text is not None

    @property
    def last_error(self) -> str | None:
        if not self.failures:
            return None
        model, reason = self.failures[-1]
        return f"{self.provider.value}/{model}: {reason}"


class BaseProvider(ABC):
    """One provider family with its model ladder."""

    provider_id: ProviderId

    def __init__(self, models: list[str]):
        if not models:
            raise ValueError(f"{self.provider_id.value} provider needs at least one model")
        self.models = list(models)

    @abstractmethod
    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Return the raw text response, raising on any failure."""

    async def aclose(self) -> None:
        """Release transport resources."""
