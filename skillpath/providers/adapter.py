"""
Provider completion adapter.

Two-tier fallback:
1. Model level (here): each family's ladder is tried in order, preferred
   model first, until one returns text.
2. Provider level (in the generators): families are tried in the policy's
   ``family_order`` using ``attempt``, which returns a result value instead
   of raising.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from skillpath.exceptions import InvalidInputError, ProviderExhaustedError

from .base import BaseProvider, CompletionResult, ProviderId
from .policy import GenerationPolicy

if TYPE_CHECKING:
    from config import Settings


class CompletionAdapter:
    """Routes prompts through provider families and their model ladders."""

    def __init__(
        self,
        providers: list[BaseProvider],
        policy: GenerationPolicy | None = None,
    ):
        if not providers:
            raise ValueError("At least one provider is required")
        self.providers: dict[ProviderId, BaseProvider] = {p.provider_id: p for p in providers}
        self.policy = policy or GenerationPolicy()

    @property
    def family_order(self) -> list[ProviderId]:
        """Configured families in policy order, skipping any without a provider."""
        ordered = [pid for pid in self.policy.family_order if pid in self.providers]
        ordered.extend(pid for pid in self.providers if pid not in ordered)
        return ordered

    def ladder(self, provider_id: ProviderId, preferred_model: str | None = None) -> list[str]:
        """Model attempt order for one family with the preferred model moved to the front."""
        models = list(self.providers[provider_id].models)
        preferred = preferred_model or self.policy.preferred_model(provider_id)
        if preferred:
            if preferred in models:
                models.remove(preferred)
            models.insert(0, preferred)
        return models

    async def attempt(
        self,
        prompt: str,
        provider_id: ProviderId,
        preferred_model: str | None = None,
    ) -> CompletionResult:
        """Try every model of one family; never raises for provider failures."""
        provider = self.providers.get(provider_id)
        result = CompletionResult(provider=provider_id)
        if provider is None:
            result.failures.append(("-", "provider not configured"))
            return result

        for model in self.ladder(provider_id, preferred_model):
            try:
                text = await provider.generate(
                    model,
                    prompt,
                    temperature=self.policy.temperature,
                    max_output_tokens=self.policy.max_output_tokens,
                )
            except Exception as e:  # Intentionally broad - any failure moves to the next model
                reason = str(e) or type(e).__name__
                result.failures.append((model, reason))
                logger.warning(f"{provider_id.value}/{model} failed: {reason}")
                continue

            result.text = text
            result.model = model
            logger.debug(f"{provider_id.value}/{model} returned {len(text)} chars")
            return result

        return result

    async def complete(
        self,
        prompt: str,
        preferred_provider: ProviderId | None = None,
        preferred_model: str | None = None,
    ) -> str:
        """
        Return the first successful response from one family's model ladder.

        Args:
            prompt: Prompt text
            preferred_provider: Family to use (defaults to the first in policy order)
            preferred_model: Model to try first within that family

        Raises:
            ProviderExhaustedError: Every model in the family failed
        """
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInputError("Prompt must be a non-empty string")

        provider_id = preferred_provider or self.family_order[0]
        result = await self.attempt(prompt, provider_id, preferred_model)
        if result.ok:
            return result.text
        raise ProviderExhaustedError(provider_id.value, result.failures)

    async def aclose(self) -> None:
        for provider in self.providers.values():
            await provider.aclose()


def build_adapter(settings: Settings | None = None, policy: GenerationPolicy | None = None) -> CompletionAdapter:
    """
    Build the adapter with both provider families from settings.

    Raises:
        ConfigurationError: A provider API key is missing
    """
    from config import get_settings

    from .gemini_client import GeminiProvider
    from .groq_client import GroqProvider

    settings = settings or get_settings()
    settings.require_provider_keys()

    providers: list[BaseProvider] = [
        GroqProvider(
            api_key=settings.groq_api_key,
            models=settings.groq_models,
            base_url=settings.groq_base_url,
            timeout=settings.request_timeout,
        ),
        GeminiProvider(api_key=settings.gemini_api_key, models=settings.gemini_models),
    ]
    return CompletionAdapter(providers, policy or GenerationPolicy.from_settings(settings))
