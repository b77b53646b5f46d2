"""
Exception hierarchy for skillpath.

Provider and structural errors are recovered inside the generation pipeline.
Only InvalidInputError, ConfigurationError and GenerationExhaustedError are
expected to reach callers.
"""

from __future__ import annotations

from typing import Any


class SkillpathError(Exception):
    """Base exception for all skillpath errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ConfigurationError(SkillpathError):
    """Raised at startup when required provider configuration is missing."""


class InvalidInputError(SkillpathError, ValueError):
    """Raised before any network call when a required parameter is missing or wrong-typed."""


class ProviderError(SkillpathError):
    """A single provider/model call failed (network, rate limit, empty response)."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        model: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.provider = provider
        self.model = model
        super().__init__(message, context=context)


class ProviderExhaustedError(ProviderError):
    """Every model in a provider family's ladder failed."""

    def __init__(self, provider: str, failures: list[tuple[str, str]]):
        self.failures = failures
        last_model, last_reason = failures[-1] if failures else ("-", "no models configured")
        super().__init__(
            f"All {provider} models failed; last error from {last_model}: {last_reason}",
            provider=provider,
            model=last_model,
            context={"failures": failures},
        )


class StructuralError(SkillpathError):
    """Response text could not be sanitized, parsed or validated."""


class GenerationExhaustedError(SkillpathError):
    """All retries and provider families are exhausted and no fallback exists."""
