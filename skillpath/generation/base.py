"""
Shared generator machinery.

Every generator runs the same pipeline:

    BUILD_PROMPT -> CALL_PROVIDER -> SANITIZE -> PARSE -> VALIDATE -> POSTPROCESS -> RETURN

CALL_PROVIDER walks the provider families in policy order using the
adapter's result-valued ``attempt``. PARSE and VALIDATE failures surface as
StructuralError so callers either retry the whole cycle or go to their
deterministic fallback.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from loguru import logger

from skillpath.exceptions import (
    GenerationExhaustedError,
    InvalidInputError,
    ProviderError,
    ProviderExhaustedError,
    StructuralError,
)
from skillpath.providers.adapter import CompletionAdapter
from skillpath.providers.base import ProviderId
from skillpath.providers.policy import GenerationPolicy

from .sanitizer import parse_json

T = TypeVar("T")

# Errors recovered by retrying or by a fallback; anything else is a bug
RECOVERABLE_ERRORS = (ProviderError, StructuralError)


def require_text(value: Any, name: str) -> str:
    """Reject missing, non-string or blank parameters before any network call."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Invalid {name} provided", context={name: value})
    return value.strip()


def require_count(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(f"{name} must be a positive integer", context={name: value})
    return value


class BaseGenerator:
    """Base class holding the adapter and policy shared by all generators."""

    def __init__(self, adapter: CompletionAdapter, policy: GenerationPolicy | None = None):
        self.adapter = adapter
        self.policy = policy or adapter.policy

    # =========================================================================
    # CALL_PROVIDER
    # =========================================================================

    async def _call_provider(
        self,
        prompt: str,
        preferred_models: dict[ProviderId, str] | None = None,
    ) -> str:
        """
        Try each provider family in policy order and return the first text.

        Raises:
            ProviderExhaustedError: Every model of every family failed
        """
        preferred_models = preferred_models or {}
        failures: list[tuple[str, str]] = []

        for provider_id in self.adapter.family_order:
            result = await self.adapter.attempt(
                prompt,
                provider_id,
                preferred_models.get(provider_id),
            )
            if result.ok:
                return result.text

            failures.extend((f"{provider_id.value}/{model}", reason) for model, reason in result.failures)
            logger.warning(f"Provider family {provider_id.value} exhausted, trying next family")

        families = "+".join(pid.value for pid in self.adapter.family_order)
        raise ProviderExhaustedError(families, failures)

    # =========================================================================
    # SANITIZE / PARSE / VALIDATE
    # =========================================================================

    async def _generate_json(
        self,
        prompt: str,
        validator: Callable[[Any], bool],
        label: str,
        preferred_models: dict[ProviderId, str] | None = None,
    ) -> Any:
        """One pass through CALL_PROVIDER, SANITIZE, PARSE and VALIDATE."""
        text = await self._call_provider(prompt, preferred_models)
        data = parse_json(text)
        if not validator(data):
            raise StructuralError(
                f"{label} response failed validation",
                context={"preview": text[:200]},
            )
        return data

    # =========================================================================
    # Retry loop
    # =========================================================================

    async def _with_retries(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str,
        attempts: int | None = None,
    ) -> T:
        """
        Run ``operation`` up to ``attempts`` times with a fixed delay between tries.

        Raises:
            GenerationExhaustedError: Every attempt failed; chained to the last cause
        """
        attempts = attempts or self.policy.max_retries
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            logger.debug(f"{label}: attempt {attempt}/{attempts}")
            try:
                return await operation()
            except RECOVERABLE_ERRORS as e:
                last_error = e
                logger.warning(f"{label}: attempt {attempt}/{attempts} failed: {e}")
                if attempt < attempts:
                    await asyncio.sleep(self.policy.retry_delay)

        logger.error(f"{label}: all {attempts} attempts failed")
        raise GenerationExhaustedError(
            f"{label} failed after {attempts} attempts: {last_error}",
            context={"attempts": attempts},
        ) from last_error
