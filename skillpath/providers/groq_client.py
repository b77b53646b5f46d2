"""
Groq chat-completions client for the fast model ladder.

Talks to the OpenAI-compatible endpoint directly over httpx.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from skillpath.exceptions import ProviderError

from .base import BaseProvider, ProviderId


class GroqProvider(BaseProvider):
    """HTTP client for the Groq OpenAI-compatible API."""

    provider_id = ProviderId.GROQ

    def __init__(
        self,
        api_key: str,
        models: list[str],
        base_url: str = "https://api.groq.com/openai/v1/chat/completions",
        timeout: float = 60.0,
    ):
        super().__init__(models)
        if not api_key:
            raise ValueError("Groq API key required")
        self.base_url = base_url
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self.client = httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_output_tokens,
        }

        response = await self.client.post(self.base_url, headers=self._headers, json=payload)
        if response.status_code == 429:
            logger.warning(f"Groq rate limit hit for {model}")
        response.raise_for_status()

        try:
            data = response.json()
            text = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(
                f"Unexpected Groq response: {response.text[:200]}",
                provider=self.provider_id.value,
                model=model,
            ) from e

        if not text or not text.strip():
            raise ProviderError("Empty response from Groq", provider=self.provider_id.value, model=model)
        return text

    async def aclose(self) -> None:
        await self.client.aclose()
