"""
Gemini client for the secondary model ladder.

Uses google-generativeai; one GenerativeModel is created lazily per model name.
"""

from __future__ import annotations

import google.generativeai as genai
from loguru import logger

from skillpath.exceptions import ProviderError

from .base import BaseProvider, ProviderId


class GeminiProvider(BaseProvider):
    """Google Generative AI (Gemini) provider."""

    provider_id = ProviderId.GEMINI

    def __init__(self, api_key: str, models: list[str]):
        super().__init__(models)
        if not api_key:
            raise ValueError("Gemini API key required")
        genai.configure(api_key=api_key)
        self._models: dict[str, genai.GenerativeModel] = {}

    def _model(self, name: str) -> genai.GenerativeModel:
        if name not in self._models:
            self._models[name] = genai.GenerativeModel(model_name=name)
            logger.debug(f"Gemini model initialized: {name}")
        return self._models[name]

    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        response = await self._model(model).generate_content_async(
            prompt,
            generation_config={
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            },
        )

        try:
            text = response.text
        except ValueError as e:
            # Raised when the candidate was blocked or has no text parts
            raise ProviderError(
                f"Gemini returned no text: {e}",
                provider=self.provider_id.value,
                model=model,
            ) from e

        if not text or not text.strip():
            raise ProviderError("Empty response from Gemini", provider=self.provider_id.value, model=model)
        return text
