"""
Module content generator.

The only structured generator without a static fallback: after every retry
cycle (each cycle walks all provider families) it raises
GenerationExhaustedError and the caller decides what to show.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from skillpath.models import CONTENT_TYPES, ModuleContent, Section

from .base import BaseGenerator, require_text
from .classifier import TopicClassification, classify_topic
from .prompts import module_content_prompt
from .sanitizer import clean_code_example, sanitize_content
from .validators import validate_module_content


class ModuleContentGenerator(BaseGenerator):
    """Generates sectioned lesson content for a single module."""

    async def generate(self, module_name: str, detailed: bool = False) -> ModuleContent:
        """
        Generate content for a module.

        Args:
            module_name: Module title or topic
            detailed: Request four advanced sections instead of three basic ones

        Returns:
            Validated ModuleContent with sanitized section text

        Raises:
            InvalidInputError: module_name is empty or not a string
            GenerationExhaustedError: Every retry cycle failed
        """
        module_name = require_text(module_name, "module name")
        classification = classify_topic(module_name)
        prompt = module_content_prompt(module_name, classification, detailed)

        logger.info(
            f"Generating {'detailed ' if detailed else ''}{classification.content_type} "
            f"content for '{module_name}'"
        )
        data = await self._with_retries(
            lambda: self._generate_json(prompt, validate_module_content, "Module content"),
            label=f"Module content for '{module_name}'",
        )
        return self._postprocess(data, classification)

    def _postprocess(self, data: dict[str, Any], classification: TopicClassification) -> ModuleContent:
        content_type = data.get("type")
        if content_type not in CONTENT_TYPES:
            content_type = classification.content_type

        sections = []
        for raw in data["sections"]:
            key_points = raw.get("keyPoints") or []
            if not isinstance(key_points, list):
                key_points = [key_points]
            sections.append(
                Section(
                    title=sanitize_content(raw.get("title")),
                    content=sanitize_content(raw.get("content")),
                    key_points=[sanitize_content(point) for point in key_points if point],
                    code_example=clean_code_example(raw.get("codeExample")),
                )
            )

        return ModuleContent(
            title=sanitize_content(data.get("title")),
            type=content_type,
            sections=sections,
        )
