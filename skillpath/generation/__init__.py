"""LLM content generation: sanitizer, validators, fallbacks and generators.

Pipeline:
1. Prompt built from templates (topic classified first for module content)
2. Provider families tried in order, each walking its model ladder
3. Response sanitized, parsed and validated
4. Post-processed into record types, or replaced by deterministic fallback

Usage:
    from skillpath.generation import StudyGenerator

    generator = StudyGenerator(adapter)
    cards = await generator.generate_flashcards("React Hooks", 5)
"""
from skillpath.generation.api import (
    generate_career_paths,
    generate_chat_response,
    generate_flashcards,
    generate_learning_path,
    generate_module_content,
    generate_quiz,
    generate_quiz_data,
)
from skillpath.generation.chat import ChatContext, ChatGenerator
from skillpath.generation.module_content import ModuleContentGenerator
from skillpath.generation.paths import PathGenerator, normalize_career_path
from skillpath.generation.study import StudyGenerator

__all__ = [
    "ChatContext",
    "ChatGenerator",
    "ModuleContentGenerator",
    "PathGenerator",
    "StudyGenerator",
    "generate_career_paths",
    "generate_chat_response",
    "generate_flashcards",
    "generate_learning_path",
    "generate_module_content",
    "generate_quiz",
    "generate_quiz_data",
    "normalize_career_path",
]
