"""
Module-level generator functions.

Each call builds an adapter from settings, runs one generator method and
closes the adapter's HTTP clients. Long-lived callers should construct the
generator classes once and reuse them instead.

Usage:
    from skillpath.generation import generate_flashcards

    cards = await generate_flashcards("React Hooks", 5)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from skillpath.models import (
    CareerPath,
    Flashcard,
    ModuleContent,
    ModuleQuiz,
    PathModule,
    TopicQuiz,
    UserProfile,
)
from skillpath.providers.adapter import CompletionAdapter, build_adapter

from .chat import ChatContext, ChatGenerator
from .module_content import ModuleContentGenerator
from .paths import PathGenerator
from .study import StudyGenerator


@asynccontextmanager
async def default_adapter() -> AsyncIterator[CompletionAdapter]:
    adapter = build_adapter()
    try:
        yield adapter
    finally:
        await adapter.aclose()


async def generate_module_content(module_name: str, detailed: bool = False) -> ModuleContent:
    async with default_adapter() as adapter:
        return await ModuleContentGenerator(adapter).generate(module_name, detailed=detailed)


async def generate_flashcards(topic: str, num_cards: int = 5) -> list[Flashcard]:
    async with default_adapter() as adapter:
        return await StudyGenerator(adapter).generate_flashcards(topic, num_cards)


async def generate_quiz_data(
    topic: str,
    num_questions: int = 5,
    module_content: str | ModuleContent | None = None,
) -> TopicQuiz:
    async with default_adapter() as adapter:
        return await StudyGenerator(adapter).generate_quiz_data(topic, num_questions, module_content)


async def generate_quiz(module_name: str) -> ModuleQuiz:
    async with default_adapter() as adapter:
        return await StudyGenerator(adapter).generate_quiz(module_name)


async def generate_learning_path(
    goal: str,
    type: str = "topic",
    detailed: bool = False,
) -> list[str] | list[PathModule]:
    async with default_adapter() as adapter:
        return await PathGenerator(adapter).generate_learning_path(goal, type=type, detailed=detailed)


async def generate_career_paths(profile: UserProfile) -> list[CareerPath]:
    async with default_adapter() as adapter:
        return await PathGenerator(adapter).generate_career_paths(profile)


async def generate_chat_response(message: str, context: ChatContext | None = None) -> str:
    async with default_adapter() as adapter:
        return await ChatGenerator(adapter).generate_chat_response(message, context)
