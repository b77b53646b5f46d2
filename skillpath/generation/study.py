"""
Flashcard and quiz generators.

Each runs a single pass through the pipeline. Any provider or structural
failure is logged and replaced with deterministic placeholder content of the
requested size, so callers always receive exactly what they asked for.
"""

from __future__ import annotations

from loguru import logger

from skillpath.models import (
    Flashcard,
    ModuleContent,
    ModuleQuiz,
    ModuleQuizQuestion,
    TopicQuiz,
    TopicQuizQuestion,
)

from .base import RECOVERABLE_ERRORS, BaseGenerator, require_count, require_text
from .fallbacks import fallback_flashcards, fallback_module_quiz, fallback_topic_quiz
from .prompts import flashcard_prompt, module_quiz_prompt, topic_quiz_prompt
from .validators import validate_flashcards, validate_module_quiz, validate_topic_quiz

MODULE_QUIZ_LENGTH = 5


def _grounding_text(module_content: str | ModuleContent | None) -> str:
    if module_content is None:
        return ""
    if isinstance(module_content, ModuleContent):
        parts = []
        for section in module_content.sections:
            parts.append(section.title)
            parts.append(section.content)
        return "\n\n".join(parts)
    return str(module_content)


class StudyGenerator(BaseGenerator):
    """Flashcards, topic quizzes and module quizzes."""

    async def generate_flashcards(self, topic: str, num_cards: int = 5) -> list[Flashcard]:
        """
        Generate ``num_cards`` flashcards of increasing difficulty.

        Always returns exactly ``num_cards`` cards with ids 1..N.
        """
        topic = require_text(topic, "topic")
        num_cards = require_count(num_cards, "num_cards")

        try:
            cards = await self._generate_json(
                flashcard_prompt(topic, num_cards),
                lambda data: validate_flashcards(data, num_cards),
                "Flashcards",
            )
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Flashcard generation for '{topic}' failed, using fallback: {e}")
            return fallback_flashcards(topic, num_cards)

        return [Flashcard.from_dict(card, position) for position, card in enumerate(cards, start=1)]

    async def generate_quiz_data(
        self,
        topic: str,
        num_questions: int = 5,
        module_content: str | ModuleContent | None = None,
    ) -> TopicQuiz:
        """
        Generate a mixed single/multiple-choice quiz.

        Args:
            topic: Quiz topic
            num_questions: Exact number of questions to return
            module_content: Optional grounding material, truncated to the policy budget
        """
        topic = require_text(topic, "topic")
        num_questions = require_count(num_questions, "num_questions")

        grounding = _grounding_text(module_content)[: self.policy.grounding_char_budget]
        prompt = topic_quiz_prompt(topic, num_questions, grounding or None)

        try:
            questions = await self._generate_json(
                prompt,
                lambda data: validate_topic_quiz(data, num_questions),
                "Topic quiz",
            )
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Quiz generation for '{topic}' failed, using fallback: {e}")
            return fallback_topic_quiz(topic, num_questions)

        return TopicQuiz(
            nr_of_questions=str(num_questions),
            questions=[TopicQuizQuestion.from_dict(question) for question in questions],
        )

    async def generate_quiz(self, module_name: str) -> ModuleQuiz:
        """Generate the fixed-size options/correctIndex quiz for a module."""
        module_name = require_text(module_name, "module name")

        try:
            quiz = await self._generate_json(
                module_quiz_prompt(module_name, MODULE_QUIZ_LENGTH),
                lambda data: validate_module_quiz(data, MODULE_QUIZ_LENGTH),
                "Module quiz",
            )
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Module quiz for '{module_name}' failed, using fallback: {e}")
            return fallback_module_quiz(module_name)

        return ModuleQuiz(questions=[ModuleQuizQuestion.from_dict(question) for question in quiz["questions"]])
