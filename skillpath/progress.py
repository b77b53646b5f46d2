"""
Learner progress: quiz scoring, module completion and career summaries.

Career path documents store ``modules``, ``completedModules`` and
``aiNudges`` as JSON strings; completed modules are recorded as string
indices ("0", "1", ...).
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from skillpath.exceptions import InvalidInputError
from skillpath.models import TopicQuizQuestion
from skillpath.store import DocumentStore, decode_record, encode_record

HOURS_PER_MODULE = 2
MIN_GROUNDING_LENGTH = 50

DEFAULT_SUGGESTIONS = [
    "Consider diving deeper into backend architecture to complement your frontend skills",
    "Practice system design concepts to prepare for senior developer roles",
    "Build a full-stack project to showcase your skills",
]

_GENERIC_TITLE_RE = re.compile(r"^(module|section|lesson|chapter)\s+\d+$", re.IGNORECASE)
_MODULE_PREFIX_RE = re.compile(r"^Module\s+\d+\s*:\s*", re.IGNORECASE)


# =============================================================================
# Quiz Scoring
# =============================================================================


@dataclass
class QuizScore:
    score: int
    correct: int
    total: int
    accuracy: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "correct": self.correct,
            "totalQuestions": self.total,
            "accuracy": self.accuracy,
        }


def _answer_set(answer: str | Sequence[str] | None) -> list[str]:
    if answer is None:
        return []
    if isinstance(answer, str):
        return [answer]
    return sorted(str(item) for item in answer)


def score_topic_quiz(
    questions: Sequence[TopicQuizQuestion],
    answers: Mapping[int, str | Sequence[str]],
) -> QuizScore:
    """
    Score a topic quiz.

    A question counts as correct only when the selected answers equal the
    correct answers exactly (order-insensitive). Correct questions add their
    ``point`` value.

    Args:
        questions: Quiz questions in display order
        answers: Selected answer(s) keyed by 0-based question index
    """
    score = 0
    correct = 0
    for index, question in enumerate(questions):
        if _answer_set(answers.get(index)) == sorted(question.correct_answers):
            score += question.point or 10
            correct += 1

    total = len(questions)
    accuracy = round(correct / total * 100, 2) if total else 0.0
    return QuizScore(score=score, correct=correct, total=total, accuracy=accuracy)


# =============================================================================
# Quiz Context
# =============================================================================


def quiz_topic_for(topic: str, path_name: str | None = None) -> str:
    """Prefix generic titles like "Module 3" with the path name."""
    topic = topic.strip()
    if _GENERIC_TITLE_RE.match(topic):
        return f"{path_name or 'Learning'}: {topic}"
    return topic


def grounding_for_quiz(
    content: str | None,
    path_name: str | None,
    modules: Sequence[Mapping[str, Any]],
) -> str:
    """Use ``content`` when substantial, else a digest of the path's module titles."""
    if content and len(content.strip()) >= MIN_GROUNDING_LENGTH:
        return content

    lines = [path_name or "Learning Path"]
    for module in modules:
        title = _MODULE_PREFIX_RE.sub("", str(module.get("title") or ""))
        lines.append(f"{title}: {module.get('description') or ''}")
    return "\n\n".join(lines)


# =============================================================================
# Module Completion
# =============================================================================


def _career_paths_collection(collection: str | None) -> str:
    if collection:
        return collection
    from config import get_settings

    return get_settings().career_paths_collection


def next_incomplete_module(record: Mapping[str, Any]) -> int:
    """Index of the first module not yet completed (0 when everything is done)."""
    completed = set(record.get("completedModules") or [])
    for index, _ in enumerate(record.get("modules") or []):
        if str(index) not in completed:
            return index
    return 0


async def mark_module_complete(
    store: DocumentStore,
    path_id: str,
    module_index: int,
    collection: str | None = None,
) -> dict[str, Any]:
    """
    Record a module as completed and recompute path progress.

    Idempotent: completing the same module twice leaves the record unchanged.

    Returns:
        The decoded, updated career path record

    Raises:
        InvalidInputError: module_index is outside the path's module list
    """
    collection = _career_paths_collection(collection)
    record = decode_record(await store.get_document(collection, path_id))
    modules = record.get("modules") or []

    if isinstance(module_index, bool) or not isinstance(module_index, int) or not 0 <= module_index < len(modules):
        raise InvalidInputError(
            f"Module index {module_index} out of range for {len(modules)} modules",
            context={"path_id": path_id, "module_index": module_index},
        )

    completed = [str(item) for item in record.get("completedModules") or []]
    if str(module_index) not in completed:
        completed.append(str(module_index))

    progress = round(len(completed) / len(modules) * 100)
    patch = encode_record({"completedModules": completed, "progress": progress})
    updated = await store.update_document(collection, path_id, patch)

    logger.info(f"Path {path_id}: module {module_index} complete, progress {progress}%")
    return decode_record(updated)


# =============================================================================
# Career Summary
# =============================================================================


@dataclass
class CareerSummary:
    career_name: str
    readiness: int
    completed_modules: int
    total_modules: int
    time_spent_hours: int
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "careerGoal": self.career_name,
            "readiness": self.readiness,
            "completedModules": self.completed_modules,
            "totalModules": self.total_modules,
            "timeSpent": self.time_spent_hours,
            "suggestions": list(self.suggestions),
        }


def summarize_career(path_record: Mapping[str, Any]) -> CareerSummary:
    """Summarize a (raw or decoded) career path record."""
    record = decode_record(dict(path_record))
    completed = record.get("completedModules") or []
    nudges = record.get("aiNudges") or []

    return CareerSummary(
        career_name=record.get("careerName") or "Career Path",
        readiness=int(record.get("progress") or 0),
        completed_modules=len(completed),
        total_modules=len(record.get("modules") or []),
        time_spent_hours=len(completed) * HOURS_PER_MODULE,
        suggestions=list(nudges) or list(DEFAULT_SUGGESTIONS),
    )
