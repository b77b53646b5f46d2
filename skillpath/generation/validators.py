"""
Structural validators for parsed model output.

Each validator is a pure predicate over the parsed JSON value. They never
raise; a False result sends the generator back to CALL_PROVIDER or to its
deterministic fallback.
"""

from __future__ import annotations

from typing import Any

MIN_SECTION_CONTENT_LENGTH = 50
ANSWER_OPTION_COUNT = 4
LEARNING_PATH_LENGTH = 5
CAREER_PATH_COUNT = 4


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_dict_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)


def validate_module_content(content: Any) -> bool:
    """Title, at least one section, every section titled with content longer than 50 chars."""
    if not isinstance(content, dict):
        return False
    if not _non_empty_str(content.get("title")):
        return False

    sections = content.get("sections")
    if not isinstance(sections, list) or not sections:
        return False

    for section in sections:
        if not isinstance(section, dict):
            return False
        if not _non_empty_str(section.get("title")):
            return False
        body = section.get("content")
        if not isinstance(body, str) or len(body) <= MIN_SECTION_CONTENT_LENGTH:
            return False
    return True


def validate_flashcards(cards: Any, count: int) -> bool:
    if not _is_dict_list(cards) or len(cards) != count:
        return False
    return all(
        _non_empty_str(card.get("frontHTML")) and _non_empty_str(card.get("backHTML"))
        for card in cards
    )


def _valid_correct_answer(value: Any) -> bool:
    if isinstance(value, list):
        return bool(value) and all(_non_empty_str(item) for item in value)
    return _non_empty_str(value)


def validate_topic_quiz(questions: Any, count: int) -> bool:
    """Exact count; each question has text, exactly four answers and a correct answer."""
    if not _is_dict_list(questions) or len(questions) != count:
        return False
    for question in questions:
        if not _non_empty_str(question.get("question")):
            return False
        answers = question.get("answers")
        if not isinstance(answers, list) or len(answers) != ANSWER_OPTION_COUNT:
            return False
        if not _valid_correct_answer(question.get("correctAnswer")):
            return False
    return True


def validate_module_quiz(quiz: Any, count: int = 5) -> bool:
    """``{"questions": [...]}`` with exact count, four options and an in-range correctIndex."""
    if not isinstance(quiz, dict):
        return False
    questions = quiz.get("questions")
    if not _is_dict_list(questions) or len(questions) != count:
        return False
    for question in questions:
        if not _non_empty_str(question.get("question")):
            return False
        options = question.get("options")
        if not isinstance(options, list) or len(options) != ANSWER_OPTION_COUNT:
            return False
        index = question.get("correctIndex")
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < ANSWER_OPTION_COUNT:
            return False
    return True


def validate_learning_path(modules: Any) -> bool:
    return (
        isinstance(modules, list)
        and len(modules) == LEARNING_PATH_LENGTH
        and all(_non_empty_str(module) for module in modules)
    )


def validate_path_modules(modules: Any) -> bool:
    return _is_dict_list(modules) and len(modules) > 0


def validate_career_paths(paths: Any, count: int = CAREER_PATH_COUNT) -> bool:
    if not _is_dict_list(paths) or len(paths) != count:
        return False
    return all(_non_empty_str(path.get("pathName")) for path in paths)
