"""
Record types for generated learning content.

Every generator returns one of these instead of a loose dict. Attributes are
snake_case; ``to_dict`` emits the camelCase keys used by the front-end and
the document store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")
CONTENT_TYPES = ("technical", "general")
QUESTION_TYPES = ("single", "multiple")


@dataclass
class CodeExample:
    """Code snippet attached to a technical section."""

    language: str
    code: str
    explanation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "code": self.code,
            "explanation": self.explanation,
        }


@dataclass
class Section:
    """One section of generated module content."""

    title: str
    content: str
    key_points: list[str] = field(default_factory=list)
    code_example: CodeExample | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "keyPoints": list(self.key_points),
            "codeExample": self.code_example.to_dict() if self.code_example else None,
        }


@dataclass
class ModuleContent:
    """Generated lesson content for a single module."""

    title: str
    type: str
    sections: list[Section]

    @property
    def is_technical(self) -> bool:
        return self.type == "technical"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "type": self.type,
            "sections": [section.to_dict() for section in self.sections],
        }


@dataclass
class Flashcard:
    """Front/back study card. Ids are 1-based and sequential."""

    id: int
    front_html: str
    back_html: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "frontHTML": self.front_html, "backHTML": self.back_html}

    @classmethod
    def from_dict(cls, data: dict[str, Any], position: int) -> Flashcard:
        return cls(
            id=position,
            front_html=str(data.get("frontHTML", "")),
            back_html=str(data.get("backHTML", "")),
        )


@dataclass
class TopicQuizQuestion:
    """Question in the topic-quiz shape (answers + correctAnswer)."""

    question: str
    question_type: str
    answers: list[str]
    correct_answer: str | list[str]
    explanation: str = ""
    point: int = 10

    @property
    def correct_answers(self) -> list[str]:
        if isinstance(self.correct_answer, list):
            return list(self.correct_answer)
        return [self.correct_answer]

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "questionType": self.question_type,
            "answers": list(self.answers),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
            "point": self.point,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TopicQuizQuestion:
        correct = data.get("correctAnswer", "")
        if isinstance(correct, list):
            correct = [str(item) for item in correct]
            question_type = "multiple" if len(correct) > 1 else data.get("questionType", "single")
        else:
            correct = str(correct)
            question_type = data.get("questionType", "single")
        if question_type not in QUESTION_TYPES:
            question_type = "single"

        try:
            point = int(data.get("point", 10))
        except (TypeError, ValueError, OverflowError):
            point = 10

        return cls(
            question=str(data.get("question", "")),
            question_type=question_type,
            answers=[str(answer) for answer in data.get("answers", [])],
            correct_answer=correct,
            explanation=str(data.get("explanation", "")),
            point=point,
        )


@dataclass
class TopicQuiz:
    """Topic quiz envelope. ``nr_of_questions`` is a string on the wire."""

    nr_of_questions: str
    questions: list[TopicQuizQuestion]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nrOfQuestions": self.nr_of_questions,
            "questions": [question.to_dict() for question in self.questions],
        }


@dataclass
class ModuleQuizQuestion:
    """Question in the module-quiz shape (options + correctIndex)."""

    question: str
    options: list[str]
    correct_index: int
    explanation: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctIndex": self.correct_index,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModuleQuizQuestion:
        return cls(
            question=str(data.get("question", "")),
            options=[str(option) for option in data.get("options", [])],
            correct_index=int(data.get("correctIndex", 0)),
            explanation=str(data.get("explanation", "")),
        )


@dataclass
class ModuleQuiz:
    questions: list[ModuleQuizQuestion]

    def to_dict(self) -> dict[str, Any]:
        return {"questions": [question.to_dict() for question in self.questions]}


@dataclass
class PathModule:
    """Career-form learning path module."""

    title: str
    description: str
    estimated_time: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "estimatedTime": self.estimated_time,
            "content": self.content,
        }


@dataclass
class CareerModule:
    title: str
    description: str
    estimated_hours: int
    key_skills: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "estimatedHours": self.estimated_hours,
            "keySkills": list(self.key_skills),
        }


@dataclass
class CareerPath:
    """Personalized career path with its module list."""

    path_name: str
    description: str
    difficulty: str
    estimated_time_to_complete: str
    relevance_score: int
    modules: list[CareerModule] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pathName": self.path_name,
            "description": self.description,
            "difficulty": self.difficulty,
            "estimatedTimeToComplete": self.estimated_time_to_complete,
            "relevanceScore": self.relevance_score,
            "modules": [module.to_dict() for module in self.modules],
        }


@dataclass
class UserProfile:
    """Learner profile collected by the profile form."""

    name: str
    goal: str
    skills: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    age: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "careerGoal": self.goal,
            "skills": list(self.skills),
            "interests": list(self.interests),
        }
