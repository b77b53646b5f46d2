"""
Keyword-based topic classifier.

Decides whether a topic is technical (so module content gets code examples)
and which language those examples should use. Pure, no external calls.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

TECH_KEYWORDS: dict[str, list[str]] = {
    "programming": ["javascript", "python", "java", "coding", "programming", "typescript"],
    "web": ["html", "css", "react", "angular", "vue", "frontend", "backend", "fullstack"],
    "database": ["sql", "database", "mongodb", "postgres"],
    "software": ["api", "development", "software", "git", "devops", "algorithms"],
    "tech": ["computer science", "data structures", "networking", "cloud"],
}

LANGUAGE_KEYWORDS: dict[str, list[str]] = {
    "javascript": ["javascript", "js", "node", "react", "vue", "angular"],
    "python": ["python", "django", "flask"],
    "java": ["java", "spring"],
    "html": ["html", "markup"],
    "css": ["css", "styling", "scss"],
    "sql": ["sql", "database", "mysql", "postgresql"],
    "typescript": ["typescript", "ts"],
}

DEFAULT_LANGUAGE = "javascript"

# Abbreviations too short for substring matching ("ts" is inside "concepts")
_WHOLE_WORD_KEYWORDS = {"js", "ts"}


@dataclass(frozen=True)
class TopicClassification:
    is_technical: bool
    suggested_language: str

    @property
    def content_type(self) -> str:
        return "technical" if self.is_technical else "general"


def _matches(keyword: str, text: str) -> bool:
    if keyword in _WHOLE_WORD_KEYWORDS:
        return re.search(rf"\b{re.escape(keyword)}\b", text) is not None
    return keyword in text


def is_technical_topic(topic: str) -> bool:
    lowered = topic.lower()
    return any(
        _matches(keyword, lowered)
        for keywords in TECH_KEYWORDS.values()
        for keyword in keywords
    )


def suggest_language(topic: str) -> str:
    """First language whose keywords appear in the topic, else the default."""
    lowered = topic.lower()
    for language, keywords in LANGUAGE_KEYWORDS.items():
        if any(_matches(keyword, lowered) for keyword in keywords):
            return language
    return DEFAULT_LANGUAGE


def classify_topic(topic: str) -> TopicClassification:
    return TopicClassification(
        is_technical=is_technical_topic(topic),
        suggested_language=suggest_language(topic),
    )
