"""
Learning path and career path generators.

Neither generator raises once its input is valid: every provider, parse or
validation failure collapses into the per-mode deterministic fallback.
"""

from __future__ import annotations

import re
from typing import Any

from loguru import logger

from skillpath.exceptions import GenerationExhaustedError, InvalidInputError, StructuralError
from skillpath.models import DIFFICULTY_LEVELS, CareerModule, CareerPath, PathModule, UserProfile

from .base import RECOVERABLE_ERRORS, BaseGenerator, require_text
from .fallbacks import (
    DEFAULT_CAREER_MODULE_COUNT,
    MAX_CAREER_MODULES,
    MIN_CAREER_MODULES,
    fallback_career_paths,
    fallback_learning_path,
    synthesize_career_modules,
)
from .prompts import career_paths_prompt, learning_path_prompt
from .sanitizer import parse_json, sanitize_content
from .validators import (
    CAREER_PATH_COUNT,
    validate_career_paths,
    validate_learning_path,
    validate_path_modules,
)

PATH_TYPES = ("topic", "career")
DEFAULT_DIFFICULTY = "intermediate"
DEFAULT_MODULE_HOURS = 10

_MODULE_PREFIX_RE = re.compile(r"^\s*module\s*\d+\s*[:.\-]\s*", re.IGNORECASE)


def normalize_topic_path(modules: list[str]) -> list[str]:
    """Clean each title and number it "Module N: Title" in reply order."""
    normalized = []
    for position, module in enumerate(modules, start=1):
        cleaned = sanitize_content(module)
        title = _MODULE_PREFIX_RE.sub("", cleaned) or cleaned
        normalized.append(f"Module {position}: {title}")
    return normalized


# =============================================================================
# Career path normalization
# =============================================================================


def clamp_relevance(value: Any) -> int:
    """Coerce a relevance score to an int in [0, 100]; unusable values become 0."""
    if isinstance(value, bool):
        return 0
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(100, score))


def coerce_difficulty(value: Any) -> str:
    if isinstance(value, str) and value.strip().lower() in DIFFICULTY_LEVELS:
        return value.strip().lower()
    return DEFAULT_DIFFICULTY


def _career_module(data: dict[str, Any]) -> CareerModule:
    title = sanitize_content(data.get("title"))
    try:
        hours = max(1, int(data.get("estimatedHours", DEFAULT_MODULE_HOURS)))
    except (TypeError, ValueError, OverflowError):
        hours = DEFAULT_MODULE_HOURS

    skills = data.get("keySkills") or []
    if isinstance(skills, str):
        skills = [skills]

    return CareerModule(
        title=title,
        description=sanitize_content(data.get("description")) or f"Learn about {title}",
        estimated_hours=hours,
        key_skills=[str(skill) for skill in skills if skill],
    )


def normalize_career_path(data: dict[str, Any]) -> CareerPath:
    """
    Turn one parsed career path into a CareerPath.

    Clamps relevanceScore, coerces difficulty and back-fills the module list
    so every path carries between 5 and 8 modules.
    """
    path_name = sanitize_content(data.get("pathName"))

    raw_modules = data.get("modules")
    modules = []
    if isinstance(raw_modules, list):
        modules = [
            _career_module(module)
            for module in raw_modules
            if isinstance(module, dict) and sanitize_content(module.get("title"))
        ]

    if not modules:
        modules = synthesize_career_modules(path_name, DEFAULT_CAREER_MODULE_COUNT)
    elif len(modules) < MIN_CAREER_MODULES:
        synthesized = synthesize_career_modules(path_name, MIN_CAREER_MODULES)
        modules.extend(synthesized[len(modules):])
    modules = modules[:MAX_CAREER_MODULES]

    return CareerPath(
        path_name=path_name,
        description=sanitize_content(data.get("description")) or f"A learning path toward {path_name}.",
        difficulty=coerce_difficulty(data.get("difficulty")),
        estimated_time_to_complete=sanitize_content(data.get("estimatedTimeToComplete")) or "3 months",
        relevance_score=clamp_relevance(data.get("relevanceScore")),
        modules=modules,
    )


def _usable_paths(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("paths") or data.get("careerPaths") or []
    if not isinstance(data, list):
        return []
    return [
        path for path in data
        if isinstance(path, dict) and sanitize_content(path.get("pathName"))
    ]


def finalize_career_paths(data: Any, profile: UserProfile) -> list[CareerPath]:
    """Normalize parsed paths and pad or truncate to exactly four."""
    usable = _usable_paths(data)
    if not validate_career_paths(usable, CAREER_PATH_COUNT):
        logger.warning(f"Career paths response had {len(usable)} usable paths, adjusting to {CAREER_PATH_COUNT}")

    paths = [normalize_career_path(path) for path in usable[:CAREER_PATH_COUNT]]
    if len(paths) < CAREER_PATH_COUNT:
        names = {path.path_name for path in paths}
        spare = fallback_career_paths(profile)
        for candidate in spare:
            if len(paths) >= CAREER_PATH_COUNT:
                break
            if candidate.path_name not in names:
                paths.append(candidate)
                names.add(candidate.path_name)
        # Name collisions can leave a gap
        paths.extend(spare[: CAREER_PATH_COUNT - len(paths)])
    return paths


# =============================================================================
# Generator
# =============================================================================


class PathGenerator(BaseGenerator):
    """Topic/career learning paths and personalized career path suggestions."""

    async def generate_learning_path(
        self,
        goal: str,
        type: str = "topic",
        detailed: bool = False,
    ) -> list[str] | list[PathModule]:
        """
        Generate a learning path for a goal.

        Args:
            goal: Topic or career goal
            type: "topic" for five "Module N: Title" strings, "career" for 5-7 PathModules
            detailed: Ask for richer module content (career mode)
        """
        goal = require_text(goal, "goal/topic")
        if type not in PATH_TYPES:
            raise InvalidInputError(f"Unknown learning path type: {type}", context={"type": type})

        prompt = learning_path_prompt(goal, type, detailed)
        try:
            if type == "career":
                return await self._career_modules(goal, prompt)
            modules = await self._generate_json(prompt, validate_learning_path, "Learning path")
            return normalize_topic_path(modules)
        except (*RECOVERABLE_ERRORS, GenerationExhaustedError) as e:
            logger.warning(f"Learning path for '{goal}' failed, using {type} fallback: {e}")
            return fallback_learning_path(goal, type)

    async def _career_modules(self, goal: str, prompt: str) -> list[PathModule]:
        text = await self._with_retries(
            lambda: self._call_provider(prompt),
            label=f"Career learning path for '{goal}'",
        )
        modules = parse_json(text)
        if not validate_path_modules(modules):
            raise StructuralError("Career learning path response failed validation")

        return [
            PathModule(
                title=sanitize_content(module.get("title")) or f"Learning {goal}",
                description=sanitize_content(module.get("description")) or f"Learn about {goal}",
                estimated_time=sanitize_content(module.get("estimatedTime")) or "1-2 hours",
                content=sanitize_content(module.get("content")) or f"This module will teach you about {goal}",
            )
            for module in modules
        ]

    async def generate_career_paths(self, profile: UserProfile) -> list[CareerPath]:
        """Suggest exactly four career paths for a learner profile."""
        if not isinstance(profile, UserProfile):
            raise InvalidInputError("profile must be a UserProfile")
        goal = require_text(profile.goal, "career goal")

        prompt = career_paths_prompt(profile.name, goal, profile.skills, profile.interests, CAREER_PATH_COUNT)
        try:
            data = await self._generate_json(prompt, lambda data: bool(_usable_paths(data)), "Career paths")
        except RECOVERABLE_ERRORS as e:
            logger.warning(f"Career paths for '{goal}' failed, using fallback paths: {e}")
            return fallback_career_paths(profile)

        return finalize_career_paths(data, profile)
