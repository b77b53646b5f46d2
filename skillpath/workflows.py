"""
Profile onboarding workflow.

Persists a learner profile, generates four career paths and stores each one
with fresh progress tracking. Career path persistence is sequential to keep
load on the providers and the store bounded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from skillpath.generation.paths import PathGenerator
from skillpath.models import CareerPath, UserProfile
from skillpath.store import DocumentStore, IdentityProvider, decode_record, encode_record


@dataclass
class ProfileResult:
    user: dict[str, Any]
    career_paths: list[dict[str, Any]] = field(default_factory=list)


def nudges_for(path: CareerPath) -> list[str]:
    """Short study suggestions derived from a generated path."""
    nudges = []
    if path.modules:
        nudges.append(f"Start with {path.modules[0].title} to build a strong foundation")
    skills = recommended_skills(path)
    if skills:
        nudges.append(f"Practice {', '.join(skills[:2])} with a small hands-on project")
    nudges.append(f"Plan for about {path.estimated_time_to_complete} to finish {path.path_name}")
    return nudges


def recommended_skills(path: CareerPath) -> list[str]:
    seen: list[str] = []
    for module in path.modules:
        for skill in module.key_skills:
            if skill not in seen:
                seen.append(skill)
    return seen


def career_path_record(path: CareerPath, user_id: str) -> dict[str, Any]:
    """Document body for a new career path, before JSON field encoding."""
    return {
        "userID": user_id,
        "careerName": path.path_name,
        "description": path.description,
        "difficulty": path.difficulty,
        "estimatedTimeToComplete": path.estimated_time_to_complete,
        "relevanceScore": path.relevance_score,
        "modules": [module.to_dict() for module in path.modules],
        "progress": 0,
        "completedModules": [],
        "aiNudges": nudges_for(path),
        "recommendedSkills": recommended_skills(path),
    }


async def create_profile_with_paths(
    profile: UserProfile,
    store: DocumentStore,
    identity: IdentityProvider,
    generator: PathGenerator,
    users_collection: str | None = None,
    paths_collection: str | None = None,
) -> ProfileResult:
    """
    Create the learner profile and its four career paths.

    Args:
        profile: Learner profile from the onboarding form
        store: Document store collaborator
        identity: Provides the current user's id
        generator: Career path generator (never raises on provider failure)
        users_collection: Defaults to settings.users_collection
        paths_collection: Defaults to settings.career_paths_collection

    Returns:
        Decoded user and career path records as stored
    """
    if users_collection is None or paths_collection is None:
        from config import get_settings

        settings = get_settings()
        users_collection = users_collection or settings.users_collection
        paths_collection = paths_collection or settings.career_paths_collection

    user = await identity.get_current_user()
    user_record = await store.create_document(
        users_collection,
        encode_record({**profile.to_dict(), "userID": user.id}),
    )
    logger.info(f"Created profile for {user.id} ({profile.name})")

    paths = await generator.generate_career_paths(profile)

    stored = []
    for path in paths:
        record = await store.create_document(paths_collection, encode_record(career_path_record(path, user.id)))
        stored.append(decode_record(record))
        logger.debug(f"Stored career path '{path.path_name}' as {record['id']}")

    logger.info(f"Stored {len(stored)} career paths for {user.id}")
    return ProfileResult(user=decode_record(user_record), career_paths=stored)


async def load_career_paths(
    store: DocumentStore,
    identity: IdentityProvider,
    paths_collection: str | None = None,
) -> list[dict[str, Any]]:
    """Decoded career paths belonging to the current user."""
    if paths_collection is None:
        from config import get_settings

        paths_collection = get_settings().career_paths_collection

    user = await identity.get_current_user()
    records = await store.list_documents(paths_collection, {"userID": user.id})
    return [decode_record(record) for record in records]
