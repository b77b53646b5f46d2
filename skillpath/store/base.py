"""
Document store and identity boundaries.

The core only needs four async document operations and the current user.
Array/object fields are persisted as JSON strings; ``encode_record`` and
``decode_record`` are the single place that encoding happens.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

from loguru import logger

JSON_ENCODED_FIELDS = (
    "modules",
    "completedModules",
    "aiNudges",
    "skills",
    "interests",
    "recommendedSkills",
)


class DocumentStore(Protocol):
    """Async document database collaborator."""

    async def get_document(self, collection: str, document_id: str) -> dict[str, Any]:
        ...

    async def list_documents(self, collection: str, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        ...

    async def create_document(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        ...

    async def update_document(self, collection: str, document_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        ...


@dataclass(frozen=True)
class CurrentUser:
    id: str
    name: str


class IdentityProvider(Protocol):
    async def get_current_user(self) -> CurrentUser:
        ...


class StaticIdentity:
    """Identity provider returning a fixed user (CLI and tests)."""

    def __init__(self, user_id: str = "local-user", name: str = "Local User"):
        self.user = CurrentUser(id=user_id, name=name)

    async def get_current_user(self) -> CurrentUser:
        return self.user


def encode_record(record: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``record`` with list/dict values of the encoded fields as JSON strings."""
    encoded = dict(record)
    for key in JSON_ENCODED_FIELDS:
        value = encoded.get(key)
        if isinstance(value, (list, dict)):
            encoded[key] = json.dumps(value)
    return encoded


def decode_record(record: dict[str, Any]) -> dict[str, Any]:
    """Inverse of ``encode_record``; malformed JSON strings decode to an empty list."""
    decoded = dict(record)
    for key in JSON_ENCODED_FIELDS:
        value = decoded.get(key)
        if not isinstance(value, str):
            continue
        try:
            decoded[key] = json.loads(value)
        except ValueError:
            logger.warning(f"Field '{key}' of document {record.get('id')} is not valid JSON")
            decoded[key] = []
    return decoded
