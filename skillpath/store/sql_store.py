"""
SQLAlchemy-backed document store.

Every collection lives in one ``documents`` table; the record body is a JSON
text column. Records are returned with the store-assigned ``id`` merged in.
"""

from __future__ import annotations

import json
from collections.abc import Generator
from contextlib import contextmanager
from datetime import datetime
from typing import Any
from uuid import uuid4

from loguru import logger
from sqlalchemy import DateTime, String, Text, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from skillpath.exceptions import SkillpathError


class Base(DeclarativeBase):
    pass


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection: Mapped[str] = mapped_column(String(64), index=True)
    data: Mapped[str] = mapped_column(Text, default="{}")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_record(self) -> dict[str, Any]:
        record = json.loads(self.data or "{}")
        record["id"] = self.id
        return record


class DocumentNotFoundError(SkillpathError):
    """No document with the given id exists in the collection."""


class SqlDocumentStore:
    """
    Reference DocumentStore over a SQLAlchemy engine.

    Methods are async to satisfy the DocumentStore protocol; the underlying
    session work is synchronous and short.
    """

    def __init__(self, database_url: str | None = None, echo: bool = False):
        if database_url is None:
            from config import get_settings

            database_url = get_settings().database_url
        self.engine = create_engine(database_url, echo=echo, pool_pre_ping=True)
        self._session_factory = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Provide a transactional scope around a series of operations."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:  # Intentionally broad - rollback on any error before re-raising
            session.rollback()
            raise
        finally:
            session.close()

    def _load(self, session: Session, collection: str, document_id: str) -> Document:
        document = session.get(Document, document_id)
        if document is None or document.collection != collection:
            raise DocumentNotFoundError(
                f"Document {document_id} not found in {collection}",
                context={"collection": collection, "id": document_id},
            )
        return document

    async def get_document(self, collection: str, document_id: str) -> dict[str, Any]:
        with self.session_scope() as session:
            return self._load(session, collection, document_id).to_record()

    async def list_documents(self, collection: str, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """All documents in a collection whose fields equal every filter value."""
        filters = filters or {}
        with self.session_scope() as session:
            rows = session.scalars(
                select(Document).where(Document.collection == collection).order_by(Document.created_at)
            ).all()
            records = [row.to_record() for row in rows]
        return [
            record for record in records
            if all(record.get(key) == value for key, value in filters.items())
        ]

    async def create_document(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        document_id = str(uuid4())
        body = {key: value for key, value in data.items() if key != "id"}
        with self.session_scope() as session:
            session.add(Document(id=document_id, collection=collection, data=json.dumps(body)))
        logger.debug(f"Created document {document_id} in {collection}")
        return {**body, "id": document_id}

    async def update_document(self, collection: str, document_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        with self.session_scope() as session:
            document = self._load(session, collection, document_id)
            record = json.loads(document.data or "{}")
            record.update({key: value for key, value in patch.items() if key != "id"})
            document.data = json.dumps(record)
            document.updated_at = datetime.utcnow()
            updated = document.to_record()
        logger.debug(f"Updated document {document_id} in {collection}")
        return updated
