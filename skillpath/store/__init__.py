"""Document store and identity collaborators."""

from .base import (
    JSON_ENCODED_FIELDS,
    CurrentUser,
    DocumentStore,
    IdentityProvider,
    StaticIdentity,
    decode_record,
    encode_record,
)
from .sql_store import DocumentNotFoundError, SqlDocumentStore

__all__ = [
    "JSON_ENCODED_FIELDS",
    "CurrentUser",
    "DocumentNotFoundError",
    "DocumentStore",
    "IdentityProvider",
    "SqlDocumentStore",
    "StaticIdentity",
    "decode_record",
    "encode_record",
]
