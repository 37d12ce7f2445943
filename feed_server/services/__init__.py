"""Collaborators: document stores and media resolvers."""

from .firestore_store import FirestoreDocumentStore
from .json_store import JsonDocumentStore
from .media_resolver import NullMediaResolver, StaticMediaResolver, SupabaseMediaResolver
from .memory_store import InMemoryDocumentStore, StoreCall

__all__ = [
    "FirestoreDocumentStore",
    "InMemoryDocumentStore",
    "JsonDocumentStore",
    "NullMediaResolver",
    "StaticMediaResolver",
    "StoreCall",
    "SupabaseMediaResolver",
]
