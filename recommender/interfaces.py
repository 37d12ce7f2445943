"""
Collaborator protocols consumed by the recommender.

DocumentStore: collection queries by equality, membership, and ordering.
MediaResolver: stored file reference -> public URL.

Implementations live in feed_server.services (in-memory, JSON file,
Firestore, Supabase, static URL). Every method is a coroutine; the engine
awaits them and never retries or times out on its own.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence

from .models.document import Document


class DocumentStore(Protocol):
    """Protocol for document reads (and the single counter write used for views)."""

    async def query_equals(
        self,
        collection: str,
        field: str,
        value: Any,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        """
        Documents where field == value and every extra filters[k] == v.
        field may be DOCUMENT_ID to match the document id.
        """
        ...

    async def query_in(
        self,
        collection: str,
        field: str,
        values: Sequence[Any],
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Document]:
        """
        Documents where field is one of values (and filters match).
        Callers chunk values to the store's fan-out limit; stores reject longer lists.
        """
        ...

    async def query_all(
        self,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        """Every document in collection, optionally ordered and capped."""
        ...

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        amount: int = 1,
    ) -> bool:
        """Atomically add amount to a numeric field. Returns False if the document does not exist."""
        ...


class MediaResolver(Protocol):
    """Protocol for public media URLs."""

    async def get_public_url(self, bucket: str, path: str) -> Optional[str]:
        """Public URL for path inside bucket, or None when it cannot be resolved."""
        ...
