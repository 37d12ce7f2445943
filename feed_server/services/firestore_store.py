"""
Firestore document store: the app's collections (interactions, videos, users, connections).

Used when DATA_SOURCE=firebase. Initializes the default Firebase app from a
service account file (or application default credentials) and queries
through the async Firestore client so independent queries can run
concurrently.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from recommender import DOCUMENT_ID, Document, FanOutLimitError, StoreQueryError

logger = logging.getLogger(__name__)


def _project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    path = Path(credentials_path)
    if not path.is_file():
        return None
    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None
    return data.get("project_id") or data.get("projectId")


class FirestoreDocumentStore:
    """
    Document store backed by Cloud Firestore.
    Document ids are exposed as Document.id; fields are the raw to_dict() map.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        fan_out_limit: int = 10,
    ):
        try:
            import firebase_admin
            from firebase_admin import credentials, firestore_async
        except ImportError:
            raise ImportError(
                "firebase-admin is required for FirestoreDocumentStore. pip install firebase-admin"
            )
        if not project_id and credentials_path:
            project_id = _project_id_from_credentials_file(credentials_path)
        if not firebase_admin._apps:
            if credentials_path:
                cred = credentials.Certificate(str(Path(credentials_path).resolve()))
                opts = {"projectId": project_id} if project_id else None
                firebase_admin.initialize_app(cred, opts)
            else:
                firebase_admin.initialize_app(options={"projectId": project_id} if project_id else None)
        self._db = firestore_async.client()
        self._project_id = project_id
        self.fan_out_limit = fan_out_limit
        logger.info("Firestore async client initialized (project=%s)", project_id or "inferred")

    # -------------------------------------------------------------------------
    # Query building
    # -------------------------------------------------------------------------

    def _field_path(self, field: str) -> Any:
        from google.cloud.firestore_v1.field_path import FieldPath

        return FieldPath.document_id() if field == DOCUMENT_ID else field

    def _operand(self, collection: str, field: str, value: Any) -> Any:
        """Document-id filters compare against document references, not strings."""
        if field == DOCUMENT_ID:
            return self._db.collection(collection).document(str(value))
        return value

    def _filtered(self, collection: str, filters: Optional[Dict[str, Any]]) -> Any:
        from google.cloud import firestore

        query = self._db.collection(collection)
        for key, value in (filters or {}).items():
            query = query.where(
                filter=firestore.FieldFilter(
                    self._field_path(key), "==", self._operand(collection, key, value)
                )
            )
        return query

    @staticmethod
    def _ordered(query: Any, order_by: Optional[str], descending: bool, limit: Optional[int]) -> Any:
        from google.cloud import firestore

        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)
        return query

    async def _run(self, query: Any, collection: str, operation: str) -> List[Document]:
        from google.api_core import exceptions as google_exceptions

        try:
            out = []
            async for snap in query.stream():
                out.append(Document(id=snap.id, data=snap.to_dict() or {}))
            return out
        except google_exceptions.GoogleAPIError as e:
            logger.error("Firestore %s on %s failed: %s", operation, collection, e)
            raise StoreQueryError(str(e), collection=collection, operation=operation) from e

    # -------------------------------------------------------------------------
    # DocumentStore protocol
    # -------------------------------------------------------------------------

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
        conditions = dict(filters or {})
        conditions[field] = value
        query = self._ordered(self._filtered(collection, conditions), order_by, descending, limit)
        return await self._run(query, collection, "query_equals")

    async def query_in(
        self,
        collection: str,
        field: str,
        values: Sequence[Any],
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Document]:
        from google.cloud import firestore

        if len(values) > self.fan_out_limit:
            raise FanOutLimitError(collection, len(values), self.fan_out_limit)
        if not values:
            return []
        operands = [self._operand(collection, field, v) for v in values]
        query = self._filtered(collection, filters).where(
            filter=firestore.FieldFilter(self._field_path(field), "in", operands)
        )
        return await self._run(query, collection, "query_in")

    async def query_all(
        self,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        query = self._ordered(self._db.collection(collection), order_by, descending, limit)
        return await self._run(query, collection, "query_all")

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        amount: int = 1,
    ) -> bool:
        from google.api_core import exceptions as google_exceptions
        from google.cloud import firestore

        doc_ref = self._db.collection(collection).document(doc_id)
        try:
            await doc_ref.update({field: firestore.Increment(amount)})
        except google_exceptions.NotFound:
            return False
        except google_exceptions.GoogleAPIError as e:
            logger.error("Firestore increment %s/%s.%s failed: %s", collection, doc_id, field, e)
            raise StoreQueryError(str(e), collection=collection, operation="increment") from e
        return True
