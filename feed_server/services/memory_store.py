"""
In-memory document store.

Backs local runs and the test suite. Mirrors the Firestore query semantics
the recommender relies on: equality filters, membership queries capped at
the fan-out limit, ordering (documents missing the order field are left
out), and limits. Every call is recorded in `calls` for inspection.
"""

import copy
from dataclasses import dataclass, field as dataclass_field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from recommender import DOCUMENT_ID, Document, FanOutLimitError
from recommender.utils import to_datetime


@dataclass
class StoreCall:
    """One query issued against the store."""

    operation: str
    collection: str
    field: Optional[str] = None
    values: Tuple[Any, ...] = ()
    filters: Dict[str, Any] = dataclass_field(default_factory=dict)


def _field_value(doc_id: str, data: Dict[str, Any], name: str) -> Any:
    return doc_id if name == DOCUMENT_ID else data.get(name)


def _sort_key(value: Any) -> tuple:
    """
    Order across types like Firestore: numbers < timestamps < strings < other.
    ISO-8601 strings (JSON-backed data) order as the instant they name.
    """
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, datetime):
        return (2, to_datetime(value).timestamp())
    if isinstance(value, str):
        parsed = to_datetime(value)
        if parsed is not None:
            return (2, parsed.timestamp())
        return (3, value)
    return (4, repr(value))


class InMemoryDocumentStore:
    """
    Document store over {collection: {doc_id: fields}}.
    """

    def __init__(
        self,
        collections: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None,
        fan_out_limit: int = 10,
    ):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {
            name: {doc_id: dict(fields) for doc_id, fields in docs.items()}
            for name, docs in (collections or {}).items()
        }
        self.fan_out_limit = fan_out_limit
        self.calls: List[StoreCall] = []

    # -------------------------------------------------------------------------
    # Seeding / inspection
    # -------------------------------------------------------------------------

    def add(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        self._collections.setdefault(collection, {})[doc_id] = dict(fields)

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._collections.get(collection, {}).get(doc_id)
        return dict(doc) if doc is not None else None

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))

    def snapshot(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return copy.deepcopy(self._collections)

    def calls_for(self, operation: str, collection: Optional[str] = None) -> List[StoreCall]:
        return [
            c
            for c in self.calls
            if c.operation == operation and (collection is None or c.collection == collection)
        ]

    # -------------------------------------------------------------------------
    # Query helpers
    # -------------------------------------------------------------------------

    def _matching(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> List[Tuple[str, Dict[str, Any]]]:
        out = []
        for doc_id, data in self._collections.get(collection, {}).items():
            if all(_field_value(doc_id, data, k) == v for k, v in filters.items()):
                out.append((doc_id, data))
        return out

    @staticmethod
    def _order_and_limit(
        rows: List[Tuple[str, Dict[str, Any]]],
        order_by: Optional[str],
        descending: bool,
        limit: Optional[int],
    ) -> List[Tuple[str, Dict[str, Any]]]:
        if order_by:
            rows = [r for r in rows if _field_value(r[0], r[1], order_by) is not None]
            rows.sort(key=lambda r: _sort_key(_field_value(r[0], r[1], order_by)), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    @staticmethod
    def _to_documents(rows: List[Tuple[str, Dict[str, Any]]]) -> List[Document]:
        return [Document(id=doc_id, data=dict(data)) for doc_id, data in rows]

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
        self.calls.append(StoreCall("query_equals", collection, field, (value,), dict(filters or {})))
        rows = self._matching(collection, conditions)
        return self._to_documents(self._order_and_limit(rows, order_by, descending, limit))

    async def query_in(
        self,
        collection: str,
        field: str,
        values: Sequence[Any],
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Document]:
        self.calls.append(StoreCall("query_in", collection, field, tuple(values), dict(filters or {})))
        if len(values) > self.fan_out_limit:
            raise FanOutLimitError(collection, len(values), self.fan_out_limit)
        if not values:
            return []
        wanted = set(values)
        rows = [
            (doc_id, data)
            for doc_id, data in self._matching(collection, dict(filters or {}))
            if _field_value(doc_id, data, field) in wanted
        ]
        return self._to_documents(rows)

    async def query_all(
        self,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        self.calls.append(StoreCall("query_all", collection))
        rows = self._matching(collection, {})
        return self._to_documents(self._order_and_limit(rows, order_by, descending, limit))

    async def increment(
        self,
        collection: str,
        doc_id: str,
        field: str,
        amount: int = 1,
    ) -> bool:
        self.calls.append(StoreCall("increment", collection, field, (doc_id, amount)))
        doc = self._collections.get(collection, {}).get(doc_id)
        if doc is None:
            return False
        current = doc.get(field)
        doc[field] = (current if isinstance(current, (int, float)) and not isinstance(current, bool) else 0) + amount
        return True
