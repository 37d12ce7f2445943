"""
Recommender errors.

Only store failures surface to callers. Missing profiles and unresolvable
media are degraded to placeholder values inside the enrichment stage.
"""

from typing import Optional


class RecommenderError(Exception):
    """Base class for errors raised by the recommender package."""


class StoreQueryError(RecommenderError):
    """A document store query failed (network, permission, malformed query)."""

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.collection = collection
        self.operation = operation


class FanOutLimitError(StoreQueryError):
    """A membership query was given more values than the store accepts."""

    def __init__(self, collection: str, size: int, limit: int):
        super().__init__(
            f"membership query on {collection!r} has {size} values (limit {limit})",
            collection=collection,
            operation="query_in",
        )
        self.size = size
        self.limit = limit
