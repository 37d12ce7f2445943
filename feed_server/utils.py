"""Route helpers: feed response formatting, store-failure mapping, and the 503 guard."""

from typing import List, Optional

from fastapi import HTTPException

from recommender import FeedItem, RecommendationEngine, StoreQueryError

from .models import FeedItemCard, FeedResponse
from .state import AppState

# Discover page limits (used by routes/feeds)
DEFAULT_LATEST_LIMIT = 20
MAX_LATEST_LIMIT = 100

FEED_LOAD_FAILED = "Failed to load feed"
STORE_NOT_CONFIGURED = "Document store not configured"


def to_feed_response(items: List[FeedItem], viewer_id: Optional[str] = None) -> FeedResponse:
    """Wrap engine output in the API response model."""
    cards = [FeedItemCard.from_item(item) for item in items]
    return FeedResponse(videos=cards, count=len(cards), viewer_id=viewer_id)


def store_failure(error: StoreQueryError, context: str) -> HTTPException:
    """502 for a failed store query; the cause is logged, not returned."""
    where = f" ({error.operation} on {error.collection})" if error.collection else ""
    print(f"[{context}] store query failed{where}: {error}", flush=True)
    return HTTPException(status_code=502, detail=FEED_LOAD_FAILED)


def require_engine(state: AppState) -> RecommendationEngine:
    """The engine, or 503 when startup could not open the document store."""
    if state.engine is None:
        raise HTTPException(status_code=503, detail=STORE_NOT_CONFIGURED)
    return state.engine
