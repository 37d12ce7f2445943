"""Feed endpoints: recommended, following, latest."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from recommender import StoreQueryError

from ..models import FeedResponse
from ..state import get_state
from ..utils import DEFAULT_LATEST_LIMIT, MAX_LATEST_LIMIT, require_engine, store_failure, to_feed_response

router = APIRouter()


@router.get("/recommended", response_model=FeedResponse)
async def recommended_feed(viewer_id: Optional[str] = Query(None)):
    """
    Co-like recommendations for viewer_id.
    No viewer -> empty feed. Viewers without signal get the whole catalog shuffled.
    """
    engine = require_engine(get_state())
    viewer = (viewer_id or "").strip() or None
    try:
        items = await engine.get_recommended_videos(viewer)
    except StoreQueryError as e:
        raise store_failure(e, "feed") from e
    return to_feed_response(items, viewer)


@router.get("/following", response_model=FeedResponse)
async def following_feed(viewer_id: Optional[str] = Query(None)):
    """Videos from accounts viewer_id follows, newest first."""
    engine = require_engine(get_state())
    viewer = (viewer_id or "").strip() or None
    try:
        items = await engine.get_following_feed(viewer)
    except StoreQueryError as e:
        raise store_failure(e, "feed") from e
    return to_feed_response(items, viewer)


@router.get("/latest", response_model=FeedResponse)
async def latest_feed(limit: int = Query(DEFAULT_LATEST_LIMIT)):
    """Newest uploads across everyone."""
    if limit < 1 or limit > MAX_LATEST_LIMIT:
        raise HTTPException(
            status_code=400,
            detail=f"limit must be between 1 and {MAX_LATEST_LIMIT}",
        )
    engine = require_engine(get_state())
    try:
        items = await engine.get_latest_videos(limit=limit)
    except StoreQueryError as e:
        raise store_failure(e, "feed") from e
    return to_feed_response(items)
