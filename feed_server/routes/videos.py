"""Video search and view counting."""

from fastapi import APIRouter, HTTPException, Query

from recommender import StoreQueryError

from ..models import FeedResponse, ViewRecordedResponse
from ..state import get_state
from ..utils import require_engine, store_failure, to_feed_response

router = APIRouter()


@router.get("/search", response_model=FeedResponse)
async def search_videos(q: str = Query("")):
    """Caption substring search over the newest uploads."""
    engine = require_engine(get_state())
    try:
        items = await engine.search_videos(q)
    except StoreQueryError as e:
        raise store_failure(e, "videos") from e
    return to_feed_response(items)


@router.post("/{video_id}/views", response_model=ViewRecordedResponse)
async def record_view(video_id: str):
    """Count one view of video_id."""
    engine = require_engine(get_state())
    try:
        recorded = await engine.record_view(video_id)
    except StoreQueryError as e:
        raise store_failure(e, "videos") from e
    if not recorded:
        raise HTTPException(status_code=404, detail="Video not found")
    return ViewRecordedResponse(video_id=video_id, recorded=True)
