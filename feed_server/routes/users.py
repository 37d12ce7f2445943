"""User search and profile pages: uploads, liked videos, counters."""

from fastapi import APIRouter, Query

from recommender import StoreQueryError

from ..models import FeedResponse, ProfileStatsResponse, UserCard, UserSearchResponse
from ..state import get_state
from ..utils import require_engine, store_failure, to_feed_response

router = APIRouter()


@router.get("/search", response_model=UserSearchResponse)
async def search_users(q: str = Query("")):
    """Display-name substring search."""
    engine = require_engine(get_state())
    try:
        profiles = await engine.search_users(q)
    except StoreQueryError as e:
        raise store_failure(e, "users") from e
    users = [UserCard.from_profile(p) for p in profiles]
    return UserSearchResponse(users=users, count=len(users))


@router.get("/{user_id}/uploads", response_model=FeedResponse)
async def user_uploads(user_id: str):
    engine = require_engine(get_state())
    try:
        items = await engine.get_user_uploads(user_id)
    except StoreQueryError as e:
        raise store_failure(e, "users") from e
    return to_feed_response(items)


@router.get("/{user_id}/likes", response_model=FeedResponse)
async def user_likes(user_id: str):
    engine = require_engine(get_state())
    try:
        items = await engine.get_liked_videos(user_id)
    except StoreQueryError as e:
        raise store_failure(e, "users") from e
    return to_feed_response(items)


@router.get("/{user_id}/stats", response_model=ProfileStatsResponse)
async def user_stats(user_id: str):
    """Following, followers, uploads, and likes received."""
    engine = require_engine(get_state())
    try:
        stats = await engine.get_profile_stats(user_id)
    except StoreQueryError as e:
        raise store_failure(e, "users") from e
    return ProfileStatsResponse(**stats.model_dump())
