"""
Secondary feeds: following, discover, search, and profile pages.

Each builder reads from the store, enriches through enrich_videos(), and
chunks every membership query to config.fan_out_limit, same as the
recommended feed.
"""

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..interfaces import DocumentStore, MediaResolver
from ..models.config import RecommendationConfig
from ..models.feed_item import FeedItem, sort_by_recency
from ..models.like import Connection, Like
from ..models.profile import UserProfile
from ..models.video import VideoRecord
from ..utils.batching import unique
from .enrichment import enrich_videos
from .fan_out import gather_all, query_in_chunks
from .orchestrator import materialize_videos

logger = logging.getLogger(__name__)


class ProfileStats(BaseModel):
    """Counters shown on a profile page."""

    user_id: str
    following: int = 0
    followers: int = 0
    uploads: int = 0
    likes_received: int = 0


async def get_following_feed(
    viewer_id: Optional[str],
    store: DocumentStore,
    media: MediaResolver,
    config: RecommendationConfig,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """Videos uploaded by accounts the viewer follows, newest first."""
    if not viewer_id:
        return []
    docs = await store.query_equals(config.connections_collection, "followerId", viewer_id)
    followed = unique(
        c.followed_id for c in (Connection.from_document(d) for d in docs) if c.followed_id
    )
    if not followed:
        return []
    videos = await query_in_chunks(
        store, config.videos_collection, "uploaderId", followed, config.fan_out_limit
    )
    items = await enrich_videos(videos, store, media, config, now=now)
    return sort_by_recency(items)


async def get_latest_videos(
    store: DocumentStore,
    media: MediaResolver,
    config: RecommendationConfig,
    limit: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """Newest videos across all uploaders (discover page)."""
    docs = await store.query_all(
        config.videos_collection,
        order_by="uploadedAt",
        descending=True,
        limit=limit or config.latest_limit,
    )
    return await enrich_videos(docs, store, media, config, now=now)


async def search_videos(
    term: str,
    store: DocumentStore,
    media: MediaResolver,
    config: RecommendationConfig,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """
    Case-insensitive caption substring search over the newest
    search_scan_limit videos; at most search_result_limit matches.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return []
    docs = await store.query_all(
        config.videos_collection,
        order_by="uploadedAt",
        descending=True,
        limit=config.search_scan_limit,
    )
    matches = [
        d for d in docs if needle in VideoRecord.from_document(d).caption.lower()
    ][: config.search_result_limit]
    return await enrich_videos(matches, store, media, config, now=now)


async def search_users(
    term: str,
    store: DocumentStore,
    config: RecommendationConfig,
) -> List[UserProfile]:
    """Case-insensitive display-name substring search over the first search_scan_limit users."""
    needle = (term or "").strip().lower()
    if not needle:
        return []
    docs = await store.query_all(
        config.users_collection,
        order_by="displayName",
        limit=config.search_scan_limit,
    )
    profiles = [UserProfile.from_document(d) for d in docs]
    return [p for p in profiles if needle in p.display_name.lower()][
        : config.search_result_limit
    ]


async def get_user_uploads(
    user_id: str,
    store: DocumentStore,
    media: MediaResolver,
    config: RecommendationConfig,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """Videos uploaded by user_id, newest first."""
    docs = await store.query_equals(
        config.videos_collection,
        "uploaderId",
        user_id,
        order_by="uploadedAt",
        descending=True,
    )
    return await enrich_videos(docs, store, media, config, now=now)


async def get_liked_videos(
    user_id: str,
    store: DocumentStore,
    media: MediaResolver,
    config: RecommendationConfig,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """Videos user_id has liked, newest upload first."""
    docs = await store.query_equals(
        config.interactions_collection,
        "userId",
        user_id,
        filters={"type": config.like_type},
    )
    video_ids = unique(
        like.video_id for like in (Like.from_document(d) for d in docs) if like.video_id
    )
    if not video_ids:
        return []
    items = await materialize_videos(store, media, video_ids, config, now=now)
    return sort_by_recency(items)


async def get_profile_stats(
    user_id: str,
    store: DocumentStore,
    config: RecommendationConfig,
) -> ProfileStats:
    """Following / follower / upload counts and total likes across the user's uploads."""
    following, followers, uploads = await gather_all(
        store.query_equals(config.connections_collection, "followerId", user_id),
        store.query_equals(config.connections_collection, "followedId", user_id),
        store.query_equals(config.videos_collection, "uploaderId", user_id),
    )
    upload_ids = [d.id for d in uploads]
    likes = await query_in_chunks(
        store,
        config.interactions_collection,
        "videoId",
        upload_ids,
        config.fan_out_limit,
        filters={"type": config.like_type},
    )
    return ProfileStats(
        user_id=user_id,
        following=len(following),
        followers=len(followers),
        uploads=len(upload_ids),
        likes_received=len(likes),
    )


async def record_view(
    video_id: str,
    store: DocumentStore,
    config: RecommendationConfig,
) -> bool:
    """Increment a video's view counter. False when the video does not exist."""
    if not video_id:
        return False
    updated = await store.increment(config.videos_collection, video_id, "views", 1)
    if not updated:
        logger.info("record_view: video %s not found", video_id)
    return updated
