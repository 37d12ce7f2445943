"""Pipeline stages: co-like retrieval, random fallback, enrichment, orchestration, secondary feeds."""

from .co_likes import find_candidate_video_ids, find_similar_users, get_liked_video_ids
from .enrichment import enrich_videos
from .fallback import shuffled_catalog
from .fan_out import gather_all, query_in_chunks
from .feeds import (
    ProfileStats,
    get_following_feed,
    get_latest_videos,
    get_liked_videos,
    get_profile_stats,
    get_user_uploads,
    record_view,
    search_users,
    search_videos,
)
from .orchestrator import get_recommended_videos, materialize_videos

__all__ = [
    "ProfileStats",
    "enrich_videos",
    "find_candidate_video_ids",
    "find_similar_users",
    "gather_all",
    "get_following_feed",
    "get_latest_videos",
    "get_liked_video_ids",
    "get_liked_videos",
    "get_profile_stats",
    "get_recommended_videos",
    "get_user_uploads",
    "materialize_videos",
    "query_in_chunks",
    "record_view",
    "search_users",
    "search_videos",
    "shuffled_catalog",
]
