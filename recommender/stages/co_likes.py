"""
Co-like retrieval: collaborative filtering by "users who liked what you liked".

Three dependent lookups over the interactions collection:
1. the viewer's own liked video ids
2. other users who liked any of those videos
3. every video those users liked, minus the viewer's own likes

Steps 2 and 3 fan out in chunks no larger than config.fan_out_limit.
"""

import logging
from typing import List

from ..interfaces import DocumentStore
from ..models.config import RecommendationConfig
from ..models.like import Like
from ..utils.batching import unique
from .fan_out import query_in_chunks

logger = logging.getLogger(__name__)


async def get_liked_video_ids(
    store: DocumentStore,
    user_id: str,
    config: RecommendationConfig,
) -> List[str]:
    """Video ids the user has liked (deduplicated, store order)."""
    docs = await store.query_equals(
        config.interactions_collection,
        "userId",
        user_id,
        filters={"type": config.like_type},
    )
    likes = [Like.from_document(d) for d in docs]
    return unique(like.video_id for like in likes if like.video_id)


async def find_similar_users(
    store: DocumentStore,
    liked_video_ids: List[str],
    viewer_id: str,
    config: RecommendationConfig,
) -> List[str]:
    """Users other than the viewer who liked at least one of liked_video_ids."""
    docs = await query_in_chunks(
        store,
        config.interactions_collection,
        "videoId",
        liked_video_ids,
        config.fan_out_limit,
        filters={"type": config.like_type},
    )
    likes = [Like.from_document(d) for d in docs]
    return unique(
        like.user_id for like in likes if like.user_id and like.user_id != viewer_id
    )


async def find_candidate_video_ids(
    store: DocumentStore,
    similar_users: List[str],
    exclude_ids: List[str],
    config: RecommendationConfig,
) -> List[str]:
    """Videos liked by similar_users that are not in exclude_ids."""
    docs = await query_in_chunks(
        store,
        config.interactions_collection,
        "userId",
        similar_users,
        config.fan_out_limit,
        filters={"type": config.like_type},
    )
    likes = [Like.from_document(d) for d in docs]
    excluded = set(exclude_ids)
    candidates = unique(like.video_id for like in likes if like.video_id)
    return [vid for vid in candidates if vid not in excluded]
