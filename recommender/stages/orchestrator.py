"""
Recommendation orchestrator: co-like retrieval, fallbacks, materialization, ordering.

The main entry point is get_recommended_videos, which returns the viewer's
feed as FeedItems. Non-fallback results are sorted newest first; fallback
results are the shuffled catalog. The pipeline only reads from the store.
"""

import logging
import random
from datetime import datetime
from typing import List, Optional

from ..interfaces import DocumentStore, MediaResolver
from ..models.config import RecommendationConfig, resolve_config
from ..models.document import DOCUMENT_ID
from ..models.feed_item import FeedItem, sort_by_recency
from ..utils.batching import chunked
from .co_likes import find_candidate_video_ids, find_similar_users, get_liked_video_ids
from .enrichment import enrich_videos
from .fallback import shuffled_catalog
from .fan_out import gather_all

logger = logging.getLogger(__name__)


async def materialize_videos(
    store: DocumentStore,
    media: MediaResolver,
    video_ids: List[str],
    config: RecommendationConfig,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """
    Fetch videos by id in fan-out sized chunks and enrich each chunk.
    Chunks run concurrently; output concatenates chunks in order. Ids with
    no stored document are skipped.
    """

    async def _chunk(ids: List[str]) -> List[FeedItem]:
        docs = await store.query_in(config.videos_collection, DOCUMENT_ID, ids)
        return await enrich_videos(docs, store, media, config, now=now)

    batches = await gather_all(
        *(_chunk(ids) for ids in chunked(video_ids, config.fan_out_limit))
    )
    return [item for batch in batches for item in batch]


async def get_recommended_videos(
    viewer_id: Optional[str],
    store: DocumentStore,
    media: MediaResolver,
    config: Optional[RecommendationConfig] = None,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """
    Recommended feed for viewer_id.

    - empty viewer_id: [] without touching the store
    - no own likes / no similar users / no unseen candidates: shuffled catalog
    - otherwise: videos liked by similar users, minus own likes, newest first

    Store failures propagate; there are no partial results.
    """
    if not viewer_id:
        return []
    config = resolve_config(config)

    own_liked = await get_liked_video_ids(store, viewer_id, config)
    if not own_liked:
        logger.info("recommendations viewer=%s: no likes, random fallback", viewer_id)
        return await shuffled_catalog(store, media, config, rng=rng, now=now)

    similar_users = await find_similar_users(store, own_liked, viewer_id, config)
    if not similar_users:
        logger.info(
            "recommendations viewer=%s: %d likes but no similar users, random fallback",
            viewer_id,
            len(own_liked),
        )
        return await shuffled_catalog(store, media, config, rng=rng, now=now)

    candidate_ids = await find_candidate_video_ids(store, similar_users, own_liked, config)
    if not candidate_ids:
        logger.info(
            "recommendations viewer=%s: %d similar users, nothing unseen, random fallback",
            viewer_id,
            len(similar_users),
        )
        return await shuffled_catalog(store, media, config, rng=rng, now=now)

    items = await materialize_videos(store, media, candidate_ids, config, now=now)
    logger.info(
        "recommendations viewer=%s: likes=%d similar_users=%d candidates=%d returned=%d",
        viewer_id,
        len(own_liked),
        len(similar_users),
        len(candidate_ids),
        len(items),
    )
    return sort_by_recency(items)
