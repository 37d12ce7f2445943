"""
Random fallback: the whole catalog, enriched and shuffled.

Used whenever co-like retrieval has no signal (no likes, no similar users,
no unseen candidates). The shuffle is fresh per call; pass a seeded
random.Random for reproducible order.
"""

import random
from datetime import datetime
from typing import List, Optional

from ..interfaces import DocumentStore, MediaResolver
from ..models.config import RecommendationConfig
from ..models.feed_item import FeedItem
from .enrichment import enrich_videos


async def shuffled_catalog(
    store: DocumentStore,
    media: MediaResolver,
    config: RecommendationConfig,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """Every video record, enriched, in random order. Nothing is excluded."""
    docs = await store.query_all(config.videos_collection)
    items = await enrich_videos(docs, store, media, config, now=now)
    (rng or random.Random()).shuffle(items)
    return items
