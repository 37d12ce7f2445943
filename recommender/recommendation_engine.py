"""
Recommendation engine: thin facade binding the stages to one store and resolver.

All implementation lives in models/, utils/, and stages/. The engine holds
no caches and no per-call state; every method rebuilds what it needs from
the store.
"""

import random
from datetime import datetime
from typing import List, Optional, Sequence, Union

from .interfaces import DocumentStore, MediaResolver
from .models.config import RecommendationConfig, resolve_config
from .models.document import Document
from .models.feed_item import FeedItem
from .models.profile import UserProfile
from .models.video import VideoRecord
from .stages import enrichment, feeds
from .stages.orchestrator import get_recommended_videos


class RecommendationEngine:
    """
    Feed builder over a DocumentStore and a MediaResolver.

    rng: randomness for the fallback shuffle (seed it for reproducible order).
    """

    def __init__(
        self,
        store: DocumentStore,
        media: MediaResolver,
        config: Optional[RecommendationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.media = media
        self.config = resolve_config(config)
        self.rng = rng

    async def get_recommended_videos(
        self, viewer_id: Optional[str], now: Optional[datetime] = None
    ) -> List[FeedItem]:
        return await get_recommended_videos(
            viewer_id, self.store, self.media, self.config, rng=self.rng, now=now
        )

    async def enrich(
        self,
        videos: Sequence[Union[Document, VideoRecord]],
        now: Optional[datetime] = None,
    ) -> List[FeedItem]:
        return await enrichment.enrich_videos(
            videos, self.store, self.media, self.config, now=now
        )

    async def get_following_feed(
        self, viewer_id: Optional[str], now: Optional[datetime] = None
    ) -> List[FeedItem]:
        return await feeds.get_following_feed(
            viewer_id, self.store, self.media, self.config, now=now
        )

    async def get_latest_videos(
        self, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[FeedItem]:
        return await feeds.get_latest_videos(
            self.store, self.media, self.config, limit=limit, now=now
        )

    async def search_videos(self, term: str, now: Optional[datetime] = None) -> List[FeedItem]:
        return await feeds.search_videos(term, self.store, self.media, self.config, now=now)

    async def search_users(self, term: str) -> List[UserProfile]:
        return await feeds.search_users(term, self.store, self.config)

    async def get_user_uploads(
        self, user_id: str, now: Optional[datetime] = None
    ) -> List[FeedItem]:
        return await feeds.get_user_uploads(
            user_id, self.store, self.media, self.config, now=now
        )

    async def get_liked_videos(
        self, user_id: str, now: Optional[datetime] = None
    ) -> List[FeedItem]:
        return await feeds.get_liked_videos(
            user_id, self.store, self.media, self.config, now=now
        )

    async def get_profile_stats(self, user_id: str) -> feeds.ProfileStats:
        return await feeds.get_profile_stats(user_id, self.store, self.config)

    async def record_view(self, video_id: str) -> bool:
        return await feeds.record_view(video_id, self.store, self.config)
