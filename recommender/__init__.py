"""
Video feed recommender: collaborative filtering by co-likes.

Single entry point for the recommender package:
- models/: RecommendationConfig, Document, Like, VideoRecord, UserProfile, FeedItem
- stages/: co_likes, fallback, enrichment, orchestrator, feeds
- interfaces: DocumentStore and MediaResolver protocols
"""

from .errors import FanOutLimitError, RecommenderError, StoreQueryError
from .interfaces import DocumentStore, MediaResolver
from .models import (
    DEFAULT_CONFIG,
    DOCUMENT_ID,
    Connection,
    Document,
    FeedItem,
    Like,
    RecommendationConfig,
    UserProfile,
    VideoRecord,
)
from .recommendation_engine import RecommendationEngine
from .stages import ProfileStats, enrich_videos, get_recommended_videos

__all__ = [
    "DEFAULT_CONFIG",
    "DOCUMENT_ID",
    "Connection",
    "Document",
    "DocumentStore",
    "FanOutLimitError",
    "FeedItem",
    "Like",
    "MediaResolver",
    "ProfileStats",
    "RecommendationConfig",
    "RecommendationEngine",
    "RecommenderError",
    "StoreQueryError",
    "UserProfile",
    "VideoRecord",
    "enrich_videos",
    "get_recommended_videos",
]
