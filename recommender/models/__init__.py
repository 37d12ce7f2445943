"""Data models for the recommender."""

from .config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .document import DOCUMENT_ID, Document
from .feed_item import (
    UNKNOWN_UPLOADER_NAME,
    UNKNOWN_UPLOADER_USERNAME,
    FeedItem,
    sort_by_recency,
)
from .like import Connection, Like
from .profile import UserProfile
from .video import VideoRecord

__all__ = [
    "DEFAULT_CONFIG",
    "DOCUMENT_ID",
    "Connection",
    "Document",
    "FeedItem",
    "Like",
    "RecommendationConfig",
    "UNKNOWN_UPLOADER_NAME",
    "UNKNOWN_UPLOADER_USERNAME",
    "UserProfile",
    "VideoRecord",
    "resolve_config",
    "sort_by_recency",
]
