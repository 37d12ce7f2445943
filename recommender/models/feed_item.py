"""
FeedItem model: a display-ready video returned by every feed.

Derived per call from a VideoRecord plus its uploader's profile and the
resolved media URL. Never persisted.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..utils.time import EPOCH

UNKNOWN_UPLOADER_NAME = "Unknown"
UNKNOWN_UPLOADER_USERNAME = "@unknown"


class FeedItem(BaseModel):
    id: str
    video_src: str = ""
    caption: str = ""
    uploader_name: str = UNKNOWN_UPLOADER_NAME
    uploader_username: str = UNKNOWN_UPLOADER_USERNAME
    uploader_profile_pic: Optional[str] = None
    uploader_restaurant_id: Optional[str] = None
    # "" when the source record has no timestamp
    time_uploaded: str = ""
    views: int = 0
    # Unix epoch when the source record has no timestamp
    uploaded_at: datetime = EPOCH


def sort_by_recency(items: List[FeedItem]) -> List[FeedItem]:
    """Newest first. Stable, so equal timestamps keep their input order."""
    return sorted(items, key=lambda item: item.uploaded_at, reverse=True)
