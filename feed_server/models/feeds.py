"""Feed and profile response models."""

from typing import List, Optional

from pydantic import BaseModel

from .common import FeedItemCard, UserCard


class FeedResponse(BaseModel):
    videos: List[FeedItemCard]
    count: int
    viewer_id: Optional[str] = None


class UserSearchResponse(BaseModel):
    users: List[UserCard]
    count: int


class ProfileStatsResponse(BaseModel):
    user_id: str
    following: int
    followers: int
    uploads: int
    likes_received: int


class ViewRecordedResponse(BaseModel):
    video_id: str
    recorded: bool
