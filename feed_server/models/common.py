"""Common Pydantic models shared across routes."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from recommender import FeedItem, UserProfile


class FeedItemCard(BaseModel):
    id: str
    video_src: str
    caption: str
    uploader_name: str
    uploader_username: str
    uploader_profile_pic: Optional[str] = None
    uploader_restaurant_id: Optional[str] = None
    time_uploaded: str
    views: int
    uploaded_at: datetime

    @classmethod
    def from_item(cls, item: FeedItem) -> "FeedItemCard":
        return cls.model_validate(item.model_dump())


class UserCard(BaseModel):
    id: str
    display_name: str
    username: str
    photo_url: Optional[str] = None
    restaurant_id: Optional[str] = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserCard":
        return cls.model_validate(profile.model_dump())


class ErrorResponse(BaseModel):
    detail: str
