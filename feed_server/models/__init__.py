"""Pydantic request/response models for the API."""

from .common import ErrorResponse, FeedItemCard, UserCard
from .feeds import FeedResponse, ProfileStatsResponse, UserSearchResponse, ViewRecordedResponse

__all__ = [
    "ErrorResponse",
    "FeedItemCard",
    "FeedResponse",
    "ProfileStatsResponse",
    "UserCard",
    "UserSearchResponse",
    "ViewRecordedResponse",
]
