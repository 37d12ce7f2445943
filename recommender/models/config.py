"""
Recommender configuration: collection names, query limits, and feed sizes.

RecommendationConfig defaults are defined here. The server may pass a dict
(e.g. built from environment variables); from_dict() merges it with these defaults.
"""

from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field


class RecommendationConfig(BaseModel):
    """Configuration for the recommendation engine and the feed builders."""

    # -------------------------------------------------------------------------
    # Collections in the document store
    # -------------------------------------------------------------------------

    # Like / comment relations: { userId, videoId, type }.
    interactions_collection: str = "interactions"
    videos_collection: str = "videos"
    users_collection: str = "users"
    # Follow relations: { followerId, followedId }.
    connections_collection: str = "connections"

    # Interaction type that counts as a like.
    like_type: str = "like"

    # -------------------------------------------------------------------------
    # Store limits
    # -------------------------------------------------------------------------

    # Max values in one membership ("in") query. Larger lists are chunked.
    fan_out_limit: int = Field(default=10, ge=1, le=30)

    # -------------------------------------------------------------------------
    # Enrichment
    # -------------------------------------------------------------------------

    # Bucket that holds the uploaded video files.
    media_bucket: str = "videos"

    # "full_scan": read the whole users collection once per enrich call.
    # "by_id": read only the referenced uploaders, chunked by fan_out_limit.
    profile_lookup: Literal["full_scan", "by_id"] = "full_scan"

    # -------------------------------------------------------------------------
    # Discover / search
    # -------------------------------------------------------------------------

    latest_limit: int = Field(default=20, ge=1)
    # Newest N documents scanned for a substring search.
    search_scan_limit: int = Field(default=100, ge=1)
    # Max matches returned by a search.
    search_result_limit: int = Field(default=10, ge=1)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from dictionary (flat, or grouped under collections/limits/feeds)."""
        flat = {}
        if "collections" in config_dict:
            for name, value in config_dict["collections"].items():
                flat[f"{name}_collection"] = value
        for group in ("limits", "enrichment", "feeds"):
            if group in config_dict:
                flat.update(config_dict[group])
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
