"""
Enrichment: turn stored video records into display-ready FeedItems.

Every feed (recommended, following, discover, profile) goes through
enrich_videos(). Profiles are read fresh on every call; nothing is cached
between calls, so profile edits show up on the next fetch.

Missing data never fails the call:
- uploader without a profile -> "Unknown" / "@unknown" / no picture / no restaurant
- media reference that does not resolve -> video_src ""
- missing timestamp -> time_uploaded "" and uploaded_at = Unix epoch
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Union

from ..interfaces import DocumentStore, MediaResolver
from ..models.config import RecommendationConfig, resolve_config
from ..models.document import DOCUMENT_ID, Document
from ..models.feed_item import (
    UNKNOWN_UPLOADER_NAME,
    UNKNOWN_UPLOADER_USERNAME,
    FeedItem,
)
from ..models.profile import UserProfile
from ..models.video import VideoRecord
from ..utils.batching import unique
from ..utils.time import EPOCH, time_ago
from .fan_out import gather_all, query_in_chunks

logger = logging.getLogger(__name__)


def ensure_videos(items: Sequence[Union[Document, VideoRecord]]) -> List[VideoRecord]:
    """Convert store documents to VideoRecords; VideoRecords pass through."""
    return [
        VideoRecord.from_document(item) if isinstance(item, Document) else item
        for item in items
    ]


async def load_profiles(
    store: DocumentStore,
    uploader_ids: Sequence[str],
    config: RecommendationConfig,
) -> Dict[str, UserProfile]:
    """
    Profiles keyed by user id.

    full_scan reads the whole users collection (one query regardless of size);
    by_id reads only uploader_ids in fan-out sized chunks.
    """
    if config.profile_lookup == "by_id":
        ids = unique(uid for uid in uploader_ids if uid)
        docs = await query_in_chunks(
            store, config.users_collection, DOCUMENT_ID, ids, config.fan_out_limit
        )
    else:
        docs = await store.query_all(config.users_collection)
    return {doc.id: UserProfile.from_document(doc) for doc in docs}


async def resolve_media(
    media: MediaResolver,
    bucket: str,
    path: str,
) -> str:
    """Public URL for path, or "" when the resolver has nothing for it."""
    if not path:
        return ""
    url = await media.get_public_url(bucket, path)
    if not url:
        logger.debug("no public url for %s/%s", bucket, path)
        return ""
    return url


def to_feed_item(
    record: VideoRecord,
    profile: Optional[UserProfile],
    video_src: str,
    now: Optional[datetime] = None,
) -> FeedItem:
    """Build one FeedItem; profile None means the uploader is unknown."""
    if profile is None:
        name, username, picture, restaurant = (
            UNKNOWN_UPLOADER_NAME,
            UNKNOWN_UPLOADER_USERNAME,
            None,
            None,
        )
    else:
        name = profile.display_name or UNKNOWN_UPLOADER_NAME
        username = profile.username or UNKNOWN_UPLOADER_USERNAME
        picture = profile.photo_url
        restaurant = profile.restaurant_id
    uploaded_at = record.uploaded_at
    return FeedItem(
        id=record.id,
        video_src=video_src,
        caption=record.caption,
        uploader_name=name,
        uploader_username=username,
        uploader_profile_pic=picture,
        uploader_restaurant_id=restaurant,
        time_uploaded=time_ago(uploaded_at, now) if uploaded_at else "",
        views=record.views,
        uploaded_at=uploaded_at or EPOCH,
    )


async def enrich_videos(
    items: Sequence[Union[Document, VideoRecord]],
    store: DocumentStore,
    media: MediaResolver,
    config: Optional[RecommendationConfig] = None,
    now: Optional[datetime] = None,
) -> List[FeedItem]:
    """
    Enrich video records with uploader profile, public media URL, and relative time.
    Output order matches input order. Store failures propagate.
    """
    config = resolve_config(config)
    records = ensure_videos(items)
    if not records:
        return []
    profiles = await load_profiles(store, [r.uploader_id for r in records], config)
    sources = await gather_all(
        *(resolve_media(media, config.media_bucket, r.media_ref) for r in records)
    )
    out = []
    for record, src in zip(records, sources):
        profile = profiles.get(record.uploader_id)
        if profile is None:
            logger.debug("no profile for uploader %r of video %s", record.uploader_id, record.id)
        out.append(to_feed_item(record, profile, src, now))
    return out
