"""
Shared fixtures: a small seeded catalog in an in-memory store.

Catalog (NOW = 2025-01-10 12:00 UTC):
- v1 by u2, 2 hours old       liked by u1, u2, u3
- v2 by u2, 1 day old         liked by u2
- v3 by u3, 30 minutes old    liked by u3
- v4 by u9 (no profile), 5 days old
- v5 by u3, no timestamp
"""

import asyncio
import random
from datetime import datetime, timedelta, timezone

import pytest

from recommender import RecommendationConfig, RecommendationEngine
from feed_server.services import InMemoryDocumentStore, StaticMediaResolver

NOW = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)
MEDIA_BASE = "https://cdn.example.test/storage"


def run(coro):
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)


def like(user_id: str, video_id: str, type_: str = "like") -> dict:
    return {"userId": user_id, "videoId": video_id, "type": type_}


def seed_catalog() -> dict:
    return {
        "users": {
            "u1": {"displayName": "Viewer One", "username": "@viewer", "photoURL": "https://pics.test/u1.png"},
            "u2": {"displayName": "Taco Truck", "username": "@tacos", "photoURL": "https://pics.test/u2.png", "restaurantId": "r-42"},
            "u3": {"displayname": "Noodle Bar", "username": "@noodles"},
        },
        "videos": {
            "v1": {"uploaderId": "u2", "caption": "Birria tacos", "fileName": "v1.mp4", "uploadedAt": NOW - timedelta(hours=2), "views": 10},
            "v2": {"uploaderId": "u2", "caption": "Salsa verde", "fileName": "v2.mp4", "uploadedAt": NOW - timedelta(days=1)},
            "v3": {"uploaderId": "u3", "caption": "Hand-pulled noodles", "fileName": "v3.mp4", "uploadedAt": NOW - timedelta(minutes=30), "views": 3},
            "v4": {"uploaderId": "u9", "caption": "Mystery dumplings", "fileName": "v4.mp4", "uploadedAt": NOW - timedelta(days=5)},
            "v5": {"uploaderId": "u3", "caption": "Broth secrets", "fileName": ""},
        },
        "interactions": {
            "l1": like("u1", "v1"),
            "l2": like("u2", "v1"),
            "l3": like("u3", "v1"),
            "l4": like("u2", "v2"),
            "l5": like("u3", "v3"),
            "c1": {"userId": "u2", "videoId": "v4", "type": "comment", "text": "yum"},
        },
        "connections": {
            "f1": {"followerId": "u1", "followedId": "u3"},
            "f2": {"followerId": "u2", "followedId": "u3"},
            "f3": {"followerId": "u3", "followedId": "u2"},
        },
    }


@pytest.fixture
def store():
    return InMemoryDocumentStore(seed_catalog())


@pytest.fixture
def media():
    return StaticMediaResolver(MEDIA_BASE)


@pytest.fixture
def config():
    return RecommendationConfig()


@pytest.fixture
def engine(store, media, config):
    return RecommendationEngine(store, media, config, rng=random.Random(7))
