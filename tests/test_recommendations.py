"""
Tests for the co-like recommendation pipeline.

Covers the no-viewer short circuit, the three random fallbacks, exclusion
of already-liked videos, recency ordering, fan-out chunking, and failure
propagation.
"""

import asyncio
import random
from datetime import timedelta

import pytest

from recommender import (
    DOCUMENT_ID,
    RecommendationConfig,
    RecommendationEngine,
    StoreQueryError,
    get_recommended_videos,
)
from recommender.stages import (
    find_similar_users,
    gather_all,
    get_liked_video_ids,
    query_in_chunks,
)
from feed_server.services import InMemoryDocumentStore

from conftest import NOW, like, run, seed_catalog


def _recommend(engine, viewer_id):
    return run(engine.get_recommended_videos(viewer_id, now=NOW))


def _ids(items):
    return [i.id for i in items]


class FailingStore(InMemoryDocumentStore):
    """Fails every membership query."""

    async def query_in(self, collection, field, values, filters=None):
        raise StoreQueryError("backend unavailable", collection=collection, operation="query_in")


class TestNoViewer:
    """Empty viewer ids short-circuit without store access."""

    @pytest.mark.parametrize("viewer", [None, ""])
    def test_returns_empty_without_queries(self, engine, store, viewer):
        assert _recommend(engine, viewer) == []
        assert store.calls == []


class TestCoLikes:
    """Tests for the personalized path."""

    def test_co_like_scenario(self, engine):
        items = _recommend(engine, "u1")

        # u1 liked v1; u2 and u3 also liked v1 and then v2 / v3
        assert _ids(items) == ["v3", "v2"]
        assert items[0].uploader_name == "Noodle Bar"
        assert items[1].uploader_name == "Taco Truck"

    def test_already_liked_videos_excluded(self, engine):
        items = _recommend(engine, "u1")
        assert "v1" not in _ids(items)

    def test_comments_are_not_likes(self, store, engine):
        # u2 commented on v4; comments never become candidates
        assert "v4" not in _ids(_recommend(engine, "u1"))

    def test_sorted_newest_first(self, store, engine):
        store.add("interactions", "l6", like("u2", "v5"))
        store.add("interactions", "l7", like("u3", "v4"))

        items = _recommend(engine, "u1")

        assert _ids(items) == ["v3", "v2", "v4", "v5"]
        for a, b in zip(items, items[1:]):
            assert a.uploaded_at >= b.uploaded_at

    def test_missing_timestamp_sorts_last(self, store, engine):
        store.add("interactions", "l6", like("u2", "v5"))

        items = _recommend(engine, "u1")

        assert items[-1].id == "v5"
        assert items[-1].time_uploaded == ""

    def test_deleted_candidate_is_skipped(self, store, engine):
        store.add("interactions", "l6", like("u2", "gone"))

        assert _ids(_recommend(engine, "u1")) == ["v3", "v2"]

    def test_viewer_never_counts_as_similar(self, store, config):
        similar = run(find_similar_users(store, ["v1"], "u1", config))
        assert similar == ["u2", "u3"]

    def test_engine_does_not_write(self, store, engine):
        before = store.snapshot()
        _recommend(engine, "u1")
        assert store.snapshot() == before
        assert store.calls_for("increment") == []


class TestFallbacks:
    """Random shuffle of the whole catalog when there is no signal."""

    def test_zero_likes_returns_whole_catalog(self, engine):
        items = _recommend(engine, "newcomer")

        assert sorted(_ids(items)) == ["v1", "v2", "v3", "v4", "v5"]
        assert len(set(_ids(items))) == 5

    def test_no_similar_users(self, store, engine):
        store.add("videos", "v6", {"uploaderId": "u2", "caption": "Lonely", "fileName": "v6.mp4"})
        store.add("interactions", "l6", like("loner", "v6"))

        items = _recommend(engine, "loner")

        assert sorted(_ids(items)) == ["v1", "v2", "v3", "v4", "v5", "v6"]

    def test_no_unseen_candidates(self, media):
        store = InMemoryDocumentStore(seed_catalog())
        store.add("interactions", "l6", like("u3", "v2"))
        engine = RecommendationEngine(store, media, rng=random.Random(1))

        items = _recommend(engine, "u3")

        # co-likers u1 and u2 liked only v1 and v2, both already liked by u3
        assert sorted(_ids(items)) == ["v1", "v2", "v3", "v4", "v5"]

    def test_partial_overlap_is_not_a_fallback(self, store, engine):
        store.add("interactions", "l6", like("loner", "v2"))
        store.add("interactions", "l7", like("loner", "nope"))

        # u2 also liked v2, and u2's other like is v1
        assert _ids(_recommend(engine, "loner")) == ["v1"]

    def test_seeded_rng_is_reproducible(self, store, media):
        first = _recommend(RecommendationEngine(store, media, rng=random.Random(42)), "newcomer")
        second = _recommend(RecommendationEngine(store, media, rng=random.Random(42)), "newcomer")

        assert _ids(first) == _ids(second)

    def test_different_seeds_vary_order(self, store, media):
        orders = {
            tuple(_ids(_recommend(RecommendationEngine(store, media, rng=random.Random(seed)), "newcomer")))
            for seed in range(20)
        }
        assert len(orders) > 1


class TestFanOut:
    """Membership queries never exceed the fan-out limit."""

    @pytest.fixture
    def wide_store(self):
        store = InMemoryDocumentStore(fan_out_limit=10)
        for i in range(30):
            store.add("videos", f"v{i}", {
                "uploaderId": "creator",
                "caption": f"clip {i}",
                "fileName": f"v{i}.mp4",
                "uploadedAt": NOW - timedelta(minutes=i),
            })
        # viewer liked v0..v24
        for i in range(25):
            store.add("interactions", f"own{i}", like("viewer", f"v{i}"))
        # 12 other users, each liked one of the viewer's videos plus one unseen video
        for j in range(12):
            store.add("interactions", f"a{j}", like(f"fan{j}", f"v{j * 2}"))
            store.add("interactions", f"b{j}", like(f"fan{j}", f"v{25 + j % 5}"))
        return store

    def test_similar_user_lookup_issues_three_chunks(self, wide_store, media, config):
        liked = run(get_liked_video_ids(wide_store, "viewer", config))
        wide_store.calls.clear()

        similar = run(find_similar_users(wide_store, liked, "viewer", config))

        calls = [c for c in wide_store.calls_for("query_in", "interactions") if c.field == "videoId"]
        assert len(liked) == 25
        assert len(calls) == 3
        assert all(len(c.values) <= 10 for c in calls)
        assert set(similar) == {f"fan{j}" for j in range(12)}

    def test_chunked_union_matches_unbounded_query(self, wide_store, media, config):
        liked = run(get_liked_video_ids(wide_store, "viewer", config))
        unbounded = InMemoryDocumentStore(wide_store.snapshot(), fan_out_limit=1000)

        chunked_result = run(find_similar_users(wide_store, liked, "viewer", config))
        single_result = run(find_similar_users(
            unbounded, liked, "viewer", RecommendationConfig(fan_out_limit=30)
        ))

        assert set(chunked_result) == set(single_result)

    def test_full_pipeline_respects_limit(self, wide_store, media):
        engine = RecommendationEngine(wide_store, media, rng=random.Random(3))

        items = _recommend(engine, "viewer")

        assert _ids(items) == ["v25", "v26", "v27", "v28", "v29"]
        in_calls = wide_store.calls_for("query_in")
        assert in_calls
        assert all(len(c.values) <= 10 for c in in_calls)
        # 12 similar users -> two chunks
        user_calls = [c for c in in_calls if c.collection == "interactions" and c.field == "userId"]
        assert [len(c.values) for c in user_calls] == [10, 2]


class TestFailures:
    """Store failures abort the call."""

    def test_query_failure_propagates(self, media):
        store = FailingStore(seed_catalog())

        with pytest.raises(StoreQueryError):
            run(get_recommended_videos("u1", store, media, now=NOW))

    def test_fallback_path_has_no_membership_queries(self, media):
        store = FailingStore(seed_catalog())

        items = run(get_recommended_videos("newcomer", store, media, now=NOW))

        assert len(items) == 5

    def test_fan_out_violation_is_a_store_error(self, media):
        store = InMemoryDocumentStore(seed_catalog(), fan_out_limit=1)

        with pytest.raises(StoreQueryError):
            run(get_recommended_videos(
                "u1", store, media, RecommendationConfig(fan_out_limit=2), now=NOW
            ))


class StaggeredStore(InMemoryDocumentStore):
    """Chunk "a" and "c" fail at once; chunk "b" is slow and records cancellation."""

    def __init__(self):
        super().__init__(fan_out_limit=10)
        self.cancelled = []

    async def query_in(self, collection, field, values, filters=None):
        if values[0] == "b":
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                self.cancelled.append(tuple(values))
                raise
            return []
        raise StoreQueryError(f"chunk {values[0]} failed", collection=collection, operation="query_in")


class TestConcurrentChunks:
    """Chunk queries fail fast and leave nothing running."""

    def test_first_failure_cancels_pending_chunks(self):
        store = StaggeredStore()

        async def scenario():
            with pytest.raises(StoreQueryError, match="chunk a failed"):
                await query_in_chunks(store, "videos", DOCUMENT_ID, ["a", "b", "c"], 1)
            return [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]

        leftover = run(scenario())

        assert store.cancelled == [("b",)]
        assert leftover == []

    def test_gather_all_keeps_argument_order(self):
        async def value(v, delay):
            await asyncio.sleep(delay)
            return v

        assert run(gather_all(value("x", 0.02), value("y", 0), value("z", 0.01))) == ["x", "y", "z"]

    def test_gather_all_empty(self):
        assert run(gather_all()) == []
