"""
Tests for the secondary feeds: following, discover, search, and profile pages.
"""

import pytest

from recommender import RecommendationConfig, RecommendationEngine

from conftest import NOW, like, run


def _ids(items):
    return [i.id for i in items]


class TestFollowingFeed:
    def test_videos_from_followed_accounts(self, engine):
        items = run(engine.get_following_feed("u1", now=NOW))

        # u1 follows u3; v5 has no timestamp so it sorts last
        assert _ids(items) == ["v3", "v5"]
        assert items[0].uploader_username == "@noodles"

    def test_not_following_anyone(self, engine, store):
        assert run(engine.get_following_feed("nobody", now=NOW)) == []
        assert store.calls_for("query_in") == []

    def test_empty_viewer(self, engine, store):
        assert run(engine.get_following_feed(None, now=NOW)) == []
        assert store.calls == []


class TestLatest:
    def test_newest_first(self, engine):
        items = run(engine.get_latest_videos(now=NOW))

        # v5 has no uploadedAt and cannot be ordered
        assert _ids(items) == ["v3", "v1", "v2", "v4"]

    def test_limit(self, engine):
        assert _ids(run(engine.get_latest_videos(limit=2, now=NOW))) == ["v3", "v1"]

    def test_default_limit_from_config(self, store, media):
        engine = RecommendationEngine(store, media, RecommendationConfig(latest_limit=1))
        assert _ids(run(engine.get_latest_videos(now=NOW))) == ["v3"]


class TestSearch:
    def test_caption_search_is_case_insensitive(self, engine):
        items = run(engine.search_videos("NOODLE", now=NOW))

        assert _ids(items) == ["v3"]
        assert items[0].time_uploaded == "30 minutes ago"

    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_blank_term_returns_nothing(self, engine, store, term):
        assert run(engine.search_videos(term, now=NOW)) == []
        assert run(engine.search_users(term)) == []
        assert store.calls == []

    def test_result_limit(self, store, media):
        engine = RecommendationEngine(store, media, RecommendationConfig(search_result_limit=2))

        items = run(engine.search_videos("s", now=NOW))

        # every timestamped caption contains an "s"; newest two win
        assert _ids(items) == ["v3", "v1"]

    def test_user_search(self, engine):
        users = run(engine.search_users("taco"))

        assert [u.id for u in users] == ["u2"]
        assert users[0].restaurant_id == "r-42"

    def test_user_search_ordered_by_display_name(self, engine):
        users = run(engine.search_users("o"))
        assert [u.display_name for u in users] == ["Taco Truck", "Viewer One"]


class TestProfilePages:
    def test_uploads_newest_first(self, engine):
        assert _ids(run(engine.get_user_uploads("u2", now=NOW))) == ["v1", "v2"]

    def test_uploads_unknown_user(self, engine):
        assert run(engine.get_user_uploads("ghost", now=NOW)) == []

    def test_liked_videos(self, engine):
        assert _ids(run(engine.get_liked_videos("u3", now=NOW))) == ["v3", "v1"]

    def test_liked_videos_ignore_comments(self, engine):
        assert _ids(run(engine.get_liked_videos("u2", now=NOW))) == ["v1", "v2"]

    def test_liked_videos_chunked(self, store, engine):
        for i in range(12):
            store.add("videos", f"x{i}", {"uploaderId": "u2", "caption": f"x{i}", "fileName": f"x{i}.mp4"})
            store.add("interactions", f"lx{i}", like("u1", f"x{i}"))

        items = run(engine.get_liked_videos("u1", now=NOW))

        assert len(items) == 13
        video_calls = store.calls_for("query_in", "videos")
        assert [len(c.values) for c in video_calls] == [10, 3]

    @pytest.mark.parametrize(
        "user_id, expected",
        [
            ("u2", {"following": 1, "followers": 1, "uploads": 2, "likes_received": 4}),
            ("u3", {"following": 1, "followers": 2, "uploads": 2, "likes_received": 1}),
            ("ghost", {"following": 0, "followers": 0, "uploads": 0, "likes_received": 0}),
        ],
    )
    def test_profile_stats(self, engine, user_id, expected):
        stats = run(engine.get_profile_stats(user_id))

        assert stats.user_id == user_id
        assert stats.model_dump(exclude={"user_id"}) == expected


class TestRecordView:
    def test_increments_existing_counter(self, engine, store):
        assert run(engine.record_view("v1")) is True
        assert store.get("videos", "v1")["views"] == 11

    def test_starts_missing_counter(self, engine, store):
        assert run(engine.record_view("v2")) is True
        assert store.get("videos", "v2")["views"] == 1

    def test_unknown_video(self, engine):
        assert run(engine.record_view("nope")) is False

    def test_empty_id(self, engine, store):
        assert run(engine.record_view("")) is False
        assert store.calls == []

    def test_view_shows_in_feed(self, engine):
        run(engine.record_view("v3"))
        items = run(engine.search_videos("noodles", now=NOW))
        assert items[0].views == 4
