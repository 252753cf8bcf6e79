"""
Interaction Recorder and Interest Profile Tests

Recording folds one interaction into the per-category counters. Bad input is
logged and ignored; concurrent writes for one user never lose updates.

Run:
----
    pytest tests/test_recorder.py -v
"""

import logging
import threading
from datetime import timedelta

import pytest

from conftest import NOW, make_user
from event_ranking.models import (
    CategoryCounts,
    EventCategory,
    Interaction,
    InteractionType,
    InterestProfile,
)
from event_ranking.services import InMemoryProfileStore, InteractionRecorder

MUSIC, FOOD = EventCategory.MUSIC, EventCategory.FOOD


@pytest.fixture
def store():
    return InMemoryProfileStore()


@pytest.fixture
def recorder(store):
    return InteractionRecorder(store, clock=lambda: NOW)


class TestRecording:
    def test_each_type_increments_its_counter(self, recorder, store):
        recorder.record("u1", "e1", InteractionType.VIEW, MUSIC)
        recorder.record("u1", "e2", InteractionType.LIKE, MUSIC)
        recorder.record("u1", "e3", InteractionType.PURCHASE, MUSIC)
        recorder.record("u1", "e4", InteractionType.PURCHASE, MUSIC)

        counts = store.get("u1").counts_for(MUSIC)
        assert (counts.viewed, counts.liked, counts.purchased) == (1, 1, 2)

    def test_share_counts_as_view(self, recorder, store):
        recorder.record("u1", "e1", InteractionType.SHARE, FOOD)
        assert store.get("u1").counts_for(FOOD).viewed == 1

    def test_string_inputs_accepted(self, recorder, store):
        recorder.record("u1", "e1", "like", "food")
        assert store.get("u1").counts_for(FOOD).liked == 1

    def test_other_categories_untouched(self, recorder, store):
        recorder.record("u1", "e1", InteractionType.LIKE, MUSIC)
        assert store.get("u1").counts_for(FOOD) == CategoryCounts()

    def test_record_interaction_value(self, recorder, store):
        recorder.record_interaction(
            Interaction(
                user_id="u1",
                event_id="e1",
                type=InteractionType.PURCHASE,
                category=MUSIC,
                timestamp=NOW - timedelta(hours=2),
            )
        )
        profile = store.get("u1")
        assert profile.counts_for(MUSIC).purchased == 1
        assert profile.last_updated == NOW - timedelta(hours=2)

    def test_last_updated_uses_clock_by_default(self, recorder, store):
        recorder.record("u1", "e1", InteractionType.VIEW, MUSIC)
        assert store.get("u1").last_updated == NOW

    def test_last_updated_never_moves_backwards(self, recorder, store):
        recorder.record("u1", "e1", InteractionType.VIEW, MUSIC, timestamp=NOW)
        recorder.record("u1", "e2", InteractionType.VIEW, MUSIC, timestamp=NOW - timedelta(days=1))
        assert store.get("u1").last_updated == NOW


class TestIgnoredInput:
    def test_missing_user_is_noop(self, recorder, store):
        recorder.record(None, "e1", InteractionType.LIKE, MUSIC)
        recorder.record("", "e1", InteractionType.LIKE, MUSIC)
        assert len(store) == 0

    def test_unknown_type_logged_and_ignored(self, recorder, store, caplog):
        with caplog.at_level(logging.WARNING, logger="event_ranking.services.recorder"):
            recorder.record("u1", "e1", "bookmark", MUSIC)
        assert store.get("u1") is None
        assert "UNKNOWN_INTERACTION_TYPE" in caplog.text

    def test_unknown_category_logged_and_ignored(self, recorder, store, caplog):
        with caplog.at_level(logging.WARNING, logger="event_ranking.services.recorder"):
            recorder.record("u1", "e1", InteractionType.LIKE, "underwater_basket_weaving")
        assert store.get("u1") is None
        assert "UNKNOWN_CATEGORY" in caplog.text

    def test_missing_category_ignored(self, recorder, store):
        recorder.record("u1", "e1", InteractionType.LIKE, None)
        assert store.get("u1") is None


class TestReset:
    def test_reset_clears_counters_keeps_preferences(self, recorder, store):
        store.set_preferences("u1", {FOOD})
        recorder.record("u1", "e1", InteractionType.LIKE, MUSIC)
        recorder.reset("u1")

        profile = store.get("u1")
        assert profile.total_interactions == 0
        assert profile.preferred_categories == {FOOD}
        assert profile.confidence_score == 0

    def test_reset_unknown_user_is_noop(self, recorder, store):
        recorder.reset("ghost")
        assert len(store) == 0


class TestConfidence:
    def test_zero_without_interactions(self):
        assert InterestProfile(user_id="u1").confidence_score == 0

    def test_half_at_saturation(self, recorder, store):
        for i in range(10):
            recorder.record("u1", f"e{i}", InteractionType.VIEW, MUSIC)
        assert store.get("u1").confidence_score == pytest.approx(0.5)

    def test_monotonic_and_bounded(self, recorder, store):
        previous = 0.0
        for i in range(200):
            recorder.record("u1", f"e{i}", InteractionType.LIKE, MUSIC)
            current = store.get("u1").confidence_score
            assert previous < current < 1.0
            previous = current

    def test_store_saturation_setting(self, store):
        tight = InMemoryProfileStore(confidence_saturation=1.0)
        InteractionRecorder(tight).record("u1", "e1", InteractionType.VIEW, MUSIC)
        assert tight.get("u1").confidence_score == pytest.approx(0.5)


class TestProfile:
    def test_new_user_flag(self):
        assert InterestProfile(user_id="u1").is_new_user
        assert not InterestProfile(user_id="u1", preferred_categories={MUSIC}).is_new_user

    def test_from_user_copies_preferences(self):
        user = make_user(preferred_categories={MUSIC, FOOD})
        assert InterestProfile.from_user(user).preferred_categories == {MUSIC, FOOD}

    def test_top_categories_weighted(self):
        profile = InterestProfile(user_id="u1")
        for _ in range(4):
            profile.apply_interaction(InteractionType.VIEW, MUSIC)
        profile.apply_interaction(InteractionType.PURCHASE, FOOD)
        profile.apply_interaction(InteractionType.LIKE, EventCategory.COMEDY)
        # food 5, music 4, comedy 3
        assert profile.top_categories() == [FOOD, MUSIC, EventCategory.COMEDY]
        assert profile.top_categories(limit=1) == [FOOD]

    def test_store_returns_copies(self, store):
        profile = store.update("u1", lambda p: None)
        profile.apply_interaction(InteractionType.LIKE, MUSIC)
        assert store.get("u1").total_interactions == 0

    def test_update_without_create_skips_missing_profile(self, store):
        assert store.update("ghost", lambda p: p.reset(), create=False) is None
        assert len(store) == 0

    def test_failed_mutation_leaves_profile_untouched(self, store):
        store.set_preferences("u1", {FOOD})

        def broken(profile):
            profile.preferred_categories = {MUSIC}
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            store.update("u1", broken)
        assert store.get("u1").preferred_categories == {FOOD}


class TestConcurrency:
    def test_parallel_likes_are_all_counted(self, recorder, store):
        threads_n, per_thread = 8, 250

        def worker():
            for i in range(per_thread):
                recorder.record("u1", f"e{i}", InteractionType.LIKE, MUSIC)

        threads = [threading.Thread(target=worker) for _ in range(threads_n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get("u1").counts_for(MUSIC).liked == threads_n * per_thread

    def test_users_do_not_interfere(self, recorder, store):
        def worker(user_id):
            for i in range(100):
                recorder.record(user_id, f"e{i}", InteractionType.VIEW, FOOD)

        threads = [threading.Thread(target=worker, args=(f"u{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(store.get(f"u{n}").counts_for(FOOD).viewed == 100 for n in range(4))

    def test_preferences_set_during_record_are_kept(self, recorder, store, monkeypatch):
        original_apply = InterestProfile.apply_interaction
        writers = []

        def apply_with_concurrent_writer(profile, *args, **kwargs):
            # Another thread changes preferences while the interaction is applied
            writer = threading.Thread(target=store.set_preferences, args=("u1", {MUSIC}))
            writer.start()
            writer.join(timeout=0.2)
            writers.append(writer)
            original_apply(profile, *args, **kwargs)

        monkeypatch.setattr(InterestProfile, "apply_interaction", apply_with_concurrent_writer)
        recorder.record("u1", "e1", InteractionType.LIKE, FOOD)
        for writer in writers:
            writer.join()

        profile = store.get("u1")
        assert profile.preferred_categories == {MUSIC}
        assert profile.counts_for(FOOD).liked == 1

    def test_lock_pool_is_bounded(self, store):
        recorder = InteractionRecorder(store, clock=lambda: NOW, lock_stripes=4)
        for n in range(100):
            recorder.record(f"user-{n}", "e1", InteractionType.VIEW, MUSIC)
        assert len(recorder._locks) == 4
        assert len(store) == 100
