"""
Ranker Tests

Covers the read path for users with known interests: eligibility, scoring,
deterministic ordering, truncation and explanation of the returned slice.

Tie-break order:
----------------
score desc -> like_count desc -> start asc -> id asc

Run:
----
    pytest tests/test_ranking.py -v
"""

import logging
from datetime import date, timedelta
from unittest.mock import patch

import pytest

from conftest import NOW, make_event, make_user, profile_for
from event_ranking.errors import InvalidLimitError, RankingError
from event_ranking.models import AgeRestriction, EventCategory, RankingConfig, ScoredEvent
from event_ranking.stages import ExplanationGenerator, Ranker
from event_ranking.stages.ranking import is_cold_start, ranking_key


@pytest.fixture
def ranker():
    return Ranker(RankingConfig())


@pytest.fixture
def music_fan():
    return make_user(preferred_categories={EventCategory.MUSIC})


def ids(results):
    return [r.event_id for r in results]


class TestPreferenceRanking:
    def test_category_preference_ranks_first(self, ranker, music_fan):
        food = make_event("food", category=EventCategory.FOOD)
        music = make_event("music", category=EventCategory.MUSIC)
        results = ranker.rank([food, music], music_fan, now=NOW)

        assert ids(results) == ["music", "food"]
        assert results[0].score == 40
        assert results[1].score == 0
        assert [r.kind for r in results[0].reasons] == ["category_match"]
        assert results[1].reasons == []
        assert not results[0].cold_start

    def test_scores_never_negative(self, ranker, music_fan):
        events = [make_event(f"e{i}", category=c) for i, c in enumerate(EventCategory)]
        assert all(r.score >= 0 for r in ranker.rank(events, music_fan, now=NOW, limit=50))

    def test_behavior_alone_avoids_cold_start(self, ranker):
        user = make_user()
        profile = profile_for(user, food={"liked": 1})
        assert not is_cold_start(user, profile)
        results = ranker.rank(
            [make_event("m"), make_event("f", category=EventCategory.FOOD)],
            user, profile, now=NOW,
        )
        assert ids(results) == ["f", "m"]
        assert results[0].score == 25

    def test_accepts_dict_inputs(self, ranker):
        event = make_event("d").model_dump()
        user = {"id": "u1", "preferred_categories": ["music"]}
        results = ranker.rank([event], user, now=NOW)
        assert ids(results) == ["d"]
        assert results[0].score == 40


class TestLimit:
    def test_negative_limit_raises(self, ranker, music_fan):
        with pytest.raises(InvalidLimitError) as exc:
            ranker.rank([make_event()], music_fan, limit=-1, now=NOW)
        assert exc.value.limit == -1
        assert isinstance(exc.value, RankingError)
        assert isinstance(exc.value, ValueError)

    def test_negative_limit_raises_even_without_events(self, ranker, music_fan):
        with pytest.raises(InvalidLimitError):
            ranker.rank([], music_fan, limit=-5, now=NOW)

    def test_zero_limit_returns_empty(self, ranker, music_fan):
        assert ranker.rank([make_event()], music_fan, limit=0, now=NOW) == []

    def test_no_events_returns_empty(self, ranker, music_fan):
        assert ranker.rank([], music_fan, now=NOW) == []

    def test_truncates_to_limit(self, ranker, music_fan):
        events = [make_event(f"e{i}") for i in range(10)]
        assert len(ranker.rank(events, music_fan, limit=3, now=NOW)) == 3

    def test_limit_above_candidates_returns_all(self, ranker, music_fan):
        events = [make_event(f"e{i}") for i in range(3)]
        assert len(ranker.rank(events, music_fan, limit=100, now=NOW)) == 3

    def test_only_returned_slice_is_explained(self, music_fan):
        explainer = ExplanationGenerator(RankingConfig())
        ranker = Ranker(RankingConfig(), explainer=explainer)
        events = [make_event(f"e{i}") for i in range(6)]
        with patch.object(explainer, "explain", wraps=explainer.explain) as spy:
            ranker.rank(events, music_fan, limit=2, now=NOW)
        assert spy.call_count == 2


class TestTieBreak:
    def test_more_likes_first_on_equal_score(self, ranker, music_fan):
        quiet = make_event("quiet", like_count=5)
        busy = make_event("busy", like_count=40)
        assert ids(ranker.rank([quiet, busy], music_fan, now=NOW)) == ["busy", "quiet"]

    def test_earlier_start_first_on_equal_likes(self, ranker, music_fan):
        later = make_event("later", start=NOW + timedelta(days=21))
        sooner = make_event("sooner", start=NOW + timedelta(days=20))
        assert ids(ranker.rank([later, sooner], music_fan, now=NOW)) == ["sooner", "later"]

    def test_id_breaks_full_ties(self, ranker, music_fan):
        events = [make_event(i) for i in ("c", "a", "b")]
        assert ids(ranker.rank(events, music_fan, now=NOW)) == ["a", "b", "c"]

    def test_order_independent_of_input_order(self, ranker, music_fan):
        events = [
            make_event("a", like_count=10),
            make_event("b", category=EventCategory.FOOD, like_count=80),
            make_event("c", price=0),
            make_event("d", start=NOW + timedelta(days=2)),
        ]
        first = ids(ranker.rank(events, music_fan, now=NOW))
        second = ids(ranker.rank(list(reversed(events)), music_fan, now=NOW))
        assert first == second

    def test_ranking_key_is_total(self):
        a = ScoredEvent(event=make_event("a"), score=10)
        b = ScoredEvent(event=make_event("b"), score=10)
        assert ranking_key(a) < ranking_key(b)


class TestEligibilityInRanking:
    def test_restricted_event_never_returned(self, ranker, music_fan):
        adults = make_event("adults", age_restriction=AgeRestriction.EIGHTEEN, like_count=999)
        open_event = make_event("open")
        assert ids(ranker.rank([adults, open_event], music_fan, now=NOW)) == ["open"]

    def test_adult_user_sees_restricted_event(self, ranker):
        user = make_user(
            birth_date=date(1990, 5, 1), preferred_categories={EventCategory.MUSIC}
        )
        adults = make_event("adults", age_restriction=AgeRestriction.EIGHTEEN)
        assert ids(ranker.rank([adults], user, now=NOW)) == ["adults"]

    def test_all_excluded_logs_and_returns_empty(self, ranker, music_fan, caplog):
        adults = make_event("adults", age_restriction=AgeRestriction.TWENTY_ONE)
        with caplog.at_level(logging.INFO, logger="event_ranking.stages.ranking.core"):
            assert ranker.rank([adults], music_fan, now=NOW) == []
        assert "NO_ELIGIBLE_EVENTS" in caplog.text


class TestLogging:
    def test_rank_logs_summary(self, ranker, music_fan, caplog):
        with caplog.at_level(logging.INFO, logger="event_ranking.stages.ranking.core"):
            ranker.rank([make_event("a"), make_event("b")], music_fan, limit=1, now=NOW)
        assert "[rank] RANKED" in caplog.text
        assert "returned=1" in caplog.text
