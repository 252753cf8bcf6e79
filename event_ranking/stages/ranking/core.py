"""
Main ranking orchestration: eligibility, then full scoring or cold start.

Explanations are generated only for the truncated slice returned to the
caller. Submodules used: cold_start, tie_break.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ...errors import InvalidLimitError
from ...models.config import RankingConfig, resolve_config
from ...models.event import Event, ensure_events
from ...models.profile import InterestProfile
from ...models.scoring import ScoredEvent
from ...models.user import User, UserLocation, ensure_user
from ...utils.dates import ensure_utc, utc_now
from ..eligibility import EligibilityFilter
from ..explanation import ExplanationGenerator
from ..scoring import ScoringEngine, total_points
from ..signals import SignalEvaluator
from .cold_start import COLD_START_SIGNALS, select_with_category_cap
from .tie_break import ranking_key

logger = logging.getLogger(__name__)


def resolve_profile(
    user: User,
    profile: Optional[InterestProfile],
    config: RankingConfig,
) -> InterestProfile:
    """Return the given profile, or a fresh one built from the user's explicit choices."""
    if profile is not None:
        return profile
    return InterestProfile.from_user(user, config.confidence_saturation)


def is_cold_start(user: User, profile: InterestProfile) -> bool:
    """New user on both sides: no stated categories and no recorded behavior."""
    return profile.is_new_user and not user.preferred_categories


class Ranker:
    """Orders eligible candidates for a user; the sole read entry point of the engine."""

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        eligibility: Optional[EligibilityFilter] = None,
        scorer: Optional[ScoringEngine] = None,
        explainer: Optional[ExplanationGenerator] = None,
    ):
        self.config = resolve_config(config)
        evaluator = SignalEvaluator(self.config)
        self.eligibility = eligibility if eligibility is not None else EligibilityFilter()
        self.scorer = scorer if scorer is not None else ScoringEngine(self.config, evaluator)
        self.explainer = (
            explainer if explainer is not None else ExplanationGenerator(self.config, evaluator)
        )

    def rank(
        self,
        events: List[Union[Dict[str, Any], Event]],
        user: Union[Dict[str, Any], User],
        profile: Optional[InterestProfile] = None,
        user_location: Optional[UserLocation] = None,
        limit: int = 20,
        now: Optional[datetime] = None,
    ) -> List[ScoredEvent]:
        """
        Rank candidate events for a user.

        Returns at most `limit` ScoredEvents ordered by score (desc) with the
        deterministic tie-break. New users get the cold-start ordering.

        Raises:
            InvalidLimitError: limit is negative (checked before any work).
        """
        if limit < 0:
            raise InvalidLimitError(limit)
        if limit == 0 or not events:
            return []

        # 1) Normalize inputs and resolve the profile
        now = ensure_utc(now) or utc_now()
        events_typed = ensure_events(events)
        user = ensure_user(user)
        profile = resolve_profile(user, profile, self.config)

        # 2) Hard exclusion
        eligible = self.eligibility.filter(events_typed, user, now)
        if not eligible:
            logger.info(
                "[rank] NO_ELIGIBLE_EVENTS user_id=%s candidates=%d", user.id, len(events_typed)
            )
            return []

        # 3) Cold start or full scoring
        if is_cold_start(user, profile):
            return self._rank_cold_start(eligible, user, profile, user_location, limit, now)

        scored = [
            ScoredEvent(
                event=event,
                score=self.scorer.score(event, user, profile, user_location, now),
            )
            for event in eligible
        ]
        scored.sort(key=ranking_key)
        top = scored[:limit]

        # 4) Explain only what is returned
        for item in top:
            item.reasons = self.explainer.explain(
                item.event, user, profile, user_location, score=item.score, now=now
            )

        logger.info(
            "[rank] RANKED user_id=%s candidates=%d eligible=%d returned=%d confidence=%.2f",
            user.id, len(events_typed), len(eligible), len(top), profile.confidence_score,
        )
        return top

    def _rank_cold_start(
        self,
        eligible: List[Event],
        user: User,
        profile: InterestProfile,
        user_location: Optional[UserLocation],
        limit: int,
        now: datetime,
    ) -> List[ScoredEvent]:
        """Popular + upcoming-soon scoring with a per-category cap on the first page."""
        logger.info(
            "[cold_start] COLD_START_TRIGGERED user_id=%s candidates=%d", user.id, len(eligible)
        )
        evaluator = self.explainer.evaluator
        scored = []
        for event in eligible:
            hits = evaluator.evaluate(
                event, user, profile, user_location, now, only=COLD_START_SIGNALS
            )
            scored.append(ScoredEvent(event=event, score=total_points(hits), cold_start=True))
        scored.sort(key=ranking_key)

        selected = select_with_category_cap(
            scored,
            k=limit,
            max_per_category=self.config.cold_start_max_per_category,
            page_size=self.config.cold_start_page_size,
        )
        for item in selected:
            item.reasons = self.explainer.explain(
                item.event, user, profile, user_location,
                score=item.score, now=now, signals=COLD_START_SIGNALS,
            )
        return selected
