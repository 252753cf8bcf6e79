"""
Explanation generator — ordered, human-readable reasons for a recommendation.

Re-evaluates the same triggers the scoring engine used (never the score
formula itself) and keeps the positive ones, strongest first, capped at
config.max_reasons. An empty list is a valid result: callers render the
generic "Suggested for you" fallback.
"""

from datetime import datetime
from typing import Collection, List, Optional

from ..models.config import DEFAULT_CONFIG, RankingConfig
from ..models.event import Event
from ..models.profile import InterestProfile
from ..models.reasons import Reason
from ..models.scoring import Signal, SignalContribution
from ..models.user import User, UserLocation
from .signals import SignalEvaluator


def reasons_from(contributions: List[SignalContribution], max_reasons: int) -> List[Reason]:
    """Positive contributions with a reason, highest points first (stable on ties)."""
    positive = [c for c in contributions if c.points > 0 and c.reason is not None]
    positive.sort(key=lambda c: c.points, reverse=True)
    return [c.reason for c in positive[:max_reasons]]


class ExplanationGenerator:
    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        evaluator: Optional[SignalEvaluator] = None,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.evaluator = evaluator if evaluator is not None else SignalEvaluator(self.config)

    def explain(
        self,
        event: Event,
        user: User,
        profile: InterestProfile,
        user_location: Optional[UserLocation] = None,
        score: Optional[float] = None,
        now: Optional[datetime] = None,
        signals: Optional[Collection[Signal]] = None,
    ) -> List[Reason]:
        """
        Reasons for one event.

        score: the already computed score. An event whose total clamped to 0
        carries no justification, so it gets no reasons.
        signals: restrict to these signals (cold start explains only the
        signals it scored with).
        """
        if score is not None and score <= 0:
            return []
        contributions = self.evaluator.evaluate(
            event, user, profile, user_location, now, only=signals
        )
        return reasons_from(contributions, self.config.max_reasons)
