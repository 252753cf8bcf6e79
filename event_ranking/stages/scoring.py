"""
Scoring engine — weighted sum of independent signal contributions.

score = max(0, sum(points for every fired signal))

Scoring one event never reads another event, so a batch can be scored in
any order (or in parallel by the caller).
"""

from datetime import datetime
from typing import List, Optional

from ..models.config import DEFAULT_CONFIG, RankingConfig
from ..models.event import Event
from ..models.profile import InterestProfile
from ..models.scoring import SignalContribution
from ..models.user import User, UserLocation
from .signals import SignalEvaluator


def total_points(contributions: List[SignalContribution]) -> float:
    """Sum contributions and clamp at 0."""
    return max(0.0, sum(c.points for c in contributions))


class ScoringEngine:
    """Computes a non-negative relevance score per (user, event)."""

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        evaluator: Optional[SignalEvaluator] = None,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.evaluator = evaluator if evaluator is not None else SignalEvaluator(self.config)

    def contributions(
        self,
        event: Event,
        user: User,
        profile: InterestProfile,
        user_location: Optional[UserLocation] = None,
        now: Optional[datetime] = None,
    ) -> List[SignalContribution]:
        """Per-signal breakdown behind score(); useful for debugging weights."""
        return self.evaluator.evaluate(event, user, profile, user_location, now)

    def score(
        self,
        event: Event,
        user: User,
        profile: InterestProfile,
        user_location: Optional[UserLocation] = None,
        now: Optional[datetime] = None,
    ) -> float:
        return total_points(self.contributions(event, user, profile, user_location, now))
