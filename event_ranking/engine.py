"""
RecommendationEngine — facade wiring configuration, stages, and collaborators.

Exposes the two entry points UI/API layers use:
- rank(...): ordered, explained ScoredEvents (read)
- record(...): fold one interaction into the user's profile (write)

plus convenience wrappers that pull inputs from the injected sources
(recommend_for) and themed feed sections (browse).
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from .logging_setup import setup_logging
from .models.config import RankingConfig, load_config, resolve_config
from .models.event import Event, EventCategory
from .models.interaction import InteractionType
from .models.profile import InterestProfile
from .models.scoring import ScoredEvent
from .models.user import User, UserLocation
from .services.profile_store import InMemoryProfileStore, ProfileStore
from .services.recorder import InteractionRecorder
from .services.sources import EventSource, LocationProvider, UserSource
from .settings import EngineSettings, get_settings
from .stages.eligibility import EligibilityFilter
from .stages.explanation import ExplanationGenerator
from .stages.ranking import Ranker
from .stages.scoring import ScoringEngine
from .stages.sections import FeedSection, browse
from .stages.signals import SignalEvaluator
from .utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Event recommendation engine. Construct once, share across requests."""

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        profile_store: Optional[ProfileStore] = None,
        event_source: Optional[EventSource] = None,
        user_source: Optional[UserSource] = None,
        location_provider: Optional[LocationProvider] = None,
        clock: Optional[Callable[[], datetime]] = None,
        default_limit: int = 20,
    ):
        self.config = resolve_config(config)
        self.clock = clock or utc_now
        self.default_limit = default_limit

        evaluator = SignalEvaluator(self.config)
        self.eligibility = EligibilityFilter()
        self.scorer = ScoringEngine(self.config, evaluator)
        self.explainer = ExplanationGenerator(self.config, evaluator)
        self.ranker = Ranker(self.config, self.eligibility, self.scorer, self.explainer)

        self.profile_store = profile_store if profile_store is not None else InMemoryProfileStore(
            confidence_saturation=self.config.confidence_saturation
        )
        self.recorder = InteractionRecorder(self.profile_store, clock=self.clock)
        self.event_source = event_source
        self.user_source = user_source
        self.location_provider = location_provider

    @classmethod
    def from_settings(
        cls,
        settings: Optional[EngineSettings] = None,
        **kwargs,
    ) -> "RecommendationEngine":
        """Build an engine from environment settings (config file, log level, default limit)."""
        settings = settings or get_settings()
        setup_logging(settings.log_level)
        config = None
        if settings.ranking_config_path is not None:
            config = load_config(settings.ranking_config_path)
            logger.info("[engine] CONFIG_LOADED path=%s", settings.ranking_config_path)
        return cls(config=config, default_limit=settings.default_limit, **kwargs)

    def _now(self, now: Optional[datetime]) -> datetime:
        return ensure_utc(now) or self.clock()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def rank(
        self,
        events: List[Union[Dict[str, Any], Event]],
        user: Union[Dict[str, Any], User],
        profile: Optional[InterestProfile] = None,
        user_location: Optional[UserLocation] = None,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredEvent]:
        """Rank candidate events for a user. See Ranker.rank."""
        return self.ranker.rank(
            events,
            user,
            profile,
            user_location,
            self.default_limit if limit is None else limit,
            self._now(now),
        )

    def score(
        self,
        event: Event,
        user: User,
        profile: Optional[InterestProfile] = None,
        user_location: Optional[UserLocation] = None,
        now: Optional[datetime] = None,
    ) -> float:
        profile = profile or InterestProfile.from_user(user, self.config.confidence_saturation)
        return self.scorer.score(event, user, profile, user_location, self._now(now))

    def recommend_for(
        self,
        user_id: str,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredEvent]:
        """
        Rank using the injected sources: events from event_source, the user from
        user_source, the stored profile, and the location provider (if any).

        Unknown users get an empty list.
        """
        if self.event_source is None or self.user_source is None:
            raise RuntimeError("recommend_for requires an event_source and a user_source")
        user = self.user_source.get_user(user_id)
        if user is None:
            logger.info("[engine] UNKNOWN_USER user_id=%s", user_id)
            return []
        return self.rank(
            self.event_source.list_events(),
            user,
            self.profile_store.get(user_id),
            self._current_location(user_id),
            limit,
            now,
        )

    def browse(
        self,
        section: Union[FeedSection, str],
        events: List[Union[Dict[str, Any], Event]],
        user: Union[Dict[str, Any], User],
        profile: Optional[InterestProfile] = None,
        user_location: Optional[UserLocation] = None,
        limit: int = 10,
        now: Optional[datetime] = None,
    ) -> List[ScoredEvent]:
        """Events for one themed feed section (near you, free, this weekend, ...)."""
        return browse(
            self.ranker,
            FeedSection(section),
            events,
            user,
            profile,
            user_location,
            limit,
            self._now(now),
        )

    def _current_location(self, user_id: str) -> Optional[UserLocation]:
        if self.location_provider is None:
            return None
        return self.location_provider.current_location(user_id)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def record(
        self,
        user_id: Optional[str],
        event_id: str,
        interaction_type: Union[InteractionType, str],
        category: Union[EventCategory, str, None],
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Fold one interaction into the user's profile. Never raises on bad input."""
        self.recorder.record(user_id, event_id, interaction_type, category, timestamp)

    def reset_profile(self, user_id: str) -> None:
        self.recorder.reset(user_id)
