"""
Event ranking engine — deterministic, explainable event recommendations.

Single entry point for the package:
- models/: RankingConfig, Event, User, InterestProfile, ScoredEvent, Reason
- stages/: eligibility, signals, scoring, explanation, ranking, sections
- services/: profile store, interaction recorder, external source protocols
- engine: RecommendationEngine facade (rank / record)
"""

from .engine import RecommendationEngine
from .errors import InvalidLimitError, RankingError
from .models import (
    DEFAULT_CONFIG,
    AgeRestriction,
    Coordinate,
    Event,
    EventCategory,
    Interaction,
    InteractionType,
    InterestProfile,
    PricePreference,
    RankingConfig,
    Reason,
    ScoredEvent,
    Signal,
    User,
    UserLocation,
    Venue,
    load_config,
)
from .services import InMemoryProfileStore, InteractionRecorder
from .stages import (
    EligibilityFilter,
    ExplanationGenerator,
    FeedSection,
    Ranker,
    ScoringEngine,
    SignalEvaluator,
)

__all__ = [
    "DEFAULT_CONFIG",
    "AgeRestriction",
    "Coordinate",
    "EligibilityFilter",
    "Event",
    "EventCategory",
    "ExplanationGenerator",
    "FeedSection",
    "InMemoryProfileStore",
    "Interaction",
    "InteractionRecorder",
    "InteractionType",
    "InterestProfile",
    "InvalidLimitError",
    "PricePreference",
    "Ranker",
    "RankingConfig",
    "RankingError",
    "Reason",
    "RecommendationEngine",
    "ScoredEvent",
    "ScoringEngine",
    "Signal",
    "SignalEvaluator",
    "User",
    "UserLocation",
    "Venue",
    "load_config",
]
