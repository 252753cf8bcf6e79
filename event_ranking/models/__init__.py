"""Data models for the event ranking engine."""

from .config import DEFAULT_CONFIG, RankingConfig, load_config, resolve_config
from .event import AgeRestriction, Coordinate, Event, EventCategory, Venue, ensure_events
from .interaction import Interaction, InteractionType
from .profile import CategoryCounts, InterestProfile
from .reasons import FALLBACK_REASON_TEXT, Reason
from .scoring import ScoredEvent, Signal, SignalContribution
from .user import PricePreference, User, UserLocation, ensure_user

__all__ = [
    "DEFAULT_CONFIG",
    "FALLBACK_REASON_TEXT",
    "AgeRestriction",
    "CategoryCounts",
    "Coordinate",
    "Event",
    "EventCategory",
    "Interaction",
    "InteractionType",
    "InterestProfile",
    "PricePreference",
    "RankingConfig",
    "Reason",
    "ScoredEvent",
    "Signal",
    "SignalContribution",
    "User",
    "UserLocation",
    "Venue",
    "ensure_events",
    "ensure_user",
    "load_config",
    "resolve_config",
]
