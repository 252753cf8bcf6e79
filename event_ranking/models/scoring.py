"""
Scoring model — signals, per-signal contributions, and ScoredEvent.

Contains:
- Signal: the closed set of scoring signals
- SignalContribution: points one signal added for one (user, event) pair
- ScoredEvent: an event with its score and ordered reasons (ranking output)
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .event import Event
from .reasons import FALLBACK_REASON_TEXT, Reason


class Signal(str, Enum):
    CATEGORY_MATCH = "category_match"
    PURCHASE_HISTORY = "purchase_history"
    LIKE_HISTORY = "like_history"
    VIEW_HISTORY = "view_history"
    FOLLOWED_ORGANIZER = "followed_organizer"
    HAPPENING_NOW = "happening_now"
    SAME_CITY = "same_city"
    NEARBY = "nearby"
    UPCOMING_SOON = "upcoming_soon"
    POPULAR = "popular"
    WEEKEND = "weekend"
    PRICE_MATCH = "price_match"
    HIGH_RATING = "high_rating"
    WELL_REVIEWED = "well_reviewed"
    FREE_EVENT = "free_event"
    RECENTLY_ADDED = "recently_added"
    TOO_FAR = "too_far"


class SignalContribution(BaseModel):
    """Points a fired signal contributed. reason is None for penalties."""

    signal: Signal
    points: float
    reason: Optional[Reason] = None


class ScoredEvent(BaseModel):
    """An event with its relevance score and display reasons."""

    event: Event
    score: float = Field(ge=0)
    reasons: List[Reason] = Field(default_factory=list)
    cold_start: bool = False

    @property
    def event_id(self) -> str:
        return self.event.id

    @property
    def primary_reason(self) -> str:
        """Display text of the strongest reason, or the generic fallback."""
        return self.reasons[0].display_text() if self.reasons else FALLBACK_REASON_TEXT
