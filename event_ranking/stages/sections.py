"""
Feed sections — themed event lists shown alongside the main "for you" feed.

Every section applies the eligibility filter first and orders ties with the
same key as the ranker, so section output is deterministic too.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from ..errors import InvalidLimitError
from ..models.event import Event, ensure_events
from ..models.profile import InterestProfile
from ..models.scoring import ScoredEvent
from ..models.user import User, UserLocation, ensure_user
from ..utils.dates import ensure_utc, is_weekend, utc_now
from .ranking.core import Ranker, resolve_profile
from .ranking.tie_break import ranking_key
from .signals import resolve_location


class FeedSection(str, Enum):
    FOR_YOU = "for_you"
    BASED_ON_INTERESTS = "based_on_interests"
    NEAR_YOU = "near_you"
    POPULAR_NOW = "popular_now"
    HAPPENING_NOW = "happening_now"
    FREE_EVENTS = "free_events"
    THIS_WEEKEND = "this_weekend"

    @property
    def heading(self) -> str:
        return _SECTION_HEADINGS[self]


_SECTION_HEADINGS = {
    FeedSection.FOR_YOU: "Recommended for You",
    FeedSection.BASED_ON_INTERESTS: "Based on Your Interests",
    FeedSection.NEAR_YOU: "Events Near You",
    FeedSection.POPULAR_NOW: "Popular Right Now",
    FeedSection.HAPPENING_NOW: "Happening Now",
    FeedSection.FREE_EVENTS: "Free Events",
    FeedSection.THIS_WEEKEND: "This Weekend",
}


def _default_order(events: List[Event]) -> List[Event]:
    """Popularity desc, then start asc, then id (ranking_key at equal score)."""
    return sorted(events, key=lambda e: ranking_key(ScoredEvent(event=e, score=0.0)))


def browse(
    ranker: Ranker,
    section: FeedSection,
    events: List[Event],
    user: User,
    profile: Optional[InterestProfile],
    user_location: Optional[UserLocation],
    limit: int,
    now: datetime,
) -> List[ScoredEvent]:
    """
    Events for one feed section.

    for_you and based_on_interests are scored by the ranker; the other
    sections filter events that have not ended yet, use a fixed ordering and
    carry score 0.
    """
    if limit < 0:
        raise InvalidLimitError(limit)
    now = ensure_utc(now) or utc_now()
    if section == FeedSection.FOR_YOU:
        return ranker.rank(events, user, profile, user_location, limit, now)

    events = ensure_events(events)
    user = ensure_user(user)
    profile = resolve_profile(user, profile, ranker.config)
    eligible = ranker.eligibility.filter(events, user, now)

    if section == FeedSection.BASED_ON_INTERESTS:
        categories = profile.top_categories(limit=5) or sorted(
            profile.preferred_categories | user.preferred_categories, key=lambda c: c.value
        )
        if not categories:
            return ranker.rank(eligible, user, profile, user_location, limit, now)
        matching = [e for e in eligible if e.category in categories]
        return ranker.rank(matching, user, profile, user_location, limit, now)

    # Filter sections list upcoming or ongoing events only.
    eligible = [e for e in eligible if e.end >= now]

    if section == FeedSection.NEAR_YOU:
        picked = _near_you(ranker, eligible, user, user_location, now)
    elif section == FeedSection.POPULAR_NOW:
        picked = _default_order(eligible)
    elif section == FeedSection.HAPPENING_NOW:
        picked = _default_order([e for e in eligible if e.is_happening_at(now)])
    elif section == FeedSection.FREE_EVENTS:
        picked = _default_order([e for e in eligible if e.is_free])
    elif section == FeedSection.THIS_WEEKEND:
        picked = _default_order([e for e in eligible if is_weekend(e.start)])
    else:
        raise ValueError(f"Unknown feed section: {section!r}")
    return [ScoredEvent(event=e, score=0.0) for e in picked[:limit]]


def _near_you(
    ranker: Ranker,
    events: List[Event],
    user: User,
    user_location: Optional[UserLocation],
    now: datetime,
) -> List[Event]:
    """Closest first when a coordinate is known, else same-city events, else nothing."""
    location = resolve_location(user, user_location, now, ranker.config)
    if location is None:
        return []
    evaluator = ranker.explainer.evaluator
    if location.coordinate is not None:
        with_distance = []
        for event in events:
            ctx = evaluator.proximity(event, user, location, now)
            if ctx.distance_km is not None:
                with_distance.append((ctx.distance_km, event.id, event))
        with_distance.sort(key=lambda item: (item[0], item[1]))
        return [event for _, _, event in with_distance]
    if location.city:
        city = location.city.strip().casefold()
        return _default_order(
            [e for e in events if e.venue.city and e.venue.city.strip().casefold() == city]
        )
    return []
