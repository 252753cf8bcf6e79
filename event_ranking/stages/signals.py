"""
Signal evaluation shared by scoring and explanation.

Each signal is an independent trigger with a configured weight. The scoring
engine sums the contributions; the explanation generator turns the positive
ones into reasons. Both call the same evaluator, so a reason can only be
emitted for a signal that actually contributed to the score.

The single dependent signal is the too-far penalty, which only applies when
neither same-city nor nearby fired.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Collection, List, Optional

from ..models.config import DEFAULT_CONFIG, RankingConfig
from ..models.event import Event
from ..models.profile import InterestProfile
from ..models.reasons import (
    CategoryMatchReason,
    FollowedOrganizerReason,
    FreeEventReason,
    HappeningNowReason,
    HighRatingReason,
    LikedBeforeReason,
    NearbyReason,
    PopularReason,
    PriceMatchReason,
    PurchasedBeforeReason,
    RecentlyAddedReason,
    SameCityReason,
    UpcomingSoonReason,
    ViewedOftenReason,
    WeekendReason,
    WellReviewedReason,
)
from ..models.scoring import Signal, SignalContribution
from ..models.user import PricePreference, User, UserLocation
from ..utils.dates import days_between, ensure_utc, is_weekend, utc_now
from ..utils.geo import haversine_km


@dataclass(frozen=True)
class ProximityContext:
    """Resolved user position for one request. Both parts may be missing."""

    city: Optional[str]
    distance_km: Optional[float]
    radius_km: float


def resolve_location(
    user: User,
    user_location: Optional[UserLocation],
    now: datetime,
    config: RankingConfig,
) -> Optional[UserLocation]:
    """
    Location to use for proximity signals.

    An explicitly supplied location (from a location provider) wins over the
    user's stored one. Stale locations are ignored.
    """
    for candidate in (user_location, user.location):
        if candidate is None:
            continue
        if candidate.is_stale(now, config.location_max_age_hours):
            continue
        return candidate
    return None


def _same_city(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return a.strip().casefold() == b.strip().casefold()


class SignalEvaluator:
    """Evaluates every scoring signal for one (user, event) pair."""

    def __init__(self, config: Optional[RankingConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def proximity(
        self,
        event: Event,
        user: User,
        user_location: Optional[UserLocation],
        now: datetime,
    ) -> ProximityContext:
        radius = user.max_travel_distance_km or self.config.default_max_radius_km
        location = resolve_location(user, user_location, now, self.config)
        if location is None:
            return ProximityContext(city=None, distance_km=None, radius_km=radius)
        distance = None
        venue_coord = event.venue.coordinate
        if location.coordinate is not None and venue_coord is not None:
            distance = haversine_km(
                location.coordinate.latitude,
                location.coordinate.longitude,
                venue_coord.latitude,
                venue_coord.longitude,
            )
        return ProximityContext(city=location.city, distance_km=distance, radius_km=radius)

    def evaluate(
        self,
        event: Event,
        user: User,
        profile: InterestProfile,
        user_location: Optional[UserLocation] = None,
        now: Optional[datetime] = None,
        only: Optional[Collection[Signal]] = None,
    ) -> List[SignalContribution]:
        """
        Return the contributions of every signal that fired, in declaration order.

        only: restrict evaluation to these signals (used by cold start).
        Signals with zero points are omitted.
        """
        now = ensure_utc(now) or utc_now()
        cfg = self.config
        hits: List[SignalContribution] = []

        def wanted(signal: Signal) -> bool:
            return only is None or signal in only

        def add(signal: Signal, points: float, reason=None) -> None:
            if points != 0:
                hits.append(SignalContribution(signal=signal, points=points, reason=reason))

        # --- Interests: explicit preferences and behavioral history ---
        category = event.category
        counts = profile.counts_for(category)
        if wanted(Signal.CATEGORY_MATCH) and (
            category in profile.preferred_categories or category in user.preferred_categories
        ):
            add(Signal.CATEGORY_MATCH, cfg.weight_category_match,
                CategoryMatchReason(category=category))
        if wanted(Signal.PURCHASE_HISTORY) and counts.purchased >= 1:
            add(Signal.PURCHASE_HISTORY, cfg.weight_purchase_history,
                PurchasedBeforeReason(category=category))
        if wanted(Signal.LIKE_HISTORY) and counts.liked >= 1:
            add(Signal.LIKE_HISTORY, cfg.weight_like_history,
                LikedBeforeReason(category=category))
        if wanted(Signal.VIEW_HISTORY) and counts.viewed >= cfg.view_history_min_count:
            add(Signal.VIEW_HISTORY, cfg.weight_view_history,
                ViewedOftenReason(category=category))
        if wanted(Signal.FOLLOWED_ORGANIZER) and event.organizer_id and (
            event.organizer_id in user.followed_organizer_ids
        ):
            add(Signal.FOLLOWED_ORGANIZER, cfg.weight_followed_organizer,
                FollowedOrganizerReason(organizer_name=event.organizer_name))

        # --- Time ---
        if wanted(Signal.HAPPENING_NOW) and event.is_happening_at(now):
            add(Signal.HAPPENING_NOW, cfg.weight_happening_now, HappeningNowReason())

        # --- Location ---
        if any(wanted(s) for s in (Signal.SAME_CITY, Signal.NEARBY, Signal.TOO_FAR)):
            self._add_proximity(event, user, user_location, now, wanted, add)

        # --- Time (continued) ---
        days_until = days_between(now, event.start)
        if wanted(Signal.UPCOMING_SOON) and 0 <= days_until <= cfg.upcoming_window_days:
            add(Signal.UPCOMING_SOON, cfg.weight_upcoming_soon,
                UpcomingSoonReason(days_until=int(days_until)))

        # --- Popularity ---
        if wanted(Signal.POPULAR) and event.like_count > cfg.popularity_threshold:
            add(Signal.POPULAR, cfg.weight_popular, PopularReason(like_count=event.like_count))

        if wanted(Signal.WEEKEND) and is_weekend(event.start):
            add(Signal.WEEKEND, cfg.weight_weekend, WeekendReason())

        # --- Price ---
        if wanted(Signal.PRICE_MATCH) and self._price_matches(event, user):
            add(Signal.PRICE_MATCH, cfg.weight_price_match,
                PriceMatchReason(tier=user.price_preference.value))

        # --- Quality ---
        rating = event.rating
        high_rating = rating is not None and rating >= cfg.high_rating_threshold
        if wanted(Signal.HIGH_RATING) and high_rating:
            add(Signal.HIGH_RATING, cfg.weight_high_rating, HighRatingReason(rating=rating))
        if wanted(Signal.WELL_REVIEWED) and high_rating and (
            event.rating_count >= cfg.well_reviewed_min_ratings
        ):
            add(Signal.WELL_REVIEWED, cfg.weight_well_reviewed,
                WellReviewedReason(rating_count=event.rating_count))

        if wanted(Signal.FREE_EVENT) and event.is_free:
            add(Signal.FREE_EVENT, cfg.weight_free_event, FreeEventReason())

        # --- Recency ---
        if wanted(Signal.RECENTLY_ADDED) and event.created_at is not None:
            age = now - event.created_at
            if timedelta(0) <= age <= timedelta(days=cfg.recently_added_days):
                add(Signal.RECENTLY_ADDED, cfg.weight_recently_added, RecentlyAddedReason())

        return hits

    def _add_proximity(self, event, user, user_location, now, wanted, add) -> None:
        """Same city, nearby (linear falloff), or the too-far penalty."""
        cfg = self.config
        ctx = self.proximity(event, user, user_location, now)
        same_city = _same_city(ctx.city, event.venue.city)
        if same_city:
            if wanted(Signal.SAME_CITY):
                add(Signal.SAME_CITY, cfg.weight_same_city, SameCityReason(city=event.venue.city))
            return
        if ctx.distance_km is None:
            return
        if ctx.distance_km <= ctx.radius_km:
            if wanted(Signal.NEARBY):
                points = cfg.weight_nearby * (1.0 - ctx.distance_km / ctx.radius_km)
                add(Signal.NEARBY, points, NearbyReason(distance_km=round(ctx.distance_km, 1)))
        elif wanted(Signal.TOO_FAR):
            add(Signal.TOO_FAR, cfg.weight_too_far)

    def _price_matches(self, event: Event, user: User) -> bool:
        tier = user.price_preference
        if tier is None or tier == PricePreference.ANY:
            return False
        band = self.config.price_band(tier.value)
        if band is None:
            return False
        low, high = band
        return event.price >= low and (high is None or event.price <= high)
