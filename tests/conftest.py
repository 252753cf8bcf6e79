"""
Shared fixtures for the ranking engine tests.

NOW is a fixed Wednesday (2026-10-14 12:00 UTC). Default events start on a
Tuesday 20 days later, were created 30 days ago, cost 20,000 and have no
likes or ratings, so they trigger no signal unless a test overrides a field.
"""

from datetime import datetime, timedelta, timezone

import pytest

from event_ranking.models import (
    Coordinate,
    Event,
    EventCategory,
    InterestProfile,
    RankingConfig,
    User,
    UserLocation,
    Venue,
)

NOW = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)

KAMPALA = Coordinate(latitude=0.3476, longitude=32.5825)
MUKONO = Coordinate(latitude=0.3533, longitude=32.7553)  # ~19 km from Kampala
JINJA = Coordinate(latitude=0.4244, longitude=33.2042)  # ~70 km from Kampala


def make_event(event_id: str = "e1", **overrides) -> Event:
    start = overrides.pop("start", NOW + timedelta(days=20))
    data = {
        "id": event_id,
        "title": f"Event {event_id}",
        "category": EventCategory.MUSIC,
        "start": start,
        "end": overrides.pop("end", start + timedelta(hours=3)),
        "venue": Venue(name="Hall", city="Kampala", coordinate=KAMPALA),
        "price": 20_000,
        "like_count": 0,
        "created_at": NOW - timedelta(days=30),
    }
    data.update(overrides)
    return Event(**data)


def make_user(user_id: str = "u1", **overrides) -> User:
    return User(id=user_id, **overrides)


def located(city: str = "Kampala", coordinate: Coordinate = KAMPALA, hours_ago: float = 1) -> UserLocation:
    return UserLocation(city=city, coordinate=coordinate, updated_at=NOW - timedelta(hours=hours_ago))


def profile_for(user: User, **counts) -> InterestProfile:
    """Profile seeded from the user plus {category: {"viewed": n, ...}} counters."""
    profile = InterestProfile.from_user(user)
    for category, values in counts.items():
        cat = EventCategory(category)
        profile.category_counts[cat] = profile.counts_for(cat).model_copy(update=values)
    return profile


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return RankingConfig()
