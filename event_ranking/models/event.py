"""
Event model — typed, read-only representation of a candidate event.

Used by eligibility, scoring, explanation, and ranking instead of raw dicts.
Built from event-source dicts via Event.model_validate(d).
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.dates import ensure_utc


class EventCategory(str, Enum):
    """Closed set of event categories."""

    MUSIC = "music"
    ARTS_CULTURE = "arts_culture"
    CONCERTS = "concerts"
    SPORTS_WELLNESS = "sports_wellness"
    TECHNOLOGY = "technology"
    FUNDRAISING = "fundraising"
    COMEDY = "comedy"
    POETRY = "poetry"
    DRAMA = "drama"
    EXHIBITIONS = "exhibitions"
    NETWORKING = "networking"
    EDUCATION = "education"
    FOOD = "food"
    NIGHTLIFE = "nightlife"
    FESTIVALS = "festivals"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    EventCategory.MUSIC: "Music",
    EventCategory.ARTS_CULTURE: "Arts & Culture",
    EventCategory.CONCERTS: "Concerts",
    EventCategory.SPORTS_WELLNESS: "Sports & Wellness",
    EventCategory.TECHNOLOGY: "Technology",
    EventCategory.FUNDRAISING: "Fundraising",
    EventCategory.COMEDY: "Comedy",
    EventCategory.POETRY: "Poetry",
    EventCategory.DRAMA: "Drama",
    EventCategory.EXHIBITIONS: "Exhibitions",
    EventCategory.NETWORKING: "Networking",
    EventCategory.EDUCATION: "Education",
    EventCategory.FOOD: "Food & Drinks",
    EventCategory.NIGHTLIFE: "Nightlife",
    EventCategory.FESTIVALS: "Festivals",
    EventCategory.OTHER: "Other",
}


class AgeRestriction(IntEnum):
    """Minimum attendee age; NONE means all ages."""

    NONE = 0
    THIRTEEN = 13
    SIXTEEN = 16
    EIGHTEEN = 18
    TWENTY_ONE = 21

    @property
    def label(self) -> str:
        return "All Ages" if self is AgeRestriction.NONE else f"{int(self)}+"


class Coordinate(BaseModel):
    """WGS84 latitude/longitude pair."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class Venue(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = ""
    city: Optional[str] = None
    coordinate: Optional[Coordinate] = None


class Event(BaseModel):
    """
    Event payload consumed by the ranking pipeline.

    like_count is the popularity counter used by the popular signal and the
    tie-break. rating/rating_count are optional (events without ratings never
    trigger rating signals).
    """

    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = ""
    category: EventCategory
    start: datetime
    end: datetime
    venue: Venue = Field(default_factory=Venue)
    price: float = Field(default=0.0, ge=0)
    like_count: int = Field(default=0, ge=0)
    age_restriction: AgeRestriction = AgeRestriction.NONE
    created_at: Optional[datetime] = None
    organizer_id: Optional[str] = None
    organizer_name: Optional[str] = None
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    rating_count: int = Field(default=0, ge=0)

    @field_validator("start", "end", "created_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end < self.start:
            raise ValueError(f"Event {self.id} ends before it starts")
        return self

    @property
    def popularity(self) -> int:
        return self.like_count

    @property
    def is_free(self) -> bool:
        return self.price == 0

    def is_happening_at(self, now: datetime) -> bool:
        return self.start <= now <= self.end


def ensure_events(events: List[Union[Dict[str, Any], "Event"]]) -> List["Event"]:
    """Convert list of dicts or Events to list of Event models for use in the pipeline."""
    return [
        Event.model_validate(e) if isinstance(e, dict) else e
        for e in events
    ]
