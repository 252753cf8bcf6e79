"""
Recommendation reasons — a closed set of tagged variants.

Each variant carries exactly the parameters its display text needs. The
`kind` field is the discriminator, so a list of reasons round-trips through
model_dump()/model_validate() without losing its variant types.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .event import EventCategory


class CategoryMatchReason(BaseModel):
    kind: Literal["category_match"] = "category_match"
    category: EventCategory

    def display_text(self) -> str:
        return f"Matches your {self.category.label} interests"


class PurchasedBeforeReason(BaseModel):
    kind: Literal["purchased_before"] = "purchased_before"
    category: EventCategory

    def display_text(self) -> str:
        return "Similar to events you've attended"


class LikedBeforeReason(BaseModel):
    kind: Literal["liked_before"] = "liked_before"
    category: EventCategory

    def display_text(self) -> str:
        return f"Based on {self.category.label} events you liked"


class ViewedOftenReason(BaseModel):
    kind: Literal["viewed_often"] = "viewed_often"
    category: EventCategory

    def display_text(self) -> str:
        return f"You often browse {self.category.label}"


class FollowedOrganizerReason(BaseModel):
    kind: Literal["followed_organizer"] = "followed_organizer"
    organizer_name: Optional[str] = None

    def display_text(self) -> str:
        if self.organizer_name:
            return f"From {self.organizer_name} (organizer you follow)"
        return "From an organizer you follow"


class HappeningNowReason(BaseModel):
    kind: Literal["happening_now"] = "happening_now"

    def display_text(self) -> str:
        return "Happening right now!"


class SameCityReason(BaseModel):
    kind: Literal["same_city"] = "same_city"
    city: str

    def display_text(self) -> str:
        return f"In {self.city}"


class NearbyReason(BaseModel):
    kind: Literal["nearby"] = "nearby"
    distance_km: float

    def display_text(self) -> str:
        if self.distance_km < 1:
            return "Less than 1km away"
        return f"Only {int(self.distance_km)}km away"


class UpcomingSoonReason(BaseModel):
    kind: Literal["upcoming_soon"] = "upcoming_soon"
    days_until: int

    def display_text(self) -> str:
        if self.days_until == 0:
            return "Today"
        if self.days_until == 1:
            return "Tomorrow"
        return f"In {self.days_until} days"


class PopularReason(BaseModel):
    kind: Literal["popular"] = "popular"
    like_count: int

    def display_text(self) -> str:
        return f"Popular event ({self.like_count} likes)"


class WeekendReason(BaseModel):
    kind: Literal["weekend"] = "weekend"

    def display_text(self) -> str:
        return "This weekend"


class PriceMatchReason(BaseModel):
    kind: Literal["price_match"] = "price_match"
    tier: str

    def display_text(self) -> str:
        return "Matches your price preference"


class HighRatingReason(BaseModel):
    kind: Literal["high_rating"] = "high_rating"
    rating: float

    def display_text(self) -> str:
        return f"Highly rated ({self.rating:.1f}⭐)"


class WellReviewedReason(BaseModel):
    kind: Literal["well_reviewed"] = "well_reviewed"
    rating_count: int

    def display_text(self) -> str:
        return f"Reviewed by {self.rating_count} attendees"


class FreeEventReason(BaseModel):
    kind: Literal["free_event"] = "free_event"

    def display_text(self) -> str:
        return "Free event"


class RecentlyAddedReason(BaseModel):
    kind: Literal["recently_added"] = "recently_added"

    def display_text(self) -> str:
        return "Just added"


Reason = Annotated[
    Union[
        CategoryMatchReason,
        PurchasedBeforeReason,
        LikedBeforeReason,
        ViewedOftenReason,
        FollowedOrganizerReason,
        HappeningNowReason,
        SameCityReason,
        NearbyReason,
        UpcomingSoonReason,
        PopularReason,
        WeekendReason,
        PriceMatchReason,
        HighRatingReason,
        WellReviewedReason,
        FreeEventReason,
        RecentlyAddedReason,
    ],
    Field(discriminator="kind"),
]

FALLBACK_REASON_TEXT = "Suggested for you"
