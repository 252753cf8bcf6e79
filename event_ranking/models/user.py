"""
User model — the read-only user entity as supplied by the user source.

Age is always computed from birth_date at the time of the request; it is
never stored.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import age_on, ensure_utc
from .event import Coordinate, EventCategory


class PricePreference(str, Enum):
    FREE = "free"
    BUDGET = "budget"
    MODERATE = "moderate"
    PREMIUM = "premium"
    ANY = "any"


class UserLocation(BaseModel):
    """Approximate user location. Any part may be missing."""

    city: Optional[str] = None
    coordinate: Optional[Coordinate] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)

    def is_stale(self, now: datetime, max_age_hours: Optional[float]) -> bool:
        """True when updated_at is older than max_age_hours. Undated locations are never stale."""
        if max_age_hours is None or self.updated_at is None:
            return False
        return now - self.updated_at > timedelta(hours=max_age_hours)


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    birth_date: Optional[date] = None
    location: Optional[UserLocation] = None
    preferred_categories: Set[EventCategory] = Field(default_factory=set)
    preferred_event_types: List[str] = Field(default_factory=list)
    max_travel_distance_km: Optional[float] = Field(default=None, gt=0)
    price_preference: Optional[PricePreference] = None
    followed_organizer_ids: Set[str] = Field(default_factory=set)
    viewed_event_ids: Set[str] = Field(default_factory=set)
    liked_event_ids: Set[str] = Field(default_factory=set)
    purchased_event_ids: Set[str] = Field(default_factory=set)

    def age_on(self, today: date) -> Optional[int]:
        """Age in whole years on the given day, or None without a birth date."""
        if self.birth_date is None:
            return None
        return age_on(self.birth_date, today)


def ensure_user(user: Union[Dict[str, Any], "User"]) -> "User":
    return User.model_validate(user) if isinstance(user, dict) else user
