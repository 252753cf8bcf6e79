"""
Interaction model — a single user interaction (view, like, purchase, share) with an event.

Consumed by the interaction recorder and folded into the interest profile;
the raw interaction is not retained afterwards.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from ..utils.dates import ensure_utc
from .event import EventCategory


class InteractionType(str, Enum):
    VIEW = "view"
    LIKE = "like"
    PURCHASE = "purchase"
    SHARE = "share"


# Counter field incremented per interaction type. Share counts as a view.
COUNTER_FIELD = {
    InteractionType.VIEW: "viewed",
    InteractionType.LIKE: "liked",
    InteractionType.PURCHASE: "purchased",
    InteractionType.SHARE: "viewed",
}


class Interaction(BaseModel):
    """
    user_id: interacting user; interactions without one are ignored.
    category: category of the event interacted with; None is ignored.
    """

    user_id: Optional[str] = None
    event_id: str = ""
    type: InteractionType
    category: Optional[EventCategory] = None
    timestamp: Optional[datetime] = None

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)
