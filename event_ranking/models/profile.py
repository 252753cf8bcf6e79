"""
Interest profile — explicit preferences plus per-category behavioral counters.

Counters only grow through apply_interaction(); reset() is the single
operation that clears them.
"""

from datetime import datetime
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from .event import EventCategory
from .interaction import COUNTER_FIELD, InteractionType
from .user import User

# Per-type weights used to rank a user's strongest categories.
TOP_CATEGORY_WEIGHTS = {"purchased": 5.0, "liked": 3.0, "viewed": 1.0}


class CategoryCounts(BaseModel):
    viewed: int = Field(default=0, ge=0)
    liked: int = Field(default=0, ge=0)
    purchased: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.viewed + self.liked + self.purchased


class InterestProfile(BaseModel):
    """Aggregated interests for one user."""

    user_id: str
    preferred_categories: Set[EventCategory] = Field(default_factory=set)
    category_counts: Dict[EventCategory, CategoryCounts] = Field(default_factory=dict)
    last_updated: Optional[datetime] = None
    # confidence = total / (total + confidence_saturation)
    confidence_saturation: float = Field(default=10.0, gt=0)

    @classmethod
    def from_user(cls, user: User, confidence_saturation: float = 10.0) -> "InterestProfile":
        """Fresh profile carrying only the user's explicit category choices."""
        return cls(
            user_id=user.id,
            preferred_categories=set(user.preferred_categories),
            confidence_saturation=confidence_saturation,
        )

    def counts_for(self, category: EventCategory) -> CategoryCounts:
        """Counters for a category; zeros when the category was never seen."""
        return self.category_counts.get(category) or CategoryCounts()

    @property
    def total_interactions(self) -> int:
        return sum(c.total for c in self.category_counts.values())

    @property
    def confidence_score(self) -> float:
        total = self.total_interactions
        if total <= 0:
            return 0.0
        return total / (total + self.confidence_saturation)

    @property
    def is_new_user(self) -> bool:
        return not self.preferred_categories and self.total_interactions == 0

    def apply_interaction(
        self,
        interaction_type: InteractionType,
        category: EventCategory,
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Increment the counter for (category, interaction_type)."""
        counts = self.category_counts.setdefault(category, CategoryCounts())
        field = COUNTER_FIELD[interaction_type]
        setattr(counts, field, getattr(counts, field) + 1)
        if timestamp is not None and (self.last_updated is None or timestamp > self.last_updated):
            self.last_updated = timestamp

    def reset(self) -> None:
        """Clear all behavioral counters. Explicit preferences are kept."""
        self.category_counts = {}

    def top_categories(self, limit: int = 5) -> List[EventCategory]:
        """Categories ranked by weighted behavior (purchases > likes > views)."""
        weighted = []
        for category, counts in self.category_counts.items():
            score = sum(getattr(counts, f) * w for f, w in TOP_CATEGORY_WEIGHTS.items())
            if score > 0:
                weighted.append((score, category))
        weighted.sort(key=lambda item: (-item[0], item[1].value))
        return [category for _, category in weighted[:limit]]
