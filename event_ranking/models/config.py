"""
Ranking configuration — signal weights, proximity, temporal windows, cold start.

RankingConfig defaults are defined here. Callers may pass a dict (e.g. from
config.json); from_dict() flattens its nested groups and merges them with
these defaults. Components receive the config at construction time.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, Field, model_validator

# Maps nested config.json groups/keys to flat RankingConfig fields.
_WEIGHT_KEYS = (
    "category_match",
    "purchase_history",
    "like_history",
    "view_history",
    "followed_organizer",
    "happening_now",
    "same_city",
    "nearby",
    "upcoming_soon",
    "popular",
    "weekend",
    "price_match",
    "high_rating",
    "well_reviewed",
    "free_event",
    "recently_added",
    "too_far",
)

_GROUP_KEYS = {
    "proximity": {
        "default_max_radius_km": "default_max_radius_km",
        "location_max_age_hours": "location_max_age_hours",
    },
    "temporal": {
        "upcoming_window_days": "upcoming_window_days",
        "recently_added_days": "recently_added_days",
    },
    "quality": {
        "popularity_threshold": "popularity_threshold",
        "high_rating_threshold": "high_rating_threshold",
        "well_reviewed_min_ratings": "well_reviewed_min_ratings",
        "view_history_min_count": "view_history_min_count",
    },
    "cold_start": {
        "max_per_category": "cold_start_max_per_category",
        "page_size": "cold_start_page_size",
    },
    "explanation": {
        "max_reasons": "max_reasons",
    },
    "confidence": {
        "saturation": "confidence_saturation",
    },
}

DEFAULT_PRICE_BANDS: Dict[str, Tuple[float, Optional[float]]] = {
    "free": (0.0, 0.0),
    "budget": (0.0, 50_000.0),
    "moderate": (50_000.0, 150_000.0),
    "premium": (150_000.0, None),
}


class RankingConfig(BaseModel):
    """Configuration for the event ranking engine."""

    # -------------------------------------------------------------------------
    # Signal weights (points added to the score when the signal fires)
    # -------------------------------------------------------------------------

    # Event category is one of the user's explicitly chosen categories.
    weight_category_match: float = 40.0
    # User purchased at least one ticket in this category before.
    weight_purchase_history: float = 35.0
    # User liked at least one event in this category before.
    weight_like_history: float = 25.0
    # User viewed at least view_history_min_count events in this category.
    weight_view_history: float = 10.0
    # Event organizer is followed by the user.
    weight_followed_organizer: float = 30.0
    # Now is within [start, end].
    weight_happening_now: float = 25.0
    # Venue city equals the user's known city.
    weight_same_city: float = 20.0
    # Maximum nearby bonus; scaled by (1 - distance / radius).
    weight_nearby: float = 15.0
    # Event starts within upcoming_window_days.
    weight_upcoming_soon: float = 15.0
    # Popularity counter exceeds popularity_threshold.
    weight_popular: float = 10.0
    # Event starts on a Saturday or Sunday.
    weight_weekend: float = 10.0
    # Price falls inside the user's price-preference band.
    weight_price_match: float = 8.0
    # Rating >= high_rating_threshold.
    weight_high_rating: float = 5.0
    # High rating backed by at least well_reviewed_min_ratings ratings.
    weight_well_reviewed: float = 3.0
    # Price is exactly 0.
    weight_free_event: float = 5.0
    # Event was created within recently_added_days.
    weight_recently_added: float = 5.0
    # Penalty when the venue is beyond the travel radius (must be <= 0).
    weight_too_far: float = -10.0

    # -------------------------------------------------------------------------
    # Proximity
    # -------------------------------------------------------------------------

    # Radius used when the user has no max travel distance.
    default_max_radius_km: float = Field(default=50.0, gt=0)
    # User locations older than this are ignored. None disables the check.
    location_max_age_hours: Optional[float] = Field(default=24.0, gt=0)

    # -------------------------------------------------------------------------
    # Temporal windows
    # -------------------------------------------------------------------------

    upcoming_window_days: int = Field(default=7, ge=0)
    recently_added_days: int = Field(default=7, ge=0)

    # -------------------------------------------------------------------------
    # Quality / popularity thresholds
    # -------------------------------------------------------------------------

    # Popular fires when like_count is strictly greater than this.
    popularity_threshold: int = Field(default=50, ge=0)
    high_rating_threshold: float = Field(default=4.0, ge=0, le=5)
    well_reviewed_min_ratings: int = Field(default=20, ge=1)
    view_history_min_count: int = Field(default=3, ge=1)

    # -------------------------------------------------------------------------
    # Cold start
    # -------------------------------------------------------------------------

    # Hard cap per category inside the first cold-start page.
    cold_start_max_per_category: int = Field(default=2, ge=1)
    # Number of leading slots the per-category cap applies to.
    cold_start_page_size: int = Field(default=10, ge=1)

    # -------------------------------------------------------------------------
    # Explanations and confidence
    # -------------------------------------------------------------------------

    max_reasons: int = Field(default=4, ge=0)
    # confidence = total / (total + saturation); 0.5 at total == saturation.
    confidence_saturation: float = Field(default=10.0, gt=0)

    # Inclusive price bands per price preference; None upper bound = unbounded.
    price_bands: Dict[str, Tuple[float, Optional[float]]] = Field(
        default_factory=lambda: dict(DEFAULT_PRICE_BANDS)
    )

    @model_validator(mode="after")
    def check_penalty_and_bands(self):
        if self.weight_too_far > 0:
            raise ValueError(f"weight_too_far must be <= 0, got {self.weight_too_far}")
        for tier, (low, high) in self.price_bands.items():
            if low < 0:
                raise ValueError(f"Price band {tier!r} has a negative lower bound")
            if high is not None and high < low:
                raise ValueError(f"Price band {tier!r} upper bound is below its lower bound")
        return self

    def price_band(self, tier: str) -> Optional[Tuple[float, Optional[float]]]:
        """Band for a price preference value, or None when the tier has no band ("any")."""
        return self.price_bands.get(tier)

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RankingConfig":
        """Create config from a dictionary (e.g., loaded from config.json)."""
        flat = {}
        weights = config_dict.get("weights", {})
        for key in _WEIGHT_KEYS:
            if key in weights:
                flat[f"weight_{key}"] = weights[key]
        for group, mapping in _GROUP_KEYS.items():
            values = config_dict.get(group, {})
            for src, dest in mapping.items():
                if src in values:
                    flat[dest] = values[src]
        if "price_bands" in config_dict:
            flat["price_bands"] = {
                tier: (band.get("min", 0.0), band.get("max"))
                if isinstance(band, dict) else tuple(band)
                for tier, band in config_dict["price_bands"].items()
            }
        # Flat keys are accepted as-is so a dumped config round-trips. Keys
        # already converted from a nested group (price_bands) are not overwritten.
        allowed = set(cls.model_fields)
        flat.update({k: v for k, v in config_dict.items() if k in allowed and k not in flat})
        return cls.model_validate(flat)


DEFAULT_CONFIG = RankingConfig()


def resolve_config(config: Optional["RankingConfig"]) -> "RankingConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG


def load_config(path: Union[Path, str]) -> RankingConfig:
    """Load a RankingConfig from a JSON file."""
    with open(path) as f:
        return RankingConfig.from_dict(json.load(f))
