"""Shared utilities for distances and calendar math."""

from .dates import age_on, days_between, ensure_utc, is_weekend, utc_now
from .geo import haversine_km

__all__ = [
    "age_on",
    "days_between",
    "ensure_utc",
    "is_weekend",
    "utc_now",
    "haversine_km",
]
