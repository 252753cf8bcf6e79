"""
Date helpers — age, day counts, and weekend checks used by eligibility and scoring.
"""

from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware current time (default engine clock)."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so aware and naive inputs compare safely."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def age_on(birth_date: date, today: date) -> int:
    """Whole years between birth_date and today."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def days_between(earlier: datetime, later: datetime) -> float:
    """Fractional days from earlier to later (negative if later is before earlier)."""
    return (later - earlier).total_seconds() / 86400.0


def is_weekend(moment: datetime) -> bool:
    """True for Saturday or Sunday."""
    return moment.weekday() >= 5
