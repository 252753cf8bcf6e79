"""
Eligibility filter — the only hard exclusion in the pipeline.

Removes age-restricted events the user cannot provably attend. Runs once,
before scoring. Missing birth date fails closed: restricted events are
excluded rather than guessed.
"""

import logging
from datetime import date, datetime
from typing import List, Optional

from ..models.event import AgeRestriction, Event
from ..models.user import User
from ..utils.dates import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class EligibilityFilter:
    """Age-restriction filter. Stateless; safe to share across threads."""

    def can_access(self, event: Event, user: User, today: date) -> bool:
        """True if user may see the event on the given day."""
        if event.age_restriction == AgeRestriction.NONE:
            return True
        age = user.age_on(today)
        if age is None:
            return False
        return age >= int(event.age_restriction)

    def denial_reason(
        self,
        event: Event,
        user: User,
        now: Optional[datetime] = None,
    ) -> Optional[str]:
        """Display text explaining why the event is hidden, or None if it is visible."""
        today = (ensure_utc(now) or utc_now()).date()
        if self.can_access(event, user, today):
            return None
        restriction = event.age_restriction
        if user.birth_date is None:
            return (
                f"This event has an age restriction ({restriction.label}). "
                "Please add your date of birth to verify eligibility."
            )
        return (
            f"This event is restricted to ages {restriction.label}. "
            f"You must be at least {int(restriction)} years old."
        )

    def filter(
        self,
        events: List[Event],
        user: User,
        now: Optional[datetime] = None,
    ) -> List[Event]:
        """Return events the user is eligible to see, preserving input order."""
        today = (ensure_utc(now) or utc_now()).date()
        eligible = []
        for event in events:
            if self.can_access(event, user, today):
                eligible.append(event)
            else:
                logger.debug(
                    "[eligibility] EVENT_EXCLUDED event_id=%s restriction=%s has_birth_date=%s",
                    event.id, int(event.age_restriction), user.birth_date is not None,
                )
        return eligible
