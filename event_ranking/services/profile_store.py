"""
Profile store abstraction.

Holds interest profiles between requests. The engine owns profile contents;
where they are persisted is the caller's choice. The in-memory store is used
by tests and by callers that load/save profiles themselves.

Every change to a stored profile goes through update(), which applies the
change as one read-modify-write so concurrent writers never overwrite each
other with stale copies.
"""

import threading
from typing import Callable, Dict, Iterable, Optional, Protocol

from ..models.event import EventCategory
from ..models.profile import InterestProfile

ProfileMutation = Callable[[InterestProfile], None]


class ProfileStore(Protocol):
    """Protocol for interest profile read/write."""

    def get(self, user_id: str) -> Optional[InterestProfile]:
        """Return the profile for user_id, or None if none exists yet."""
        ...

    def update(
        self,
        user_id: str,
        mutate: ProfileMutation,
        create: bool = True,
    ) -> Optional[InterestProfile]:
        """
        Apply mutate to the stored profile atomically and return the result.

        A missing profile is created empty when create is True; otherwise
        nothing happens and None is returned.
        """
        ...


class InMemoryProfileStore:
    """
    Profile store backed by a dict.

    get() returns a copy, so callers ranking with a profile never observe a
    concurrent recorder write half-way through.
    """

    def __init__(self, confidence_saturation: float = 10.0):
        self._profiles: Dict[str, InterestProfile] = {}
        self._guard = threading.Lock()
        self._confidence_saturation = confidence_saturation

    def _new(self, user_id: str) -> InterestProfile:
        return InterestProfile(user_id=user_id, confidence_saturation=self._confidence_saturation)

    def get(self, user_id: str) -> Optional[InterestProfile]:
        with self._guard:
            profile = self._profiles.get(user_id)
            return profile.model_copy(deep=True) if profile is not None else None

    def update(
        self,
        user_id: str,
        mutate: ProfileMutation,
        create: bool = True,
    ) -> Optional[InterestProfile]:
        with self._guard:
            profile = self._profiles.get(user_id)
            if profile is None:
                if not create:
                    return None
                profile = self._new(user_id)
            # Mutate a copy: a failing mutation leaves the stored profile untouched.
            working = profile.model_copy(deep=True)
            mutate(working)
            self._profiles[user_id] = working
            return working.model_copy(deep=True)

    def set_preferences(self, user_id: str, categories: Iterable[EventCategory]) -> InterestProfile:
        """Replace the explicit category choices for a user (e.g. after onboarding)."""
        chosen = set(categories)

        def apply(profile: InterestProfile) -> None:
            profile.preferred_categories = set(chosen)

        return self.update(user_id, apply)

    def __len__(self) -> int:
        with self._guard:
            return len(self._profiles)
