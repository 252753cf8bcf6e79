"""
Read-only collaborators the engine consumes but does not own.

- EventSource: current candidate events
- UserSource: user entities by id
- LocationProvider: the user's current approximate location (may be absent)

In-memory implementations back tests and simple deployments; production
callers plug in their own (database, cache, device location, ...).
"""

from typing import Dict, Iterable, List, Optional, Protocol

from ..models.event import Event
from ..models.user import User, UserLocation


class EventSource(Protocol):
    def list_events(self) -> List[Event]:
        """Return the current candidate event set."""
        ...


class UserSource(Protocol):
    def get_user(self, user_id: str) -> Optional[User]:
        """Return the user, or None if unknown."""
        ...


class LocationProvider(Protocol):
    def current_location(self, user_id: str) -> Optional[UserLocation]:
        """Return the user's current location, or None when unavailable."""
        ...


class InMemoryEventSource:
    def __init__(self, events: Iterable[Event] = ()):
        self._events = list(events)

    def list_events(self) -> List[Event]:
        return list(self._events)


class InMemoryUserSource:
    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[str, User] = {u.id: u for u in users}

    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)


class StaticLocationProvider:
    """Fixed user_id -> location mapping. Unknown users have no location."""

    def __init__(self, locations: Optional[Dict[str, UserLocation]] = None):
        self._locations = dict(locations or {})

    def current_location(self, user_id: str) -> Optional[UserLocation]:
        return self._locations.get(user_id)
