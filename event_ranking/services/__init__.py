"""Stateful collaborators: profile storage, interaction recording, external sources."""

from .profile_store import InMemoryProfileStore, ProfileStore
from .recorder import InteractionRecorder
from .sources import (
    EventSource,
    InMemoryEventSource,
    InMemoryUserSource,
    LocationProvider,
    StaticLocationProvider,
    UserSource,
)

__all__ = [
    "EventSource",
    "InMemoryEventSource",
    "InMemoryProfileStore",
    "InMemoryUserSource",
    "InteractionRecorder",
    "LocationProvider",
    "ProfileStore",
    "StaticLocationProvider",
    "UserSource",
]
