"""
Interaction recorder — folds view/like/purchase/share interactions into profiles.

The sole write entry point of the engine. Tracking must never block the user
action it annotates, so bad input is logged and ignored rather than raised.
Writes for the same user are serialized with a per-user lock taken from a
fixed pool of lock stripes, so lock memory stays bounded however many users
the engine sees. Each write is applied through ProfileStore.update().
"""

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional, Union

from ..models.event import EventCategory
from ..models.interaction import Interaction, InteractionType
from ..utils.dates import ensure_utc, utc_now
from .profile_store import ProfileStore

logger = logging.getLogger(__name__)

DEFAULT_LOCK_STRIPES = 64


def _coerce(enum_cls, value):
    """Enum member for value, or None when it is missing or unknown."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


class InteractionRecorder:
    def __init__(
        self,
        store: ProfileStore,
        clock: Optional[Callable[[], datetime]] = None,
        lock_stripes: int = DEFAULT_LOCK_STRIPES,
    ):
        self.store = store
        self._clock = clock or utc_now
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(max(1, lock_stripes))]

    def _lock_for(self, user_id: str) -> threading.Lock:
        return self._locks[hash(user_id) % len(self._locks)]

    def record(
        self,
        user_id: Optional[str],
        event_id: str,
        interaction_type: Union[InteractionType, str],
        category: Union[EventCategory, str, None],
        timestamp: Optional[datetime] = None,
    ) -> None:
        """Increment the (category, interaction_type) counter in the user's profile."""
        if not user_id:
            logger.debug("[recorder] SKIPPED_NO_USER event_id=%s", event_id)
            return
        kind = _coerce(InteractionType, interaction_type)
        if kind is None:
            logger.warning(
                "[recorder] UNKNOWN_INTERACTION_TYPE user_id=%s event_id=%s type=%r",
                user_id, event_id, interaction_type,
            )
            return
        cat = _coerce(EventCategory, category)
        if cat is None:
            logger.warning(
                "[recorder] UNKNOWN_CATEGORY user_id=%s event_id=%s category=%r",
                user_id, event_id, category,
            )
            return

        when = ensure_utc(timestamp) or self._clock()
        with self._lock_for(user_id):
            self.store.update(user_id, lambda p: p.apply_interaction(kind, cat, when))
        logger.debug(
            "[recorder] RECORDED user_id=%s event_id=%s type=%s category=%s",
            user_id, event_id, kind.value, cat.value,
        )

    def record_interaction(self, interaction: Interaction) -> None:
        self.record(
            interaction.user_id,
            interaction.event_id,
            interaction.type,
            interaction.category,
            interaction.timestamp,
        )

    def reset(self, user_id: str) -> None:
        """Clear all behavioral counters for a user."""
        if not user_id:
            return
        with self._lock_for(user_id):
            profile = self.store.update(user_id, lambda p: p.reset(), create=False)
        if profile is None:
            return
        logger.info("[recorder] PROFILE_RESET user_id=%s", user_id)
