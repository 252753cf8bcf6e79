"""
Deterministic ordering for scored events.

score desc → popularity desc → start asc → event id asc. The final key makes
the order total, which keeps pagination stable and tests reproducible.
"""

from typing import Tuple

from ...models.scoring import ScoredEvent


def ranking_key(scored: ScoredEvent) -> Tuple:
    event = scored.event
    return (-scored.score, -event.like_count, event.start, event.id)
