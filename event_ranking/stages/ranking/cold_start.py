"""
Cold-start ranking for users with no explicit preferences and no history.

Scores candidates with only the popular and upcoming-soon signals, then
selects a category-diverse first page: at most max_per_category events per
category within the first page_size slots.
"""

from typing import Dict, List

from ...models.event import EventCategory
from ...models.scoring import ScoredEvent, Signal

COLD_START_SIGNALS = frozenset({Signal.POPULAR, Signal.UPCOMING_SOON})


def select_with_category_cap(
    scored_list: List[ScoredEvent],
    k: int,
    max_per_category: int = 2,
    page_size: int = 10,
) -> List[ScoredEvent]:
    """
    Select up to k events with a per-category cap on the first page.

    Walks candidates in rank order. Inside the first min(k, page_size) slots
    a candidate is skipped once its category already holds max_per_category
    picks. When k exceeds page_size, skipped candidates follow the diverse
    selection in their original rank order. When k <= page_size they are
    dropped, so the result can be shorter than k (nine candidates spread over
    three categories with a cap of 2 yield 6).

    Args:
        scored_list: Candidates already sorted by ranking_key. Not mutated.
        k: Number to select.
        max_per_category: Hard cap per category in the first page.
        page_size: Number of leading slots the cap applies to.

    Returns:
        Ordered list of up to k ScoredEvents.
    """
    page_slots = min(k, page_size)
    selected: List[ScoredEvent] = []
    overflow: List[ScoredEvent] = []
    category_count: Dict[EventCategory, int] = {}

    for scored in scored_list:
        category = scored.event.category
        current = category_count.get(category, 0)
        if len(selected) >= page_slots or current >= max_per_category:
            overflow.append(scored)
            continue
        selected.append(scored)
        category_count[category] = current + 1

    if k > page_size:
        selected.extend(overflow[: k - len(selected)])
    return selected[:k]
