"""
Ranking: eligibility, scoring or cold start, tie-break, truncation, explanation.

Public API: Ranker, ranking_key, select_with_category_cap.
- core: main orchestration (Ranker.rank).
- Submodules: cold_start, tie_break.
"""

from .cold_start import COLD_START_SIGNALS, select_with_category_cap
from .core import Ranker, is_cold_start, resolve_profile
from .tie_break import ranking_key

__all__ = [
    "COLD_START_SIGNALS",
    "Ranker",
    "is_cold_start",
    "ranking_key",
    "resolve_profile",
    "select_with_category_cap",
]
