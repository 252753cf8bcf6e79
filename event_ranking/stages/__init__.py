"""Pipeline stages: eligibility, signal evaluation, scoring, explanation, ranking, sections."""

from .eligibility import EligibilityFilter
from .explanation import ExplanationGenerator
from .ranking import Ranker
from .scoring import ScoringEngine
from .sections import FeedSection, browse
from .signals import SignalEvaluator

__all__ = [
    "EligibilityFilter",
    "ExplanationGenerator",
    "FeedSection",
    "Ranker",
    "ScoringEngine",
    "SignalEvaluator",
    "browse",
]
