"""IdeaFit ranking engine.

Maps quiz answers to a personalized, ranked list of startup ideas from a
curated library, with match chips, a confidence bucket and a wildcard pick.
"""

from .chips import generate_match_chips
from .explainer import calculate_confidence, find_wildcard
from .library import (
    DuplicateCandidateError,
    EmptyLibraryError,
    LibraryLoadError,
    load_library,
)
from .profile import build_fit_profile
from .ranker import IdeaRanker, rank_ideas
from .scorer import score_candidate

__version__ = "1.0.0"

__all__ = [
    "DuplicateCandidateError",
    "EmptyLibraryError",
    "IdeaRanker",
    "LibraryLoadError",
    "build_fit_profile",
    "calculate_confidence",
    "find_wildcard",
    "generate_match_chips",
    "load_library",
    "rank_ideas",
    "score_candidate",
]
