"""Explainer - final stage of the ranking pipeline.

Derives the auxiliary data a results page shows next to the ranked list:
how confident we are in the top match, and a wildcard pick from a
different track for exploration.
"""

from typing import Optional, Sequence

from .config import ConfidenceThresholdsConfig, get_config
from .schema import ConfidenceAssessment, ConfidenceLevel, RankedIdea


def calculate_confidence(
    top_score: float,
    second_score: float,
    config: Optional[ConfidenceThresholdsConfig] = None,
) -> ConfidenceAssessment:
    """Classify the gap between the top two scores.

    Args:
        top_score: Score of the top-ranked idea
        second_score: Score of the runner-up (0 when there is none)
        config: Gap thresholds (defaults to the global config)

    Returns:
        Confidence level, gap and a user-facing explanation
    """
    cfg = config or get_config().confidence_thresholds
    gap = top_score - second_score

    if gap >= cfg.high_gap:
        return ConfidenceAssessment(
            level=ConfidenceLevel.HIGH,
            gap=gap,
            explanation=f"Clear winner by {gap:g} points - this idea stands out for your profile",
        )
    if gap >= cfg.medium_gap:
        return ConfidenceAssessment(
            level=ConfidenceLevel.MEDIUM,
            gap=gap,
            explanation=f"Good match with {gap:g} point lead - runner-up is also worth considering",
        )
    return ConfidenceAssessment(
        level=ConfidenceLevel.LOW,
        gap=gap,
        explanation=f"Close call with only {gap:g} point difference - consider both options carefully",
    )


def find_wildcard(ranked_ideas: Sequence[RankedIdea], top_track: str) -> Optional[RankedIdea]:
    """Return the highest-ranked idea from a track other than top_track.

    The input is already rank-ordered, so the first cross-track idea is
    the best wildcard.
    """
    for idea in ranked_ideas:
        if idea.track != top_track:
            return idea
    return None
