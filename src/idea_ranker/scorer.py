"""Fit Scorer - second stage of the ranking pipeline.

Scores one candidate idea against a fit profile.
Produces an integer score with reasons and a per-factor breakdown.
"""

from .factors import FactorOutcome, evaluate_factors
from .schema import (
    Candidate,
    CandidateScore,
    FactorScore,
    FitProfile,
    ScoreBreakdown,
)


class FitScorer:
    """Scores candidates against a fit profile.

    Scoring principles:
    - Six independent factors are summed; the maximum is 100
    - A factor adds a reason only when it beats its baseline branch
    - Missing candidate data lands in the lowest branch, never raises
    - Scores are a relative ranking signal, not a probability
    """

    def score_candidate(self, candidate: Candidate, profile: FitProfile) -> CandidateScore:
        """Score a single candidate.

        Args:
            candidate: Idea from the library
            profile: Normalized fit profile

        Returns:
            Score, ordered reasons and breakdown
        """
        outcomes = evaluate_factors(candidate, profile)

        total = sum(o.points for o in outcomes)
        reasons = [o.reason for o in outcomes if o.reason]

        return CandidateScore(
            score=total,
            reasons=reasons,
            breakdown=ScoreBreakdown(
                factors=[self._to_factor_score(o) for o in outcomes],
                total=total,
            ),
        )

    def _to_factor_score(self, outcome: FactorOutcome) -> FactorScore:
        return FactorScore(
            factor=outcome.factor,
            points=outcome.points,
            max_points=outcome.max_points,
            reason=outcome.reason,
        )


_scorer = FitScorer()


def score_candidate(candidate: Candidate, profile: FitProfile) -> CandidateScore:
    """Score one candidate against one profile."""
    return _scorer.score_candidate(candidate, profile)
