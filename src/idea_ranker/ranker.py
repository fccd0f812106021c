"""Idea Ranker - orchestrates the ranking pipeline.

Builds a fit profile from quiz answers, scores every candidate in the
library, and returns the top ideas. Also assembles the full results
bundle (confidence, wildcard, match chips) for a results page.
"""

import hashlib
import logging
from collections.abc import Mapping
from typing import Any, Optional

from .chips import MatchChipGenerator
from .config import RankerConfig, get_config
from .explainer import calculate_confidence, find_wildcard
from .library import check_library_invariants
from .profile import build_fit_profile
from .schema import (
    Candidate,
    CandidateScore,
    IdeaLibrary,
    IdeaRecommendation,
    RankedIdea,
    RankingResult,
)
from .scorer import FitScorer

logger = logging.getLogger(__name__)


class IdeaRanker:
    """Ranks a library of candidate ideas against quiz answers.

    The library is injected and treated as read-only, so one ranker can
    serve any number of independent requests.
    """

    def __init__(self, library: IdeaLibrary, config: Optional[RankerConfig] = None):
        """Initialize ranker.

        Raises:
            EmptyLibraryError: Library has no candidates.
            DuplicateCandidateError: Candidate ids are not unique.
        """
        check_library_invariants(library)
        self.library = library
        self.config = config or get_config()
        self.scorer = FitScorer()
        self.chips = MatchChipGenerator(library, self.config.match_chips)

    def rank(
        self,
        answers: Optional[Mapping[str, Any]],
        limit: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> RankingResult:
        """Rank the library for one set of answers.

        Args:
            answers: Raw quiz answers
            limit: Maximum ideas to return (default from config)
            seed: Optional seed that reshuffles tied scores deterministically

        Returns:
            Profile, ranked ideas (highest score first), winning track and id
        """
        cfg = self.config.ranking
        limit = max(1, limit if limit is not None else cfg.default_limit)
        profile = build_fit_profile(answers)

        scored = [
            self._to_ranked_idea(candidate, self.scorer.score_candidate(candidate, profile))
            for candidate in self.library.candidates
        ]

        # Stable sort: ties keep library order unless a seed is given
        if seed is None:
            scored.sort(key=lambda idea: -idea.score)
        else:
            scored.sort(key=lambda idea: (-idea.score, _tie_break(idea.id, seed)))

        ranked = scored[:limit]
        winner = ranked[0]

        logger.debug(
            "Ranked %d candidates; winner %s (%d) on track %s",
            len(scored), winner.id, winner.score, winner.track,
        )

        return RankingResult(
            profile=profile,
            ranked_ideas=ranked,
            fit_track=winner.track,
            winner_id=winner.id,
        )

    def recommend(
        self,
        answers: Optional[Mapping[str, Any]],
        limit: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> IdeaRecommendation:
        """Build everything a results page shows for one quiz submission.

        Ranks the full results window so the wildcard can come from ranks
        3 onward, then trims the returned ranking to the requested limit.
        """
        cfg = self.config.ranking
        limit = max(1, limit if limit is not None else cfg.default_limit)
        window = self.rank(answers, limit=max(limit, cfg.results_window), seed=seed)
        ideas = window.ranked_ideas

        top = ideas[0]
        runner_up = ideas[1] if len(ideas) > 1 else None
        confidence = calculate_confidence(
            top.score, runner_up.score if runner_up else 0, self.config.confidence_thresholds
        )

        wildcard = find_wildcard(ideas[2:], top.track)
        wildcard_rank = None
        wildcard_chips = []
        if wildcard is not None:
            wildcard_rank = next(i for i, idea in enumerate(ideas, 1) if idea.id == wildcard.id)
            wildcard_chips = self.chips.generate(window.profile, wildcard.id)

        return IdeaRecommendation(
            ranking=window.model_copy(update={"ranked_ideas": ideas[:limit]}),
            confidence=confidence,
            runner_up=runner_up,
            wildcard=wildcard,
            wildcard_rank=wildcard_rank,
            winner_chips=self.chips.generate(window.profile, top.id),
            runner_up_chips=self.chips.generate(window.profile, runner_up.id) if runner_up else [],
            wildcard_chips=wildcard_chips,
        )

    def _to_ranked_idea(self, candidate: Candidate, result: CandidateScore) -> RankedIdea:
        cfg = self.config.ranking
        reason = ". ".join(result.reasons[:cfg.reasons_per_idea]) or cfg.fallback_reason
        return RankedIdea(
            id=candidate.id,
            name=candidate.name,
            score=result.score,
            reason=reason,
            track=candidate.track_id or cfg.uncategorized_track,
            breakdown=result.breakdown,
        )


def _tie_break(candidate_id: str, seed: int) -> int:
    """Deterministic pseudo-random key for reshuffling ties."""
    digest = hashlib.sha256(f"{candidate_id}{seed}".encode("utf-8")).hexdigest()
    return int(digest[:16], 16)


def rank_ideas(
    answers: Optional[Mapping[str, Any]],
    library: IdeaLibrary,
    limit: Optional[int] = None,
    seed: Optional[int] = None,
) -> RankingResult:
    """Rank a library against quiz answers.

    Args:
        answers: Raw quiz answers
        library: Candidate ideas to rank
        limit: Maximum ideas to return (default 5)
        seed: Optional tie-shuffle seed

    Returns:
        RankingResult with profile, ranked ideas, fit track and winner id
    """
    return IdeaRanker(library).rank(answers, limit=limit, seed=seed)
