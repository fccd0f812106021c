"""Match-chip generation for "Why this matches you" displays.

Chips are short tags derived from the same factor outcomes the scorer
uses, plus personalization answers (interests, things to avoid,
distribution comfort) that never affect the numeric score.
"""

from typing import Optional

from .config import MatchChipConfig, get_config
from .factors import evaluate_factors
from .schema import Candidate, ChipType, FitProfile, IdeaLibrary, MatchChip

DISTRIBUTION_LABELS = {
    "seo": "SEO/Content",
    "communities": "Community-driven",
    "ads": "Paid ads",
    "partnerships": "Partnerships",
}

QUIT_REASON_LABELS = {
    "motivation": "Quick wins",
    "stuck": "Tech-friendly",
    "no_users": "Built-in distribution",
    "time": "Time-efficient",
    "never": "Ship-focused",
}

INTEREST_THEME_LABELS = {
    "money": "Finance/Money",
    "health": "Health/Fitness",
    "career": "Productivity",
    "tech": "Tech/Dev tools",
    "gaming": "Gaming",
    "shopping": "Shopping/Deals",
    "home": "Home/DIY",
    "learning": "Learning",
    "travel": "Travel",
}

AVOID_LABELS = {
    "calls": "No calls/demos",
    "social": "No social media",
    "support": "No heavy support",
    "content": "No SEO/content",
    "ads": "No paid ads",
    "community": "No community building",
    "integrations": "No complex integrations",
}


class MatchChipGenerator:
    """Generates match chips for candidates in one library."""

    def __init__(self, library: IdeaLibrary, config: Optional[MatchChipConfig] = None):
        self.library = library
        self.config = config or get_config().match_chips

    def generate(self, profile: FitProfile, candidate_id: str) -> list[MatchChip]:
        """Generate chips for a candidate; unknown ids yield no chips."""
        candidate = self.library.get_candidate(candidate_id)
        if candidate is None:
            return []

        matches = self._factor_chips(candidate, profile)
        matches.extend(self._personalization_chips(candidate, profile))
        avoided = self._avoided_chips(candidate, profile)

        # Avoided chips are never crowded out by match chips
        room = max(0, self.config.max_chips - len(avoided))
        return (_dedupe(matches)[:room] + avoided)[:self.config.max_chips]

    def _factor_chips(self, candidate: Candidate, profile: FitProfile) -> list[MatchChip]:
        return [
            MatchChip(label=outcome.chip_label, type=ChipType.MATCH)
            for outcome in evaluate_factors(candidate, profile)
            if outcome.satisfied and outcome.chip_label
        ]

    def _personalization_chips(self, candidate: Candidate, profile: FitProfile) -> list[MatchChip]:
        chips = []

        comfort = profile.distribution_comfort
        if comfort in DISTRIBUTION_LABELS and candidate.distribution_type == comfort:
            chips.append(MatchChip(label=DISTRIBUTION_LABELS[comfort], type=ChipType.MATCH))

        if self._quit_reason_matches(candidate, profile):
            chips.append(MatchChip(label=QUIT_REASON_LABELS[profile.quit_reason], type=ChipType.MATCH))

        theme_count = 0
        for theme in profile.interest_themes:
            if theme == "none" or theme not in INTEREST_THEME_LABELS:
                continue
            if theme_count >= self.config.max_theme_chips:
                break
            if theme in candidate.interest_tags:
                chips.append(MatchChip(label=INTEREST_THEME_LABELS[theme], type=ChipType.MATCH))
                theme_count += 1

        return chips

    def _quit_reason_matches(self, candidate: Candidate, profile: FitProfile) -> bool:
        reason = profile.quit_reason
        if reason == "motivation":
            days = candidate.timebox_days if candidate.timebox_days is not None else 14
            return days <= self.config.motivation_max_days
        if reason == "no_users":
            # Extensions ship with store distribution
            return "extension" in (candidate.track_id or "").lower()
        return reason == "never"

    def _avoided_chips(self, candidate: Candidate, profile: FitProfile) -> list[MatchChip]:
        chips = []
        for avoid in profile.avoid_list:
            if avoid == "none" or avoid not in AVOID_LABELS:
                continue
            if len(chips) >= self.config.max_avoided_chips:
                break
            if avoid in candidate.avoid_tags:
                chips.append(MatchChip(label=AVOID_LABELS[avoid], type=ChipType.AVOIDED))
        return chips


def _dedupe(chips: list[MatchChip]) -> list[MatchChip]:
    seen = set()
    unique = []
    for chip in chips:
        if chip.label not in seen:
            seen.add(chip.label)
            unique.append(chip)
    return unique


def generate_match_chips(
    profile: FitProfile,
    candidate_id: str,
    library: IdeaLibrary,
    config: Optional[MatchChipConfig] = None,
) -> list[MatchChip]:
    """Generate match chips for one candidate.

    Args:
        profile: Normalized fit profile
        candidate_id: Candidate to explain
        library: Library the candidate belongs to
        config: Chip limits (defaults to the global config)

    Returns:
        Ordered chips: matches first, then avoided
    """
    return MatchChipGenerator(library, config).generate(profile, candidate_id)
