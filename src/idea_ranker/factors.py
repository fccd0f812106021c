"""Fit factors shared by the scorer and the match-chip generator.

Each factor is a pure function of (candidate, profile) returning a
FactorOutcome: the points earned, and when the factor beat its baseline
branch, a reason for the ranked list and a short label for match chips.
Both consumers read these outcomes, so a rule only ever lives here.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from .schema import (
    Candidate,
    FitFactor,
    FitProfile,
    PricingModel,
    RevenueGoal,
    SupportTolerance,
    TechComfort,
    TimeWeekly,
)

PRICE_PATTERN = re.compile(r"\$(\d+)")


@dataclass(frozen=True)
class FactorOutcome:
    """Result of evaluating one factor."""
    factor: FitFactor
    points: int
    max_points: int
    reason: Optional[str] = None
    chip_label: Optional[str] = None

    @property
    def satisfied(self) -> bool:
        """True when the factor scored above its baseline branch."""
        return self.reason is not None


def extract_price(pricing_range: str) -> Optional[int]:
    """Parse the first $<number> token from a pricing range string."""
    match = PRICE_PATTERN.search(pricing_range or "")
    return int(match.group(1)) if match else None


def time_fit(candidate: Candidate, profile: FitProfile) -> FactorOutcome:
    """Build time against weekly hours (max 20)."""
    build_time = candidate.build_time
    weekly = profile.time_weekly

    if weekly == TimeWeekly.LIGHT and build_time is not None and build_time <= 30:
        return FactorOutcome(FitFactor.TIME, 20, 20, "Quick to build with limited time", "Quick build")
    if weekly == TimeWeekly.PART_TIME and build_time is not None and build_time <= 45:
        return FactorOutcome(FitFactor.TIME, 15, 20, "Fits your time commitment", "Fits your schedule")
    if weekly in (TimeWeekly.SERIOUS, TimeWeekly.FULL_TIME):
        # Enough hours regardless of build time
        return FactorOutcome(FitFactor.TIME, 10, 20, "You have enough time for this", "Time to spare")
    return FactorOutcome(FitFactor.TIME, 0, 20)


def tech_fit(candidate: Candidate, profile: FitProfile) -> FactorOutcome:
    """Tech comfort against the candidate's track (max 20)."""
    track = (candidate.track_id or "").lower()
    comfort = profile.tech_comfort

    if comfort == TechComfort.DEV:
        if "extension" in track or "tool" in track:
            return FactorOutcome(FitFactor.TECH, 20, 20, "Matches your dev skills", "Dev-friendly")
        return FactorOutcome(FitFactor.TECH, 15, 20)
    if comfort in (TechComfort.NOCODE, TechComfort.SOME):
        if "widget" in track or "smb" in track:
            return FactorOutcome(
                FitFactor.TECH, 15, 20,
                "Can be built with no-code or minimal code", "Low-code friendly",
            )
        return FactorOutcome(FitFactor.TECH, 10, 20)
    return FactorOutcome(FitFactor.TECH, 5, 20)


SUPPORT_CHIP_LABELS = {
    SupportTolerance.NONE: "No support needed",
    SupportTolerance.LOW: "Low support",
}


def support_fit(candidate: Candidate, profile: FitProfile) -> FactorOutcome:
    """Support tolerance against the pricing model (max 15)."""
    tolerance = profile.support_tolerance

    if tolerance in (SupportTolerance.NONE, SupportTolerance.LOW):
        if candidate.pricing_model == PricingModel.ONE_TIME:
            return FactorOutcome(
                FitFactor.SUPPORT, 15, 15,
                "Low support requirements match your preference", SUPPORT_CHIP_LABELS[tolerance],
            )
        return FactorOutcome(FitFactor.SUPPORT, 5, 15)
    return FactorOutcome(FitFactor.SUPPORT, 10, 15)


def audience_fit(candidate: Candidate, profile: FitProfile) -> FactorOutcome:
    """Audience access against the candidate's target audience (max 20)."""
    audience = (candidate.audience or "").lower()
    access = profile.audience_access

    if "smb" in access and "small business" in audience:
        return FactorOutcome(
            FitFactor.AUDIENCE, 20, 20, "You have access to the target audience", "Audience access",
        )
    if "developers" in access and "knowledge worker" in audience:
        return FactorOutcome(
            FitFactor.AUDIENCE, 15, 20, "Your network includes the target users", "Network fit",
        )
    if "none" in access:
        return FactorOutcome(FitFactor.AUDIENCE, 5, 20)
    return FactorOutcome(FitFactor.AUDIENCE, 10, 20)


def revenue_fit(candidate: Candidate, profile: FitProfile) -> FactorOutcome:
    """Revenue goal against price point and pricing model (max 15)."""
    price = extract_price(candidate.pricing_range)
    goal = profile.revenue_goal

    if goal == RevenueGoal.SIDE and price is not None and price <= 50:
        return FactorOutcome(
            FitFactor.REVENUE, 15, 15, "Price point suits side income goals", "Side-income pricing",
        )
    if goal == RevenueGoal.RAMEN and price is not None and 20 <= price <= 100:
        return FactorOutcome(
            FitFactor.REVENUE, 15, 15, "Good fit for sustainable indie income", "Indie income fit",
        )
    if goal in (RevenueGoal.SALARY, RevenueGoal.SCALE):
        if candidate.pricing_model == PricingModel.SUBSCRIPTION:
            return FactorOutcome(
                FitFactor.REVENUE, 15, 15,
                "Recurring revenue supports your income goal", "Recurring revenue",
            )
        return FactorOutcome(FitFactor.REVENUE, 10, 15)
    return FactorOutcome(FitFactor.REVENUE, 5, 15)


def completeness_fit(candidate: Candidate, profile: FitProfile) -> FactorOutcome:
    """Bonus for well-researched candidates (max 10)."""
    competitors = len(candidate.competitors)
    quotes = len(candidate.voc_quotes)

    if competitors >= 3 and quotes >= 3:
        return FactorOutcome(
            FitFactor.COMPLETENESS, 10, 10, "Well-researched with validation data", "Validated demand",
        )
    if competitors >= 2:
        return FactorOutcome(FitFactor.COMPLETENESS, 5, 10)
    return FactorOutcome(FitFactor.COMPLETENESS, 0, 10)


# Evaluation order matters: reasons are reported in this order
FACTORS: tuple[Callable[[Candidate, FitProfile], FactorOutcome], ...] = (
    time_fit,
    tech_fit,
    support_fit,
    audience_fit,
    revenue_fit,
    completeness_fit,
)


def evaluate_factors(candidate: Candidate, profile: FitProfile) -> list[FactorOutcome]:
    """Evaluate every factor for a (candidate, profile) pair."""
    return [factor(candidate, profile) for factor in FACTORS]
