"""Pydantic models for the IdeaFit ranking engine.

Input schemas for quiz answers and the idea library, and output schemas
for ranked ideas, match chips and confidence.
These schemas match the library.json format produced by the ingestion scripts.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Raw answers as submitted by the quiz client: question id -> token(s)
QuizAnswers = dict[str, Union[str, list[str]]]


# =============================================================================
# Profile Enums
# =============================================================================


class TimeWeekly(str, Enum):
    """Weekly hours the user can spend building."""
    LIGHT = "2-5"
    PART_TIME = "6-10"
    SERIOUS = "11-20"
    FULL_TIME = "20+"


class TechComfort(str, Enum):
    """Comfort with code or no-code tooling."""
    NONE = "none"
    NOCODE = "nocode"
    SOME = "some"
    DEV = "dev"


class SupportTolerance(str, Enum):
    """How much customer support the user is willing to do."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RevenueGoal(str, Enum):
    """Monthly revenue goal for the next six months."""
    SIDE = "side"  # $500-1k/mo
    RAMEN = "ramen"  # $2-5k/mo
    SALARY = "salary"  # $5-10k/mo
    SCALE = "scale"  # $10k+/mo


class BuildPreference(str, Enum):
    """How the user prefers to build."""
    SOLO = "solo"
    AI = "ai"
    FREELANCE = "freelance"
    COFOUNDER = "cofounder"


class RiskTolerance(str, Enum):
    """Risk tolerance for launching."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PricingModel(str, Enum):
    """Monetization model of a candidate idea."""
    ONE_TIME = "one-time"
    SUBSCRIPTION = "subscription"

    @classmethod
    def from_string(cls, value: Optional[str]) -> Optional["PricingModel"]:
        """Parse pricing model from string (tolerates spacing and case)."""
        if not value:
            return None
        mapping = {
            "one-time": cls.ONE_TIME,
            "onetime": cls.ONE_TIME,
            "one time": cls.ONE_TIME,
            "subscription": cls.SUBSCRIPTION,
        }
        return mapping.get(value.strip().lower())


class ChipType(str, Enum):
    """Kind of match chip shown on results pages."""
    MATCH = "match"  # Profile attribute aligns with the idea
    AVOIDED = "avoided"  # Something the user wants to avoid that the idea doesn't need


class ConfidenceLevel(str, Enum):
    """How decisively the top match beats the runner-up."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FitFactor(str, Enum):
    """The six scoring factors, in evaluation order."""
    TIME = "time"
    TECH = "tech"
    SUPPORT = "support"
    AUDIENCE = "audience"
    REVENUE = "revenue"
    COMPLETENESS = "completeness"


# =============================================================================
# Fit Profile
# =============================================================================


class FitProfile(BaseModel):
    """Canonical, fully defaulted view of the quiz answers."""
    time_weekly: TimeWeekly = TimeWeekly.PART_TIME
    tech_comfort: TechComfort = TechComfort.SOME
    support_tolerance: SupportTolerance = SupportTolerance.LOW
    revenue_goal: RevenueGoal = RevenueGoal.SIDE
    build_preference: BuildPreference = BuildPreference.SOLO
    audience_access: list[str] = Field(default_factory=list)
    risk_tolerance: RiskTolerance = RiskTolerance.MEDIUM
    existing_skills: list[str] = Field(default_factory=list)

    # Personalization (chips only, never scored)
    interest_themes: list[str] = Field(default_factory=list)
    avoid_list: list[str] = Field(default_factory=list)
    distribution_comfort: str = "unsure"
    quit_reason: str = ""
    optional_notes: str = ""


# =============================================================================
# Idea Library
# =============================================================================


class Competitor(BaseModel):
    """An existing product competing with a candidate idea."""
    model_config = ConfigDict(frozen=True)

    name: str
    url: str = ""
    price: str = ""
    gap: str = ""


class VoCQuote(BaseModel):
    """Voice-of-customer evidence for a candidate idea."""
    model_config = ConfigDict(frozen=True)

    url: str = ""
    pain_tag: str = ""
    quote: Optional[str] = None


class Candidate(BaseModel):
    """A single startup idea in the library."""
    model_config = ConfigDict(frozen=True)

    # Identity
    id: str
    name: str
    status: str = "draft"
    track_id: Optional[str] = None

    # Description
    wedge: str = ""
    description: str = ""
    audience: str = ""

    # Build cost
    timebox_minutes: Optional[int] = None
    timebox_days: Optional[int] = None

    # Monetization
    pricing_model: Optional[PricingModel] = None
    pricing_range: str = ""

    # Validation evidence
    competitors: list[Competitor] = Field(default_factory=list)
    voc_quotes: list[VoCQuote] = Field(default_factory=list)

    # Go-to-market
    mvp_in: list[str] = Field(default_factory=list)
    mvp_out: list[str] = Field(default_factory=list)
    first10_channel: str = ""

    # Personalization tags
    interest_tags: list[str] = Field(default_factory=list)
    avoid_tags: list[str] = Field(default_factory=list)
    support_level: str = ""
    distribution_type: str = ""

    @field_validator("pricing_model", mode="before")
    @classmethod
    def _parse_pricing_model(cls, v):
        if isinstance(v, PricingModel) or v is None:
            return v
        return PricingModel.from_string(str(v))

    @field_validator("mvp_in", "mvp_out", mode="before")
    @classmethod
    def _split_lines(cls, v):
        # Older libraries store MVP scope as a newline-separated string
        if isinstance(v, str):
            return [line.strip() for line in v.splitlines() if line.strip()]
        return v or []

    @field_validator("wedge", "description", "audience", "pricing_range", "first10_channel", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return v if v is not None else ""

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, v):
        return v if v is not None else "draft"

    @property
    def build_time(self) -> Optional[int]:
        """Estimated build time: minutes when recorded, otherwise days."""
        if self.timebox_minutes is not None:
            return self.timebox_minutes
        return self.timebox_days


class Track(BaseModel):
    """A coarse grouping of candidates (e.g. Chrome Extension)."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: Optional[str] = None
    candidate_ids: list[str] = Field(default_factory=list)


class IdeaLibrary(BaseModel):
    """The complete idea library."""
    version: str = "1.0.0"
    generated_at: Optional[str] = None
    source_file: Optional[str] = None
    candidates: list[Candidate] = Field(default_factory=list)
    tracks: list[Track] = Field(default_factory=list)

    @property
    def total_candidates(self) -> int:
        return len(self.candidates)

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        """Look up a candidate by id."""
        return next((c for c in self.candidates if c.id == candidate_id), None)

    def get_track(self, track_id: str) -> Optional[Track]:
        """Look up a track by id."""
        return next((t for t in self.tracks if t.id == track_id), None)


# =============================================================================
# Scoring Output
# =============================================================================


class FactorScore(BaseModel):
    """Contribution of one factor to a candidate's score."""
    factor: FitFactor
    points: int
    max_points: int
    reason: Optional[str] = Field(None, description="Set only when the factor beat its baseline")


class ScoreBreakdown(BaseModel):
    """Per-factor breakdown of a candidate score."""
    factors: list[FactorScore] = Field(default_factory=list)
    total: int = 0


class CandidateScore(BaseModel):
    """Score for one (candidate, profile) pair."""
    score: int
    reasons: list[str] = Field(default_factory=list)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)


class RankedIdea(BaseModel):
    """One entry in a ranked list of ideas."""
    id: str
    name: str
    score: int
    reason: str
    track: str
    breakdown: Optional[ScoreBreakdown] = None


class RankingResult(BaseModel):
    """Output of ranking the library against one set of answers."""
    profile: FitProfile
    ranked_ideas: list[RankedIdea] = Field(default_factory=list)
    fit_track: str
    winner_id: str


class MatchChip(BaseModel):
    """Short explanation tag for UI display."""
    label: str
    type: ChipType


class ConfidenceAssessment(BaseModel):
    """Confidence bucket derived from the top-2 score gap."""
    level: ConfidenceLevel
    gap: float = Field(description="Top score minus runner-up score")
    explanation: str


class IdeaRecommendation(BaseModel):
    """Everything a results page needs for one quiz submission."""
    ranking: RankingResult
    confidence: ConfidenceAssessment
    runner_up: Optional[RankedIdea] = None
    wildcard: Optional[RankedIdea] = None
    wildcard_rank: Optional[int] = Field(None, description="1-based rank within the results window")
    winner_chips: list[MatchChip] = Field(default_factory=list)
    runner_up_chips: list[MatchChip] = Field(default_factory=list)
    wildcard_chips: list[MatchChip] = Field(default_factory=list)

    @property
    def match_chips(self) -> list[MatchChip]:
        return [c for c in self.winner_chips if c.type == ChipType.MATCH]

    @property
    def avoided_chips(self) -> list[MatchChip]:
        return [c for c in self.winner_chips if c.type == ChipType.AVOIDED]


# =============================================================================
# Library Quality
# =============================================================================


class LibraryQuality(BaseModel):
    """Coverage statistics for the library's data quality checks."""
    competitor_coverage: str
    voc_coverage: str
    mvp_in_coverage: str
    mvp_out_coverage: str
    wedge_coverage: str
    total_candidates: int
    passing_candidates: int


class LibraryQualityReport(BaseModel):
    """Result of validating library data quality."""
    valid: bool
    errors: list[str] = Field(default_factory=list)
    quality: LibraryQuality


# =============================================================================
# Quiz Catalog
# =============================================================================


class QuestionType(str, Enum):
    """Whether a quiz question takes one answer or several."""
    SINGLE = "single"
    MULTI = "multi"
    TEXT = "text"


class QuizOption(BaseModel):
    """An answer option for a quiz question."""
    value: str
    label: str


class QuizQuestion(BaseModel):
    """A question in the fit quiz."""
    id: str
    question: str
    type: QuestionType
    options: list[QuizOption] = Field(default_factory=list)
    default: Union[str, list[str]] = ""
    personalization: bool = False  # Feeds match chips only, never the score

    def option_values(self) -> list[str]:
        return [o.value for o in self.options]
