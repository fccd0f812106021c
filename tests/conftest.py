"""Shared fixtures: a synthetic idea library and candidate factories."""

from pathlib import Path

import pytest

from idea_ranker.config import reset_config
from idea_ranker.schema import Candidate, Competitor, IdeaLibrary, Track, VoCQuote

SAMPLE_LIBRARY_PATH = Path(__file__).parent.parent / "samples" / "library.json"


def _competitors(n: int) -> list[Competitor]:
    return [
        Competitor(name=f"Competitor {i}", url=f"https://example.com/{i}", price="$10/mo", gap="Too complex")
        for i in range(n)
    ]


def _quotes(n: int) -> list[VoCQuote]:
    return [
        VoCQuote(url=f"https://reddit.com/r/test/{i}", pain_tag="pain", quote=f"Quote {i}")
        for i in range(n)
    ]


def build_candidate(candidate_id: str = "idea-x", competitors: int = 0, quotes: int = 0, **fields) -> Candidate:
    """Build a candidate; evidence lists are given as counts."""
    data = {"id": candidate_id, "name": candidate_id.replace("-", " ").title()}
    data.update(fields)
    return Candidate(
        competitors=_competitors(competitors),
        voc_quotes=_quotes(quotes),
        **data,
    )


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_library_path() -> Path:
    return SAMPLE_LIBRARY_PATH


@pytest.fixture
def make_candidate():
    return build_candidate


@pytest.fixture
def make_library():
    def _make(*candidates: Candidate, tracks: list[Track] = None) -> IdeaLibrary:
        return IdeaLibrary(candidates=list(candidates), tracks=tracks or [])
    return _make


@pytest.fixture
def library() -> IdeaLibrary:
    """Five differentiated candidates across four tracks.

    Expected scores:
        dev profile:      dev-ext 95, saas 75, ext-two 70, smb-widget 50, plain 35
        non-tech profile: smb-widget 65, saas 60, dev-ext 55, ext-two 50, plain 45
        empty answers:    dev-ext 75, smb-widget 65, saas 65, ext-two 55, plain 30
    """
    candidates = [
        build_candidate(
            "dev-ext", competitors=3, quotes=3,
            track_id="chrome-extension",
            audience="Knowledge workers with too many tabs",
            timebox_minutes=20,
            pricing_model="one-time",
            pricing_range="$9 one-time",
            interest_tags=["tech"],
            avoid_tags=["calls", "support"],
            support_level="low",
            distribution_type="marketplace",
        ),
        build_candidate(
            "smb-widget", competitors=2, quotes=1,
            track_id="smb-widget",
            audience="Small business owners",
            timebox_minutes=40,
            pricing_model="subscription",
            pricing_range="$19/mo",
            interest_tags=["money"],
            distribution_type="communities",
        ),
        build_candidate(
            "saas", competitors=3, quotes=3,
            track_id="micro-saas",
            audience="Freelancers",
            timebox_days=14,
            pricing_model="subscription",
            pricing_range="$49/mo",
            distribution_type="seo",
        ),
        build_candidate(
            "plain",
            track_id="mobile-app",
            audience="Fitness fans",
            timebox_days=60,
        ),
        build_candidate(
            "ext-two", competitors=1,
            track_id="chrome-extension",
            audience="Students",
            timebox_minutes=30,
            pricing_model="subscription",
            pricing_range="$5/mo",
        ),
    ]
    tracks = [
        Track(id="chrome-extension", name="Chrome Extension", candidate_ids=["dev-ext", "ext-two"]),
        Track(id="smb-widget", name="SMB Widget", candidate_ids=["smb-widget"]),
        Track(id="micro-saas", name="Micro SaaS", candidate_ids=["saas"]),
        Track(id="mobile-app", name="Mobile App", candidate_ids=["plain"]),
    ]
    return IdeaLibrary(version="test", candidates=candidates, tracks=tracks)


@pytest.fixture
def dev_answers() -> dict:
    """A developer with little time who wants no support."""
    return {
        "time_weekly": "2-5",
        "tech_comfort": "dev",
        "support_tolerance": "none",
        "revenue_goal": "side",
        "audience_access": ["developers"],
    }


@pytest.fixture
def nontech_answers() -> dict:
    """A non-technical user with time, SMB access and appetite for support."""
    return {
        "time_weekly": "11-20",
        "tech_comfort": "none",
        "support_tolerance": "high",
        "revenue_goal": "salary",
        "audience_access": ["smb"],
    }
