"""Tests for the ranking pipeline and results bundle."""

import pytest

from idea_ranker.config import RankerConfig, RankingConfig
from idea_ranker.library import DuplicateCandidateError, EmptyLibraryError
from idea_ranker.ranker import IdeaRanker, rank_ideas
from idea_ranker.schema import ChipType, ConfidenceLevel, IdeaLibrary


def ids(result):
    return [idea.id for idea in result.ranked_ideas]


class TestRanking:
    """Ordering, limits and labels of ranked lists."""

    def test_developer_ranking(self, library, dev_answers):
        result = rank_ideas(dev_answers, library)

        assert ids(result) == ["dev-ext", "saas", "ext-two", "smb-widget", "plain"]
        assert [i.score for i in result.ranked_ideas] == [95, 75, 70, 50, 35]
        assert result.winner_id == "dev-ext"
        assert result.fit_track == "chrome-extension"

    def test_scores_non_increasing(self, library, nontech_answers):
        scores = [i.score for i in rank_ideas(nontech_answers, library).ranked_ideas]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_library_order(self, library):
        # smb-widget and saas both score 65 for an empty quiz
        result = rank_ideas({}, library)

        assert ids(result) == ["dev-ext", "smb-widget", "saas", "ext-two", "plain"]
        assert result.ranked_ideas[1].score == result.ranked_ideas[2].score == 65

    def test_default_limit(self, make_candidate, make_library):
        big = make_library(*[make_candidate(f"idea-{i}") for i in range(8)])
        assert len(rank_ideas({}, big).ranked_ideas) == 5

    @pytest.mark.parametrize("limit,expected", [(2, 2), (1, 1), (0, 1), (-3, 1), (100, 5)])
    def test_limit(self, library, limit, expected):
        assert len(rank_ideas({}, library, limit=limit).ranked_ideas) == expected

    def test_limit_from_config(self, library):
        config = RankerConfig(ranking=RankingConfig(default_limit=2))
        assert len(IdeaRanker(library, config).rank({}).ranked_ideas) == 2

    def test_reason_joins_first_two_reasons(self, library, dev_answers):
        top = rank_ideas(dev_answers, library).ranked_ideas[0]
        assert top.reason == "Quick to build with limited time. Matches your dev skills"

    def test_fallback_reason(self, library):
        plain = next(i for i in rank_ideas({}, library).ranked_ideas if i.id == "plain")
        assert plain.reason == "Good fit for your profile"

    def test_uncategorized_track(self, make_candidate, make_library):
        result = rank_ideas({}, make_library(make_candidate("loose")))

        assert result.ranked_ideas[0].track == "Uncategorized"
        assert result.fit_track == "Uncategorized"

    def test_breakdown_attached(self, library, dev_answers):
        top = rank_ideas(dev_answers, library).ranked_ideas[0]
        assert top.breakdown.total == top.score

    def test_winner_is_first_idea(self, library, nontech_answers):
        result = rank_ideas(nontech_answers, library, limit=1)
        assert result.winner_id == result.ranked_ideas[0].id


class TestPersonalization:
    """Different profiles must not collapse onto the same ranking."""

    def test_contrasting_profiles_get_different_winners(self, library, dev_answers, nontech_answers):
        dev = rank_ideas(dev_answers, library)
        nontech = rank_ideas(nontech_answers, library)

        assert dev.winner_id == "dev-ext"
        assert nontech.winner_id == "smb-widget"
        assert ids(dev) != ids(nontech)

    def test_nontech_scores(self, library, nontech_answers):
        result = rank_ideas(nontech_answers, library)
        assert [i.score for i in result.ranked_ideas] == [65, 60, 55, 50, 45]

    def test_personalization_answers_do_not_change_scores(self, library, dev_answers):
        personalized = dict(
            dev_answers,
            interest_themes=["money", "health"],
            avoid_list=["calls"],
            distribution_comfort="seo",
            quit_reason="motivation",
            optional_notes="Prefer B2B",
        )

        base = rank_ideas(dev_answers, library)
        other = rank_ideas(personalized, library)

        assert [(i.id, i.score) for i in base.ranked_ideas] == [(i.id, i.score) for i in other.ranked_ideas]


class TestDeterminism:

    def test_same_input_same_output(self, library, dev_answers):
        first = rank_ideas(dev_answers, library)
        second = rank_ideas(dev_answers, library)
        assert first.model_dump() == second.model_dump()

    def test_library_not_mutated(self, library, dev_answers):
        before = library.model_dump()
        IdeaRanker(library).recommend(dev_answers)
        assert library.model_dump() == before

    def test_seed_is_reproducible(self, library):
        assert ids(rank_ideas({}, library, seed=7)) == ids(rank_ideas({}, library, seed=7))

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 42])
    def test_seed_only_reorders_ties(self, library, seed):
        plain = rank_ideas({}, library)
        seeded = rank_ideas({}, library, seed=seed)

        assert [i.score for i in seeded.ranked_ideas] == [i.score for i in plain.ranked_ideas]
        assert set(ids(seeded)[1:3]) == {"smb-widget", "saas"}
        assert seeded.winner_id == "dev-ext"


class TestLibraryInvariants:

    def test_empty_library_rejected(self):
        with pytest.raises(EmptyLibraryError):
            IdeaRanker(IdeaLibrary())

    def test_duplicate_ids_rejected(self, make_candidate, make_library):
        library = make_library(make_candidate("same"), make_candidate("same"))
        with pytest.raises(DuplicateCandidateError, match="same"):
            rank_ideas({}, library)


class TestRecommend:
    """The results bundle: confidence, wildcard and chips."""

    def test_developer_bundle(self, library, dev_answers):
        rec = IdeaRanker(library).recommend(dev_answers, limit=3)

        assert ids(rec.ranking) == ["dev-ext", "saas", "ext-two"]
        assert rec.confidence.level == ConfidenceLevel.HIGH
        assert rec.confidence.gap == 20
        # ext-two shares the winner's track, so the wildcard comes from beyond the limit
        assert rec.wildcard.id == "smb-widget"
        assert rec.wildcard_rank == 4
        assert [c.label for c in rec.wildcard_chips] == ["Side-income pricing"]

    def test_winner_chips(self, library, dev_answers):
        rec = IdeaRanker(library).recommend(dev_answers)

        assert [c.label for c in rec.winner_chips] == [
            "Quick build",
            "Dev-friendly",
            "No support needed",
            "Network fit",
            "Side-income pricing",
            "Validated demand",
        ]
        assert rec.avoided_chips == []
        assert rec.match_chips == rec.winner_chips

    def test_runner_up(self, library, dev_answers):
        rec = IdeaRanker(library).recommend(dev_answers)

        assert rec.runner_up.id == "saas"
        assert rec.runner_up == rec.ranking.ranked_ideas[1]
        assert [c.label for c in rec.runner_up_chips] == [
            "Quick build",
            "Side-income pricing",
            "Validated demand",
        ]

    def test_runner_up_kept_when_limit_is_one(self, library, dev_answers):
        rec = IdeaRanker(library).recommend(dev_answers, limit=1)

        assert ids(rec.ranking) == ["dev-ext"]
        assert rec.runner_up.id == "saas"

    def test_medium_confidence(self, library, nontech_answers):
        rec = IdeaRanker(library).recommend(nontech_answers)

        assert rec.confidence.level == ConfidenceLevel.MEDIUM
        assert rec.confidence.gap == 5
        assert rec.wildcard.id == "dev-ext"
        assert rec.wildcard_rank == 3

    def test_avoided_chips_on_winner(self, library, dev_answers):
        rec = IdeaRanker(library).recommend(dict(dev_answers, avoid_list=["calls"]))

        assert [c.label for c in rec.avoided_chips] == ["No calls/demos"]
        assert len(rec.winner_chips) == 6
        assert rec.winner_chips[-1].type == ChipType.AVOIDED

    def test_single_candidate(self, library, dev_answers, make_library):
        solo = make_library(library.get_candidate("dev-ext"))
        rec = IdeaRanker(solo).recommend(dev_answers)

        assert rec.confidence.gap == 95
        assert rec.confidence.level == ConfidenceLevel.HIGH
        assert rec.runner_up is None
        assert rec.runner_up_chips == []
        assert rec.wildcard is None
        assert rec.wildcard_rank is None
        assert rec.wildcard_chips == []

    def test_no_wildcard_when_single_track(self, make_candidate, make_library):
        same_track = make_library(*[
            make_candidate(f"ext-{i}", track_id="chrome-extension") for i in range(4)
        ])
        rec = IdeaRanker(same_track).recommend({})

        assert rec.wildcard is None
        assert rec.confidence.level == ConfidenceLevel.LOW

    def test_ranking_matches_rank(self, library, dev_answers):
        ranker = IdeaRanker(library)
        assert ranker.recommend(dev_answers).ranking == ranker.rank(dev_answers)
