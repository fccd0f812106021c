"""Tests for library loading and quality validation."""

import json

import pytest

from idea_ranker.config import LibraryQualityConfig
from idea_ranker.library import (
    DuplicateCandidateError,
    EmptyLibraryError,
    LibraryLoadError,
    LibraryValidator,
    _percent,
    load_library,
    parse_library,
)
from idea_ranker.schema import Candidate, PricingModel, Track


def write_library(tmp_path, data) -> str:
    path = tmp_path / "library.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestLoadLibrary:

    def test_load_sample(self, sample_library_path):
        library = load_library(sample_library_path)

        assert library.total_candidates == 4
        assert library.version == "1.2.0"
        assert library.get_candidate("tab-declutter").pricing_model == PricingModel.ONE_TIME
        assert library.get_track("micro-saas").candidate_ids == ["invoice-chaser"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(LibraryLoadError, match="Could not read"):
            load_library(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "library.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(LibraryLoadError, match="not valid JSON"):
            load_library(path)

    def test_empty_candidates(self, tmp_path):
        with pytest.raises(EmptyLibraryError):
            load_library(write_library(tmp_path, {"candidates": []}))

    def test_duplicate_ids(self, tmp_path):
        data = {"candidates": [{"id": "a", "name": "A"}, {"id": "a", "name": "A again"}]}

        with pytest.raises(DuplicateCandidateError, match="a"):
            load_library(write_library(tmp_path, data))

    def test_load_errors_share_base_class(self):
        assert issubclass(EmptyLibraryError, LibraryLoadError)
        assert issubclass(DuplicateCandidateError, LibraryLoadError)


class TestParseLibrary:

    @pytest.mark.parametrize("data,message", [
        ([], "JSON object"),
        ({"tracks": []}, "missing the 'candidates'"),
        ({"candidates": {"id": "a"}}, "JSON array"),
    ])
    def test_structure_errors(self, data, message):
        with pytest.raises(LibraryLoadError, match=message):
            parse_library(data)

    def test_schema_errors_name_locations(self):
        with pytest.raises(LibraryLoadError, match="candidates.0.id"):
            parse_library({"candidates": [{"name": "No id"}]})

    def test_legacy_fields_are_normalized(self):
        library = parse_library({"candidates": [{
            "id": "a",
            "name": "A",
            "pricing_model": " Subscription ",
            "mvp_in": "Login\n\nDashboard\n",
            "audience": None,
        }]})
        candidate = library.get_candidate("a")

        assert candidate.pricing_model == PricingModel.SUBSCRIPTION
        assert candidate.mvp_in == ["Login", "Dashboard"]
        assert candidate.audience == ""

    def test_null_status_and_channel(self):
        library = parse_library({"candidates": [{
            "id": "a",
            "name": "A",
            "status": None,
            "first10_channel": None,
        }]})
        candidate = library.get_candidate("a")

        assert candidate.status == "draft"
        assert candidate.first10_channel == ""

    def test_unknown_pricing_model_is_dropped(self):
        library = parse_library({"candidates": [{"id": "a", "name": "A", "pricing_model": "freemium"}]})
        assert library.get_candidate("a").pricing_model is None


class TestLibraryValidator:

    def test_sample_report(self, sample_library_path):
        report = LibraryValidator().validate(load_library(sample_library_path))

        assert report.valid is False
        assert report.quality.total_candidates == 4
        assert report.quality.passing_candidates == 2
        assert report.quality.competitor_coverage == "50%"
        assert report.quality.voc_coverage == "50%"
        assert report.quality.mvp_in_coverage == "75%"
        assert report.quality.mvp_out_coverage == "75%"
        assert report.quality.wedge_coverage == "100%"

    def test_errors_name_candidates(self, sample_library_path):
        report = LibraryValidator().validate(load_library(sample_library_path))
        failing = [e.split(":")[0] for e in report.errors]

        assert failing == ["review-widget", "workout-timer"]
        assert "only 1 user quotes (need 3)" in report.errors[0]

    def test_relaxed_minimums_pass(self, sample_library_path):
        config = LibraryQualityConfig(min_competitors=1, min_voc_quotes=0, min_mvp_in=2, min_mvp_out=0)
        report = LibraryValidator(config).validate(load_library(sample_library_path))

        assert report.valid is True
        assert report.errors == []
        assert report.quality.passing_candidates == 4

    def test_evidence_limit_and_unknown_track(self, make_candidate, make_library):
        library = make_library(
            make_candidate("crowded", competitors=6, quotes=3, track_id="nowhere"),
            tracks=[Track(id="somewhere", name="Somewhere")],
        )
        report = LibraryValidator().validate(library)

        assert "6 competitors (max 5)" in report.errors[0]
        assert "unknown track 'nowhere'" in report.errors[0]

    def test_missing_wedge(self, make_library):
        library = make_library(Candidate(id="bare", name="Bare"))
        report = LibraryValidator().validate(library)

        assert "missing wedge" in report.errors[0]
        assert report.quality.wedge_coverage == "0%"


@pytest.mark.parametrize("count,total,expected", [
    (1, 8, "13%"),
    (3, 8, "38%"),
    (1, 3, "33%"),
    (2, 3, "67%"),
    (4, 4, "100%"),
    (0, 0, "0%"),
])
def test_percent_rounds_halves_up(count, total, expected):
    assert _percent(count, total) == expected
