"""Idea library loading and validation.

Loads library JSON files produced by the ingestion pipeline with
protections against data that would break ranking:

- JSON structure validation via Pydantic model
- Empty library rejection (ranking needs a winner)
- Duplicate candidate id rejection
- Data quality report (evidence coverage, MVP scope, wedge)
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .config import LibraryQualityConfig, get_config
from .schema import Candidate, IdeaLibrary, LibraryQuality, LibraryQualityReport

logger = logging.getLogger(__name__)


class LibraryLoadError(Exception):
    """Raised when an idea library cannot be loaded."""


class EmptyLibraryError(LibraryLoadError):
    """Raised when a library has no candidates to rank."""


class DuplicateCandidateError(LibraryLoadError):
    """Raised when two candidates share an id."""


def check_library_invariants(library: IdeaLibrary) -> None:
    """Fail fast on libraries that cannot be ranked.

    Raises:
        EmptyLibraryError: No candidates.
        DuplicateCandidateError: Candidate ids are not unique.
    """
    if not library.candidates:
        raise EmptyLibraryError("Library contains no candidates")

    seen: set[str] = set()
    duplicates: list[str] = []
    for candidate in library.candidates:
        if candidate.id in seen and candidate.id not in duplicates:
            duplicates.append(candidate.id)
        seen.add(candidate.id)

    if duplicates:
        raise DuplicateCandidateError(f"Duplicate candidate ids: {', '.join(duplicates)}")


def parse_library(data: object) -> IdeaLibrary:
    """Validate a decoded library document.

    Raises:
        LibraryLoadError: On structural or invariant failures.
    """
    if not isinstance(data, dict):
        raise LibraryLoadError("Library must be a JSON object")
    if "candidates" not in data:
        raise LibraryLoadError("Library is missing the 'candidates' field")
    if not isinstance(data["candidates"], list):
        raise LibraryLoadError("'candidates' must be a JSON array")

    try:
        library = IdeaLibrary.model_validate(data)
    except ValidationError as e:
        locations = [
            ".".join(str(part) for part in err["loc"]) for err in e.errors()[:3]
        ]
        raise LibraryLoadError(
            f"Library failed schema validation ({e.error_count()} errors): {', '.join(locations)}"
        ) from e

    check_library_invariants(library)
    return library


def load_library(path: Union[str, Path]) -> IdeaLibrary:
    """Load and validate an idea library from a JSON file.

    Args:
        path: Path to library.json

    Returns:
        The validated IdeaLibrary

    Raises:
        LibraryLoadError: If the file is unreadable, malformed or violates invariants.
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise LibraryLoadError(f"Could not read library file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LibraryLoadError(f"Library file {path} is not valid JSON: {e}") from e

    library = parse_library(data)
    logger.info(
        "Loaded library %s: %d candidates, %d tracks",
        path, library.total_candidates, len(library.tracks),
    )
    return library


class LibraryValidator:
    """Validates library data quality and reports coverage.

    Quality issues do not block ranking; they flag candidates whose
    evidence or scope is too thin to present with confidence.
    """

    def __init__(self, config: Optional[LibraryQualityConfig] = None):
        self.config = config or get_config().library_quality

    def validate(self, library: IdeaLibrary) -> LibraryQualityReport:
        """Check every candidate and summarize coverage."""
        cfg = self.config
        errors: list[str] = []
        track_ids = {t.id for t in library.tracks}

        competitor_pass = 0
        voc_pass = 0
        mvp_in_pass = 0
        mvp_out_pass = 0
        wedge_pass = 0
        all_pass = 0

        for candidate in library.candidates:
            issues: list[str] = []

            competitor_count = len(candidate.competitors)
            if competitor_count >= cfg.min_competitors:
                competitor_pass += 1
            else:
                issues.append(f"only {competitor_count} competitors (need {cfg.min_competitors})")

            voc_count = len(candidate.voc_quotes)
            if voc_count >= cfg.min_voc_quotes:
                voc_pass += 1
            else:
                issues.append(f"only {voc_count} user quotes (need {cfg.min_voc_quotes})")

            if candidate.wedge.strip():
                wedge_pass += 1
            else:
                issues.append("missing wedge")

            if len(candidate.mvp_in) >= cfg.min_mvp_in:
                mvp_in_pass += 1
            else:
                issues.append(f"only {len(candidate.mvp_in)} mvp_in items (need {cfg.min_mvp_in})")

            if len(candidate.mvp_out) >= cfg.min_mvp_out:
                mvp_out_pass += 1
            else:
                issues.append(f"only {len(candidate.mvp_out)} mvp_out items (need {cfg.min_mvp_out})")

            issues.extend(self._check_limits(candidate, track_ids))

            if issues:
                errors.append(f"{candidate.id}: {', '.join(issues)}")
            else:
                all_pass += 1

        total = library.total_candidates
        quality = LibraryQuality(
            competitor_coverage=_percent(competitor_pass, total),
            voc_coverage=_percent(voc_pass, total),
            mvp_in_coverage=_percent(mvp_in_pass, total),
            mvp_out_coverage=_percent(mvp_out_pass, total),
            wedge_coverage=_percent(wedge_pass, total),
            total_candidates=total,
            passing_candidates=all_pass,
        )

        if errors:
            logger.warning(
                "Library quality issues: %d/%d candidates pass all checks",
                all_pass, total,
            )

        return LibraryQualityReport(valid=not errors, errors=errors, quality=quality)

    def _check_limits(self, candidate: Candidate, track_ids: set[str]) -> list[str]:
        """Check evidence list sizes and track membership."""
        issues = []
        limit = self.config.max_evidence_entries

        if len(candidate.competitors) > limit:
            issues.append(f"{len(candidate.competitors)} competitors (max {limit})")
        if len(candidate.voc_quotes) > limit:
            issues.append(f"{len(candidate.voc_quotes)} user quotes (max {limit})")

        # Tracks are a loose grouping; only check when the library defines them
        if track_ids and candidate.track_id and candidate.track_id not in track_ids:
            issues.append(f"unknown track '{candidate.track_id}'")

        return issues


def _percent(count: int, total: int) -> str:
    if total == 0:
        return "0%"
    # Halves round up
    return f"{int(count * 100 / total + 0.5)}%"
