"""Centralized configuration management for the idea ranker."""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class RankingConfig(BaseModel):
    """Controls how ranked lists are sliced and labelled."""
    default_limit: int = Field(
        5,
        description="Number of ideas returned when no limit is given"
    )
    results_window: int = Field(
        10,
        description="Ideas ranked for a results page (wildcard search covers ranks 3 to this)"
    )
    reasons_per_idea: int = Field(
        2,
        description="Reasons joined into a ranked idea's reason string"
    )
    fallback_reason: str = Field(
        "Good fit for your profile",
        description="Reason shown when no factor produced a reason"
    )
    uncategorized_track: str = Field(
        "Uncategorized",
        description="Track label for candidates without a track_id"
    )


class ConfidenceThresholdsConfig(BaseModel):
    """Score-gap thresholds for confidence buckets.

    The gap is the top score minus the runner-up score.
    """
    high_gap: int = Field(10, description="Minimum gap for High confidence")
    medium_gap: int = Field(5, description="Minimum gap for Medium confidence")


class MatchChipConfig(BaseModel):
    """Limits for match chips shown next to an idea."""
    max_chips: int = Field(6, description="Maximum chips per idea")
    max_theme_chips: int = Field(2, description="Maximum interest-theme chips")
    max_avoided_chips: int = Field(2, description="Maximum 'we avoided' chips")
    motivation_max_days: int = Field(
        14,
        description="Build time at or below which an idea earns the quick-wins chip"
    )


class LibraryQualityConfig(BaseModel):
    """Minimums a library candidate must meet to pass quality checks."""
    min_competitors: int = 3
    min_voc_quotes: int = 3
    min_mvp_in: int = 7
    min_mvp_out: int = 5
    max_evidence_entries: int = Field(
        5,
        description="Maximum competitors or VoC quotes stored per candidate"
    )


class RankerConfig(BaseModel):
    """Complete configuration for the idea ranker."""
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    confidence_thresholds: ConfidenceThresholdsConfig = Field(default_factory=ConfidenceThresholdsConfig)
    match_chips: MatchChipConfig = Field(default_factory=MatchChipConfig)
    library_quality: LibraryQualityConfig = Field(default_factory=LibraryQualityConfig)


CONFIG_ENV_VAR = "IDEA_RANKER_CONFIG"
LOCAL_CONFIG_NAMES = ("ranker-config.yaml", "ranker-config.yml")

# Active config; None until first use
_config: Optional[RankerConfig] = None


def get_config() -> RankerConfig:
    """Return the active config, loading a discovered file on first use."""
    global _config
    if _config is None:
        path = find_config_file()
        _config = load_config(path) if path else RankerConfig()
    return _config


def load_config(path: Path) -> RankerConfig:
    """Read a YAML config file and make it the active config.

    Sections and keys left out of the file keep their defaults, so a file
    may override just one threshold.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = RankerConfig.model_validate(data or {})
    logger.info("Loaded ranker config from %s", path)
    return _config


def reset_config() -> None:
    """Discard any loaded file and use the built-in defaults."""
    global _config
    _config = RankerConfig()


def _candidate_config_paths() -> list[Path]:
    paths = []
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.append(Path(env_path))
    paths.extend(Path(name) for name in LOCAL_CONFIG_NAMES)
    paths.append(Path.home() / ".config" / "idea-ranker" / "config.yaml")
    return paths


def find_config_file() -> Optional[Path]:
    """Return the first existing config file, or None.

    Checked in order: the path in $IDEA_RANKER_CONFIG, ranker-config.yaml
    or ranker-config.yml in the working directory, then
    ~/.config/idea-ranker/config.yaml.
    """
    for path in _candidate_config_paths():
        if path.exists():
            return path
    return None


SECTION_NOTES = {
    "ranking": "how many ideas are returned and how they are labelled",
    "confidence_thresholds": "score gap between #1 and #2 needed for High / Medium confidence",
    "match_chips": "caps on the 'why this matches you' tags per idea",
    "library_quality": "evidence and MVP scope an idea needs to pass `idea-ranker validate`",
}


def save_default_config(path: Path) -> None:
    """Write the default config as commented YAML."""
    lines = ["# idea-ranker settings. Delete any key to fall back to its default.", "#"]
    for section, note in SECTION_NOTES.items():
        lines.append(f"#   {section}: {note}")
    lines.append("#")
    lines.append(f"# Loaded from ${CONFIG_ENV_VAR}, ./ranker-config.yaml or ~/.config/idea-ranker/config.yaml.")
    header = "\n".join(lines) + "\n\n"

    body = yaml.dump(RankerConfig().model_dump(), default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(header + body)
