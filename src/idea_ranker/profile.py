"""Fit Profile Builder - first stage of the ranking pipeline.

Normalizes raw quiz answers into a fully defaulted FitProfile.
Answers come from an untrusted client, so every field falls back to
its default when missing, of the wrong shape, or not a known option.
"""

from collections.abc import Mapping
from typing import Any, Optional

from .questions import get_question, option_values
from .schema import (
    BuildPreference,
    FitProfile,
    RevenueGoal,
    RiskTolerance,
    SupportTolerance,
    TechComfort,
    TimeWeekly,
)


class ProfileBuilder:
    """Builds a FitProfile from raw quiz answers."""

    # Single-choice questions backed by an enum: question id -> enum type
    ENUM_FIELDS = {
        "time_weekly": TimeWeekly,
        "tech_comfort": TechComfort,
        "support_tolerance": SupportTolerance,
        "revenue_goal": RevenueGoal,
        "build_preference": BuildPreference,
        "risk_tolerance": RiskTolerance,
    }

    MULTI_FIELDS = (
        "audience_access",
        "existing_skills",
        "interest_themes",
        "avoid_list",
    )

    # Single-choice personalization answers kept as plain tokens
    TOKEN_FIELDS = ("distribution_comfort", "quit_reason")

    def build(self, answers: Optional[Mapping[str, Any]]) -> FitProfile:
        """Build a profile; never raises."""
        if not isinstance(answers, Mapping):
            answers = {}

        fields: dict[str, Any] = {}

        for key, enum_type in self.ENUM_FIELDS.items():
            value = self._read_choice(answers, key)
            if value is not None:
                fields[key] = enum_type(value)

        for key in self.MULTI_FIELDS:
            fields[key] = self._read_multi(answers.get(key))

        for key in self.TOKEN_FIELDS:
            value = self._read_choice(answers, key)
            if value is not None:
                fields[key] = value

        notes = answers.get("optional_notes")
        if isinstance(notes, str):
            fields["optional_notes"] = notes.strip()

        return FitProfile(**fields)

    def _read_choice(self, answers: Mapping[str, Any], key: str) -> Optional[str]:
        """Read a single-choice answer, or None if it is not a valid option."""
        raw = answers.get(key)
        if not isinstance(raw, str):
            return None
        value = raw.strip()
        if value in option_values(key):
            return value
        return None

    def _read_multi(self, raw: Any) -> list[str]:
        """Read a multi-select answer as a de-duplicated list of tokens."""
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)):
            return []

        values: list[str] = []
        for item in raw:
            if not isinstance(item, str):
                continue
            token = item.strip()
            if token and token not in values:
                values.append(token)
        return values


_builder = ProfileBuilder()


def build_fit_profile(answers: Optional[Mapping[str, Any]]) -> FitProfile:
    """Normalize raw quiz answers into a FitProfile.

    Args:
        answers: Question id -> answer token(s), possibly partial or malformed

    Returns:
        A FitProfile with every field populated
    """
    return _builder.build(answers)


def default_answers() -> dict[str, Any]:
    """Answers equivalent to an empty quiz, keyed by question id."""
    defaults = {}
    for key in (*ProfileBuilder.ENUM_FIELDS, *ProfileBuilder.MULTI_FIELDS, *ProfileBuilder.TOKEN_FIELDS):
        question = get_question(key)
        if question is not None:
            defaults[key] = question.default
    return defaults
