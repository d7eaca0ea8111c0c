"""
Scorers

Heuristics that turn a student profile and a university name into a bounded
match score. Every function is pure and deterministic.
"""

import re
from typing import Iterable, Optional

from .contracts import StudentProfile
from .constants import (
    COUNTRY_ALIASES,
    TUITION_ESTIMATES,
    DEFAULT_TUITION,
    Difficulty,
    ELITE_NAME_FRAGMENTS,
    GENERIC_NAME_FRAGMENTS,
    BASE_SCORE,
    MIN_SCORE,
    MAX_SCORE,
    GPA_ADJUSTMENTS,
    GPA_FLOOR_ADJUSTMENT,
    IELTS_COMPLETED_BONUS,
    GRE_COMPLETED_BONUS,
    SOP_STARTED_BONUS,
    DIFFICULTY_ADJUSTMENTS,
    LOW_BUDGET_RANGE,
    LOW_BUDGET_TUITION_LIMIT,
    AFFORDABLE_BONUS,
    UNAFFORDABLE_PENALTY,
    PREFERRED_COUNTRY_BOOST,
)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def clamp(score: int, low: int = MIN_SCORE, high: int = MAX_SCORE) -> int:
    return max(low, min(high, score))


def normalize_country(country: str) -> str:
    """Map a country alias ("USA", "UK") to the name used by the directories."""
    return COUNTRY_ALIASES.get(country, country)


def normalize_countries(countries: Optional[Iterable[str]]) -> set:
    return {normalize_country(c) for c in (countries or [])}


def estimate_tuition(country: str) -> int:
    return TUITION_ESTIMATES.get(country, DEFAULT_TUITION)


def parse_gpa(raw: Optional[str]) -> float:
    """
    Read the leading number of a GPA string ("8.4", "8.4 CGPA", "1e1").
    Anything unparseable counts as 0.
    """
    if raw is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(raw))
    if not match:
        return 0.0
    return float(match.group(0))


def guess_difficulty(name: str = "") -> Difficulty:
    """
    Guess admission difficulty from the university name.

    Elite fragments win over generic institutional words; names matching
    neither are treated as easy.
    """
    lowered = (name or "").lower()

    if any(fragment.lower() in lowered for fragment in ELITE_NAME_FRAGMENTS):
        return Difficulty.HIGH
    if any(fragment.lower() in lowered for fragment in GENERIC_NAME_FRAGMENTS):
        return Difficulty.MEDIUM
    return Difficulty.LOW


def score_gpa(profile: StudentProfile) -> int:
    gpa = parse_gpa(profile.gpa)
    for minimum, adjustment in GPA_ADJUSTMENTS:
        if gpa >= minimum:
            return adjustment
    return GPA_FLOOR_ADJUSTMENT


def score_readiness(profile: StudentProfile) -> int:
    """IELTS, GRE and SOP progress. A missing status counts against the student."""
    score = 0

    score += IELTS_COMPLETED_BONUS if profile.ielts_status == "Completed" else -IELTS_COMPLETED_BONUS
    score += GRE_COMPLETED_BONUS if profile.gre_status == "Completed" else -GRE_COMPLETED_BONUS

    sop_started = profile.sop_status is not None and profile.sop_status != "Not Started"
    score += SOP_STARTED_BONUS if sop_started else -SOP_STARTED_BONUS

    return score


def score_difficulty(difficulty: Difficulty) -> int:
    return DIFFICULTY_ADJUSTMENTS.get(Difficulty(difficulty).value, 0)


def score_budget(profile: StudentProfile, country: str) -> int:
    # Only the lowest bucket is checked against tuition
    if profile.budget_range != LOW_BUDGET_RANGE:
        return 0
    if estimate_tuition(country) <= LOW_BUDGET_TUITION_LIMIT:
        return AFFORDABLE_BONUS
    return UNAFFORDABLE_PENALTY


def calculate_match(profile: StudentProfile, difficulty: Difficulty, country: str) -> int:
    """
    Match score in [0, 100] before any preferred-country boost.
    """
    score = BASE_SCORE
    score += score_gpa(profile)
    score += score_readiness(profile)
    score += score_difficulty(difficulty)
    score += score_budget(profile, country)
    return clamp(score)


def apply_preference_boost(score: int, country: str, preferred: set) -> int:
    if country not in preferred:
        return score
    return min(MAX_SCORE, score + PREFERRED_COUNTRY_BOOST)
