"""
Matching Logic Module

Deterministic university matching engine for student profiles.
"""

from .contracts import (
    StudentProfile,
    UniversityCandidate,
    RankedUniversity,
    CountryMatchGroup,
    ProgressStatus,
    BudgetRange,
)
from .engine import MatchingEngine, filter_by_mode, build_engine
from .runner import recalc_universities, recalc_in_background, UserNotFoundError
from .directories import DirectoryResponseError, DIRECTORY_ERRORS
from .constants import FitCategory, Difficulty

__all__ = [
    # Main engine
    "MatchingEngine",
    "filter_by_mode",
    "build_engine",
    "recalc_universities",
    "recalc_in_background",
    "UserNotFoundError",
    "DirectoryResponseError",
    "DIRECTORY_ERRORS",

    # Contracts
    "StudentProfile",
    "UniversityCandidate",
    "RankedUniversity",
    "CountryMatchGroup",
    "ProgressStatus",
    "BudgetRange",

    # Enums
    "FitCategory",
    "Difficulty",
]
