"""
Matching Engine Constants

Country tables, name heuristics, score adjustments and fit thresholds used by
the university matching engine. All values are deterministic.
"""

from enum import Enum
from typing import Dict, List

# =============================================================================
# COUNTRIES
# =============================================================================

# Countries queried on every recalculation, in output order.
TARGET_COUNTRIES: List[str] = [
    "Germany",
    "Canada",
    "Australia",
    "United States",
    "United Kingdom",
    "Netherlands",
    "Singapore",
]

# Alias -> canonical country name
COUNTRY_ALIASES: Dict[str, str] = {
    "USA": "United States",
    "US": "United States",
    "UK": "United Kingdom",
    "Canada": "Canada",
    "Germany": "Germany",
    "Australia": "Australia",
    "Netherlands": "Netherlands",
    "Singapore": "Singapore",
}

# Estimated yearly tuition (USD) per country
TUITION_ESTIMATES: Dict[str, int] = {
    "Germany": 1500,
    "Canada": 28000,
    "United States": 42000,
    "United Kingdom": 36000,
    "Australia": 35000,
}
DEFAULT_TUITION = 30000

# Max candidates taken from a directory per country
MAX_CANDIDATES_PER_COUNTRY = 30

# =============================================================================
# DIFFICULTY HEURISTICS
# =============================================================================

class Difficulty(str, Enum):
    """Admission difficulty guessed from the university name."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


ELITE_NAME_FRAGMENTS: List[str] = [
    "MIT", "Harvard", "Stanford", "Oxford", "Cambridge", "ETH",
    "Imperial", "UCL", "Toronto", "Munich", "Heidelberg", "Melbourne",
]

GENERIC_NAME_FRAGMENTS: List[str] = ["University", "Institute", "Technology", "Tech"]

# =============================================================================
# SCORE ADJUSTMENTS
# =============================================================================

BASE_SCORE = 40
MIN_SCORE = 0
MAX_SCORE = 100

# (minimum GPA, adjustment), checked top-down; below the last entry -> GPA_FLOOR_ADJUSTMENT
GPA_ADJUSTMENTS = [
    (9.0, 20),
    (8.0, 15),
    (7.0, 8),
    (6.0, -5),
]
GPA_FLOOR_ADJUSTMENT = -20

IELTS_COMPLETED_BONUS = 10
GRE_COMPLETED_BONUS = 5
SOP_STARTED_BONUS = 5

DIFFICULTY_ADJUSTMENTS: Dict[str, int] = {
    Difficulty.HIGH.value: -20,
    Difficulty.MEDIUM.value: -8,
    Difficulty.LOW.value: 5,
}

# Budget check only applies to the lowest bucket
LOW_BUDGET_RANGE = "Under $20K"
LOW_BUDGET_TUITION_LIMIT = 20000
AFFORDABLE_BONUS = 10
UNAFFORDABLE_PENALTY = -20

PREFERRED_COUNTRY_BOOST = 10

# =============================================================================
# CLASSIFICATION THRESHOLDS
# =============================================================================

class FitCategory(str, Enum):
    """How a university sits relative to the student's chances."""
    DREAM = "Dream"      # Reach
    TARGET = "Target"    # Competitive match
    SAFE = "Safe"        # Likely admit


# Minimum score per category, checked from highest to lowest
CLASSIFICATION_THRESHOLDS: Dict[str, int] = {
    FitCategory.SAFE: 85,
    FitCategory.TARGET: 55,
}

# =============================================================================
# MODES
# =============================================================================

AI_MODE = "ai"
