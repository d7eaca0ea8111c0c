"""
Classifier

Maps a match score onto a fit category:
- Safe (likely admit)
- Target (competitive match)
- Dream (reach)
"""

from typing import Dict, List
from .constants import FitCategory, CLASSIFICATION_THRESHOLDS


def classify_fit(score: int) -> FitCategory:
    """
    Classify a match score. Monotonic: a higher score never lands in a
    lower category.
    """
    for category in [FitCategory.SAFE, FitCategory.TARGET]:
        if score >= CLASSIFICATION_THRESHOLDS[category]:
            return category
    return FitCategory.DREAM


def get_category_counts(scores: List[int]) -> Dict[str, int]:
    """
    Count scores in each category.
    """
    counts = {cat.value: 0 for cat in FitCategory}
    for score in scores:
        counts[classify_fit(score).value] += 1
    return counts
