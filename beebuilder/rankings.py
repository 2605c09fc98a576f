"""
rank thresholds for a puzzle.

each rank is reached at floor(max_score * fraction). the lowest rank
is always 0 and the top rank is always max_score.
"""

import math
import re

from .config import RANK_FRACTIONS

RANK_ORDER: tuple[str, ...] = tuple(key for key, _ in RANK_FRACTIONS)
LOWEST_RANK = RANK_ORDER[0]
TOP_RANK = RANK_ORDER[-1]


def rank_thresholds(max_score: int) -> dict[str, int]:
    """map each rank key (in rank order) to its minimum score."""
    thresholds: dict[str, int] = {}
    for key, fraction in RANK_FRACTIONS:
        thresholds[key] = math.floor(max_score * fraction)
    thresholds[LOWEST_RANK] = 0
    thresholds[TOP_RANK] = max_score
    return thresholds


def rank_for_score(score: int, thresholds: dict[str, int]) -> str:
    """highest rank whose threshold the score meets; missing keys are skipped."""
    current = LOWEST_RANK
    for key in RANK_ORDER:
        threshold = thresholds.get(key)
        if threshold is None:
            continue
        if score >= threshold:
            current = key
    return current


def rank_label(key: str) -> str:
    """'goodStart' -> 'Good Start'."""
    spaced = re.sub(r"([A-Z])", r" \1", key).strip()
    return spaced[:1].upper() + spaced[1:]
