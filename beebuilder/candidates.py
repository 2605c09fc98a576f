"""
puzzle candidate generation.

every word with exactly 7 distinct letters defines a letter group.
each group yields up to 7 candidates, one per choice of center letter.
words are matched against a group with 26-bit letter masks, vectorized
over the whole dictionary with numpy.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .config import Config, DEFAULT_CONFIG, ScoringRules
from .rankings import rank_thresholds
from .scoring import DEFAULT_RULES, max_score

GROUP_SIZE = 7


@dataclass
class Candidate:
    """a provisional puzzle: one letter group plus a center letter."""

    signature: str
    center_letter: str
    outer_letters: tuple[str, ...]
    valid_words: tuple[str, ...]
    pangrams: tuple[str, ...]
    max_score: int
    rank_thresholds: dict[str, int]

    # ranking only, never published
    quality: int

    @property
    def key(self) -> tuple[str, str]:
        return (self.signature, self.center_letter)


def letter_mask(word: str) -> int:
    """26-bit mask of the letters in word; 0 if it has anything outside a-z."""
    m = 0
    for ch in word:
        i = ord(ch) - 97
        if i < 0 or i >= 26:
            return 0
        m |= 1 << i
    return m


def letter_masks(words: Sequence[str]) -> NDArray[np.uint32]:
    return np.fromiter((letter_mask(w) for w in words), dtype=np.uint32, count=len(words))


def letter_groups(words: Sequence[str]) -> dict[str, str]:
    """
    find every 7-letter group, first-seen first.

    returns:
        sorted-letter signature -> the group's letters in the order they
        appear in the first word that produced it
    """
    groups: dict[str, str] = {}
    for w in words:
        if len(w) < GROUP_SIZE:
            continue
        letters = "".join(dict.fromkeys(w))
        if len(letters) != GROUP_SIZE:
            continue
        signature = "".join(sorted(letters))
        if signature not in groups:
            groups[signature] = letters
    return groups


def quality_score(max_points: int, n_words: int, n_pangrams: int) -> int:
    return max_points + 3 * n_words + 10 * n_pangrams


def generate_candidates(
    words: Sequence[str],
    *,
    min_length: int = 4,
    rules: ScoringRules = DEFAULT_RULES,
    config: Config = DEFAULT_CONFIG,
) -> list[Candidate]:
    """
    enumerate and rank every playable candidate.

    args:
        words: dictionary words
        min_length: words shorter than this are never playable
        rules: scoring constants
        config: min_words / min_pangrams thresholds

    returns:
        candidates sorted by descending quality; ties keep discovery order
    """
    words = [w for w in words if len(w) >= min_length]
    masks = letter_masks(words)
    usable = masks != 0
    word_array = np.array(words, dtype=object)

    candidates: list[Candidate] = []
    seen: set[tuple[str, str]] = set()

    for signature, letters in letter_groups(words).items():
        group = np.uint32(letter_mask(letters))
        inside = usable & ((masks & ~group) == 0)
        full = inside & (masks == group)

        for center in letters:
            if (signature, center) in seen:
                continue
            bit = np.uint32(1 << (ord(center) - 97))
            has_center = (masks & bit) != 0

            valid = sorted(set(word_array[inside & has_center].tolist()))
            if len(valid) < config.min_words:
                continue
            pangrams = sorted(set(word_array[full].tolist()))
            if len(pangrams) < config.min_pangrams:
                continue

            points = max_score(valid, pangrams, rules)
            seen.add((signature, center))
            candidates.append(
                Candidate(
                    signature=signature,
                    center_letter=center,
                    outer_letters=tuple(sorted(c for c in letters if c != center)),
                    valid_words=tuple(valid),
                    pangrams=tuple(pangrams),
                    max_score=points,
                    rank_thresholds=rank_thresholds(points),
                    quality=quality_score(points, len(valid), len(pangrams)),
                )
            )

    # stable sort keeps discovery order for equal quality
    return sorted(candidates, key=lambda c: -c.quality)
