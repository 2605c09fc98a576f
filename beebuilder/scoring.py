"""
puzzle scoring.

the one scoring function used by both the puzzle builder and the
validator. keep it that way: two copies would drift.
"""

from typing import Iterable

from .config import ScoringRules

DEFAULT_RULES = ScoringRules()


def word_score(word: str, is_pangram: bool = False, rules: ScoringRules = DEFAULT_RULES) -> int:
    """points for one word: 1 at the short length, else its length, plus the pangram bonus."""
    points = 1 if len(word) == rules.short_word_length else len(word)
    if is_pangram:
        points += rules.pangram_bonus
    return points


def max_score(
    words: Iterable[str],
    pangrams: Iterable[str],
    rules: ScoringRules = DEFAULT_RULES,
) -> int:
    """
    total points available in a puzzle.

    args:
        words: accepted words (duplicates count once)
        pangrams: pangram subset of words
        rules: scoring constants

    returns:
        sum of word_score over the distinct words
    """
    pangram_set = set(pangrams)
    return sum(word_score(w, w in pangram_set, rules) for w in set(words))
