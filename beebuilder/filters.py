"""
word filters for dictionary curation.

a word is rejected (and counted) when it:
- isn't purely lowercase a-z
- is shorter than the policy minimum
- matches one of the policy's blocked regex patterns
- fails the frequency gate (below cutoff, or unscored when scores are required)
- sits in an enabled denylist (profanity, geo terms, demonyms, rare terms)

shape checks run first, then frequency, then the denylists, so every
rejected word is charged to exactly one reason.
"""

import re
from typing import Mapping

from .config import Policy
from .errors import ConfigurationError

ALPHA_WORD = re.compile(r"^[a-z]+$")

# rejection reasons, in the order they're checked
SHAPE = "abbreviation"
LOW_FREQUENCY = "frequency"
MISSING_FREQUENCY = "missing_frequency"
PROFANITY = "profanity"
GEO = "geo"
DEMONYM = "demonym"
RARE = "rare"


def compile_patterns(patterns: tuple[str, ...]) -> list[re.Pattern[str]]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(f"invalid blockedPatterns entry {pattern!r}: {e}")
    return compiled


class WordFilter:
    """policy-bound word checks."""

    def __init__(self, policy: Policy):
        self.policy = policy
        self.patterns = compile_patterns(policy.blocked_patterns)
        self._categories = [
            (policy.exclude_profanity, policy.profanity, PROFANITY),
            (policy.exclude_geo_terms, policy.geo_terms, GEO),
            (policy.exclude_demonyms, policy.demonyms, DEMONYM),
            (policy.exclude_rare, policy.rare_terms, RARE),
        ]

    def shape_reason(self, word: str) -> str | None:
        if not ALPHA_WORD.match(word):
            return SHAPE
        if len(word) < self.policy.minimum_length:
            return SHAPE
        if any(p.search(word) for p in self.patterns):
            return SHAPE
        return None

    def frequency_reason(self, word: str, table: Mapping[str, float]) -> str | None:
        freq = self.policy.frequency
        if not freq.gate_active:
            return None
        score = table.get(word)
        if score is None:
            return MISSING_FREQUENCY if freq.require_score else None
        if score < freq.min_zipf:
            return LOW_FREQUENCY
        return None

    def category_reason(self, word: str) -> str | None:
        for enabled, terms, reason in self._categories:
            if enabled and word in terms:
                return reason
        return None

    def reject_reason(self, word: str, table: Mapping[str, float]) -> str | None:
        """first failing check for word, or None if it's kept."""
        return (
            self.shape_reason(word)
            or self.frequency_reason(word, table)
            or self.category_reason(word)
        )

    def eligible_without_frequency(self, word: str) -> bool:
        """passes everything except the frequency gate (used for inflections)."""
        return self.shape_reason(word) is None and self.category_reason(word) is None


def is_valid_word(word: str, *, min_length: int = 4) -> bool:
    """lowercase a-z and long enough. gates allow-list entries."""
    return bool(ALPHA_WORD.match(word)) and len(word) >= min_length
