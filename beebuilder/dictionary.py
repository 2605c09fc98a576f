"""
dictionary curation.

turns raw source words into the published word list. curation runs as
a chain of stages, each taking the current word set plus a stats
record and returning new ones:

    normalize -> filter -> allow-list -> inflections -> block-list

stats are threaded through as immutable values so each stage can be
exercised on its own.
"""

import unicodedata
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping

from .config import Policy
from .filters import (
    DEMONYM,
    GEO,
    LOW_FREQUENCY,
    MISSING_FREQUENCY,
    PROFANITY,
    RARE,
    SHAPE,
    WordFilter,
    is_valid_word,
)
from .inflections import InflectionStrategy, strategy_for
from .sources import SourceCorpus, iter_unique


# filter reason -> stats field
_REASON_FIELDS = {
    SHAPE: "removed_abbreviations",
    LOW_FREQUENCY: "removed_by_frequency",
    MISSING_FREQUENCY: "removed_missing_frequency",
    PROFANITY: "removed_profanity",
    GEO: "removed_geo_terms",
    DEMONYM: "removed_demonyms",
    RARE: "removed_rare",
}


@dataclass(frozen=True)
class CurationStats:
    input_total: int = 0
    normalized_total: int = 0
    removed_by_frequency: int = 0
    removed_missing_frequency: int = 0
    removed_profanity: int = 0
    removed_geo_terms: int = 0
    removed_demonyms: int = 0
    removed_abbreviations: int = 0
    removed_rare: int = 0
    inflections_added: int = 0
    allowlist_added: int = 0
    allowlist_rejected: int = 0
    blocklist_removed: int = 0
    final_total: int = 0

    def counts(self) -> dict[str, int]:
        """counters keyed the way the metrics artifact spells them."""
        return {
            "inputTotal": self.input_total,
            "normalizedTotal": self.normalized_total,
            "removedByFrequency": self.removed_by_frequency,
            "removedMissingFrequency": self.removed_missing_frequency,
            "removedProfanity": self.removed_profanity,
            "removedGeoTerms": self.removed_geo_terms,
            "removedDemonyms": self.removed_demonyms,
            "removedAbbreviations": self.removed_abbreviations,
            "removedRare": self.removed_rare,
            "inflectionsAdded": self.inflections_added,
            "allowlistAdded": self.allowlist_added,
            "allowlistRejected": self.allowlist_rejected,
            "blocklistRemoved": self.blocklist_removed,
            "finalTotal": self.final_total,
        }


@dataclass(frozen=True)
class DictionaryArtifact:
    """the published dictionary: sorted, unique, lowercase words."""

    version: str
    words: tuple[str, ...]
    strict: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"version": self.version, "strict": self.strict, "words": list(self.words)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DictionaryArtifact":
        return cls(
            version=data.get("version"),
            strict=data.get("strict", True),
            words=tuple(data.get("words") or ()),
        )


@dataclass(frozen=True)
class CurationResult:
    dictionary: DictionaryArtifact
    stats: CurationStats


# --- stages ---


def normalize(words: Iterable[str], stats: CurationStats) -> tuple[tuple[str, ...], CurationStats]:
    """NFKC-normalize, lower-case and dedupe, keeping first-seen order."""
    words = list(words)
    normalized = tuple(
        iter_unique(unicodedata.normalize("NFKC", w).lower() for w in words)
    )
    return normalized, replace(stats, input_total=len(words), normalized_total=len(normalized))


def filter_words(
    words: Iterable[str],
    word_filter: WordFilter,
    frequency: Mapping[str, float],
    stats: CurationStats,
) -> tuple[frozenset[str], CurationStats]:
    """drop words that fail the policy, charging each to one reason."""
    kept: set[str] = set()
    removed = {name: 0 for name in _REASON_FIELDS.values()}
    for w in words:
        reason = word_filter.reject_reason(w, frequency)
        if reason is None:
            kept.add(w)
        else:
            removed[_REASON_FIELDS[reason]] += 1

    updates = {name: getattr(stats, name) + n for name, n in removed.items()}
    return frozenset(kept), replace(stats, **updates)


def add_allowlist(
    words: frozenset[str],
    allowlist: Iterable[str],
    stats: CurationStats,
    min_length: int = 4,
) -> tuple[frozenset[str], CurationStats]:
    """
    add allow-listed words that aren't already in.

    the allow-list overrides frequency, denylists and patterns, but a
    malformed entry (non a-z, too short) is skipped and counted.
    """
    candidates = frozenset(allowlist) - words
    added = frozenset(w for w in candidates if is_valid_word(w, min_length=min_length))
    return words | added, replace(
        stats,
        allowlist_added=stats.allowlist_added + len(added),
        allowlist_rejected=stats.allowlist_rejected + len(candidates - added),
    )


def add_inflections(
    words: frozenset[str],
    corpus: frozenset[str],
    word_filter: WordFilter,
    strategy: InflectionStrategy,
    stats: CurationStats,
) -> tuple[frozenset[str], CurationStats]:
    """
    add inflected forms of accepted words.

    a candidate is only added when it's in the normalized corpus and
    passes the same non-frequency checks a base word would; frequency
    never gets an inflection in on its own.
    """
    added: set[str] = set()
    for base in sorted(words):
        for candidate in strategy.candidates(base):
            if candidate in words or candidate in added:
                continue
            if candidate not in corpus:
                continue
            if not word_filter.eligible_without_frequency(candidate):
                continue
            added.add(candidate)
    return words | added, replace(stats, inflections_added=stats.inflections_added + len(added))


def remove_blocklist(
    words: frozenset[str], blocklist: Iterable[str], stats: CurationStats
) -> tuple[frozenset[str], CurationStats]:
    removed = words & frozenset(blocklist)
    return words - removed, replace(stats, blocklist_removed=stats.blocklist_removed + len(removed))


# --- pipeline ---


def curate(
    source_words: Iterable[str],
    allowlist: Iterable[str],
    blocklist: Iterable[str],
    policy: Policy,
    frequency: Mapping[str, float] | None = None,
    *,
    strategy: InflectionStrategy | None = None,
    version: str = "v1",
    verbose: bool = False,
) -> CurationResult:
    """
    run every curation stage over the source words.

    args:
        source_words: concatenated raw source words
        allowlist: words always added
        blocklist: words always removed (last)
        policy: curation policy
        frequency: word -> zipf table (ignored unless the policy enables it)
        strategy: inflection strategy (default: the policy's choice)
        version: dictionary artifact version

    returns:
        CurationResult with the sorted dictionary and stats
    """
    frequency = frequency or {}
    word_filter = WordFilter(policy)
    stats = CurationStats()

    normalized, stats = normalize(source_words, stats)
    words, stats = filter_words(normalized, word_filter, frequency, stats)
    words, stats = add_allowlist(words, allowlist, stats, min_length=policy.minimum_length)
    if policy.include_common_inflections:
        words, stats = add_inflections(
            words,
            frozenset(normalized),
            word_filter,
            strategy or strategy_for(policy.inflection_strategy),
            stats,
        )
    words, stats = remove_blocklist(words, blocklist, stats)

    ordered = tuple(sorted(words))
    stats = replace(stats, final_total=len(ordered))

    if verbose:
        print("  curation stats:")
        for key, value in stats.counts().items():
            print(f"    {key + ':':<26}{value:,}")

    return CurationResult(
        dictionary=DictionaryArtifact(version=version, words=ordered),
        stats=stats,
    )


def build_metrics(
    policy: Policy,
    corpus: SourceCorpus,
    frequency_rows: int,
    stats: CurationStats,
) -> dict[str, Any]:
    """provenance record for a curation run. audit only."""
    freq = policy.frequency
    return {
        "sourceName": "scowl+wordfreq+project-policy",
        "sourceVersion": policy.source_version,
        "license": "mixed-open-sources",
        "policyVersion": policy.version,
        "sourceFilesUsed": list(corpus.files_used),
        "sourceWordCounts": dict(corpus.word_counts),
        "frequency": {
            "enabled": freq.enabled,
            "file": None if freq.format == "wordfreq" else freq.path,
            "format": freq.format,
            "minZipf": freq.min_zipf,
            "rowsLoaded": frequency_rows,
        },
        "counts": stats.counts(),
    }
