"""
end-to-end build steps, shared by the scripts.

each step either finishes (artifacts written or confirmed unchanged)
or raises before touching its outputs.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date

from .artifacts import load_dictionary, load_json, write_dictionary, write_schedule
from .candidates import generate_candidates
from .config import Config, DEFAULT_CONFIG, Policy, load_policy
from .dictionary import CurationResult, CurationStats, build_metrics, curate, normalize
from .errors import ConfigurationError
from .frequency import load_frequency_table
from .schedule import Schedule, select_puzzles
from .sources import load_sources, load_word_set
from .validate import ValidationSummary, validate_pipeline


@dataclass
class DictionaryBuild:
    result: CurationResult
    written: dict[str, bool]


@dataclass
class PuzzleBuild:
    schedule: Schedule
    candidates: int
    written: bool


def build_dictionary(config: Config = DEFAULT_CONFIG, verbose: bool = True) -> DictionaryBuild:
    """curate the raw sources into the dictionary artifact."""
    # policy and the two override lists are independent reads
    with ThreadPoolExecutor(max_workers=3) as pool:
        policy_f = pool.submit(load_policy, config.policy_path)
        allow_f = pool.submit(load_word_set, config.allowlist_path)
        block_f = pool.submit(load_word_set, config.blocklist_path)
        policy, allowlist, blocklist = policy_f.result(), allow_f.result(), block_f.result()

    if verbose:
        print(f"loading {len(policy.source_word_lists)} source list(s)...")
    # a file-backed frequency table doesn't depend on the corpus, so it
    # loads alongside the sources; the wordfreq format scores the corpus itself
    table_backed = policy.frequency.format != "wordfreq"
    with ThreadPoolExecutor(max_workers=2) as pool:
        corpus_f = pool.submit(load_sources, policy.source_word_lists, config)
        freq_f = pool.submit(load_frequency_table, policy.frequency, config) if table_backed else None
        corpus = corpus_f.result()
        frequency = freq_f.result() if freq_f is not None else None
    if verbose:
        for path, n in corpus.word_counts.items():
            print(f"  {path}: {n:,} words")

    if frequency is None:
        vocab, _ = normalize(corpus.words, CurationStats())
        frequency = load_frequency_table(policy.frequency, config, vocab=vocab)
    if verbose and policy.frequency.enabled:
        print(f"  frequency rows loaded: {len(frequency):,}")

    result = curate(
        corpus.words,
        allowlist,
        blocklist,
        policy,
        frequency,
        version=config.artifact_version,
        verbose=verbose,
    )
    if result.stats.allowlist_rejected:
        print(
            f"warning: skipped {result.stats.allowlist_rejected} allow-list "
            f"word(s) that aren't lowercase a-z of length >= {policy.minimum_length}"
        )
    metrics = build_metrics(policy, corpus, len(frequency), result.stats)
    written = write_dictionary(
        result.dictionary, metrics, config.dictionary_path, config.dictionary_meta_path
    )
    return DictionaryBuild(result=result, written=written)


def build_puzzles(
    start: date,
    count: int,
    config: Config = DEFAULT_CONFIG,
    verbose: bool = True,
) -> PuzzleBuild:
    """generate, rank and schedule puzzles from the published dictionary."""
    policy = load_policy(config.policy_path)
    dictionary = load_dictionary(config.dictionary_path)
    words, version = dictionary.words, dictionary.version
    if verbose:
        print(f"dictionary {version}: {len(words):,} words")

    candidates = generate_candidates(
        words,
        min_length=policy.minimum_length,
        rules=policy.scoring,
        config=config,
    )
    if verbose:
        print(f"  candidates: {len(candidates):,}")
    if not candidates:
        raise ConfigurationError(
            f"no puzzle candidates in dictionary {version} "
            f"(need >= {config.min_words} words and >= {config.min_pangrams} pangram(s) per puzzle)"
        )

    schedule = select_puzzles(candidates, start, count, version, config)
    written = write_schedule(schedule, config.puzzles_path)
    return PuzzleBuild(schedule=schedule, candidates=len(candidates), written=written)


def validate_artifacts(config: Config = DEFAULT_CONFIG, policy: Policy | None = None) -> ValidationSummary:
    """validate the artifacts on disk."""
    policy = policy or load_policy(config.policy_path)
    return validate_pipeline(
        load_json(config.dictionary_path),
        load_json(config.puzzles_path),
        policy,
        version=config.artifact_version,
    )
