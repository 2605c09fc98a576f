"""
raw word-list loading.

each list is plain text, one word per line. lines are lower-cased and
trimmed, only the first whitespace-delimited token is kept, blank lines
and `#` comments are dropped.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from .config import Config, DEFAULT_CONFIG, SourceSpec
from .errors import ConfigurationError


@dataclass
class SourceCorpus:
    """concatenated source words plus provenance."""

    words: list[str]
    files_used: list[str] = field(default_factory=list)
    word_counts: dict[str, int] = field(default_factory=dict)


def parse_word_lines(text: str) -> list[str]:
    words: list[str] = []
    for line in text.splitlines():
        raw = line.strip().lower()
        if not raw or raw.startswith("#"):
            continue
        words.append(raw.split()[0])
    return words


def read_text(path: Path, optional: bool = False) -> str | None:
    """
    read a utf-8 file.

    returns None only when the file is missing and optional is set;
    a missing required file raises ConfigurationError.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        if optional:
            return None
        raise ConfigurationError(f"required input not found: {path}")


def load_word_set(path: Path, optional: bool = False) -> frozenset[str]:
    """load an allow/block list as a set."""
    text = read_text(path, optional=optional)
    if text is None:
        return frozenset()
    return frozenset(parse_word_lines(text))


def load_sources(
    specs: Sequence[SourceSpec],
    config: Config = DEFAULT_CONFIG,
    max_workers: int = 4,
) -> SourceCorpus:
    """
    read every configured source list and concatenate them in order.

    lists are independent, so they're read concurrently; the merge keeps
    the configured order.

    raises:
        ConfigurationError: a required list is missing, or nothing was loaded
    """
    def _read(spec: SourceSpec) -> str | None:
        return read_text(config.resolve(spec.path), optional=spec.optional)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        texts = list(pool.map(_read, specs))

    corpus = SourceCorpus(words=[])
    for spec, text in zip(specs, texts):
        if text is None:
            continue
        words = parse_word_lines(text)
        corpus.words.extend(words)
        corpus.files_used.append(spec.path)
        corpus.word_counts[spec.path] = len(words)

    if not corpus.words:
        raise ConfigurationError(
            "no source words loaded; check sourceWordLists in the policy file"
        )
    return corpus


def iter_unique(words: Iterable[str]) -> list[str]:
    """dedupe, keeping first-seen order."""
    return list(dict.fromkeys(words))
