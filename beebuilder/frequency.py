"""word frequency tables used to prune rare words.

a table maps word -> zipf score. it can come from a local file
(tsv / csv with a header row, or json) or straight from the
`wordfreq` library for every word in the corpus.
"""

from __future__ import annotations

import csv
import io
import json
import math
from typing import Any, Iterable

from wordfreq import zipf_frequency

from .config import Config, DEFAULT_CONFIG, FrequencyPolicy
from .errors import ConfigurationError
from .sources import read_text


def score_vocab(
    vocab: Iterable[str],
    *,
    lang: str = "en",
    wordlist: str = "best",
) -> dict[str, float]:
    """score each vocab word with its zipf frequency.

    wordfreq answers 0.0 for unknown words; those are left out so the
    curator treats them as missing a score.
    """
    scored: dict[str, float] = {}
    for w in vocab:
        z = float(zipf_frequency(w, lang, wordlist=wordlist))
        if z > 0:
            scored[w] = z
    return scored


def parse_frequency_table(raw: str, policy: FrequencyPolicy) -> list[tuple[Any, Any]]:
    """parse file contents into raw (word, zipf) rows.

    raises ConfigurationError if a tabular header lacks the configured
    word / zipf columns.
    """
    if policy.format == "json":
        payload = json.loads(raw)
        if isinstance(payload, list):
            return [
                (row.get(policy.word_column), row.get(policy.zipf_column))
                for row in payload
                if isinstance(row, dict)
            ]
        if isinstance(payload, dict):
            return list(payload.items())
        raise ConfigurationError("json frequency table must be an object or an array of rows")

    delimiter = "," if policy.format == "csv" else "\t"
    lines = [line.strip() for line in raw.splitlines() if line.strip()]
    if not lines:
        return []

    reader = csv.reader(io.StringIO("\n".join(lines)), delimiter=delimiter)
    header = [col.strip() for col in next(reader)]
    if policy.word_column not in header or policy.zipf_column not in header:
        raise ConfigurationError(
            f'missing frequency columns. expected="{policy.word_column},{policy.zipf_column}" '
            f'found="{",".join(header)}"'
        )
    word_idx = header.index(policy.word_column)
    zipf_idx = header.index(policy.zipf_column)

    rows: list[tuple[Any, Any]] = []
    for cols in reader:
        word = cols[word_idx] if word_idx < len(cols) else None
        zipf = cols[zipf_idx] if zipf_idx < len(cols) else None
        rows.append((word, zipf))
    return rows


def _clean_rows(rows: Iterable[tuple[Any, Any]]) -> dict[str, float]:
    table: dict[str, float] = {}
    for word, zipf in rows:
        w = str(word if word is not None else "").strip().lower()
        try:
            z = float(zipf)
        except (TypeError, ValueError):
            continue
        if not w or not math.isfinite(z):
            continue
        table[w] = z
    return table


def load_frequency_table(
    policy: FrequencyPolicy,
    config: Config = DEFAULT_CONFIG,
    vocab: Iterable[str] = (),
) -> dict[str, float]:
    """
    load the configured frequency table.

    args:
        policy: frequency section of the curation policy
        config: used to resolve the table path
        vocab: corpus words, only consulted for the wordfreq format

    returns:
        word -> zipf. empty when frequency filtering is disabled or an
        optional table file is absent.
    """
    if not policy.enabled:
        return {}

    if policy.format == "wordfreq":
        return score_vocab(vocab, lang=policy.lang, wordlist=policy.wordlist)

    raw = read_text(config.resolve(policy.path), optional=policy.optional)
    if raw is None:
        return {}
    return _clean_rows(parse_frequency_table(raw, policy))
