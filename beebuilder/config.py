"""
configuration for the spelling-bee data builder.

two layers:
- Config: builder constants (paths, thresholds, artifact names).
  all the magic numbers live here so they're easy to tweak.
- Policy: the curation policy read from data/raw/policy.json.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigurationError


# ordered rank keys with the fraction of max score needed to reach each one.
# lowest is always 0, top is always 1.
RANK_FRACTIONS: tuple[tuple[str, float], ...] = (
    ("beginner", 0.0),
    ("goodStart", 0.02),
    ("movingUp", 0.05),
    ("good", 0.08),
    ("solid", 0.15),
    ("nice", 0.25),
    ("great", 0.4),
    ("amazing", 0.5),
    ("genius", 0.7),
    ("queenBee", 1.0),
)

FREQUENCY_FORMATS = ("tsv", "csv", "json", "wordfreq")
INFLECTION_STRATEGIES = ("suffix", "lemminflect")


@dataclass
class Config:
    """builder configuration — tweak these as needed."""

    # schema version written into both artifacts
    artifact_version: str = "v1"

    # candidate acceptance
    min_words: int = 12
    min_pangrams: int = 1

    # default number of scheduled puzzles
    max_puzzles: int = 60

    # timezone used to decide what "today" is when --start is omitted
    day_boundary_tz: str = "America/New_York"

    # paths (relative to project root by default)
    root: Path = Path(".")
    raw_dir: Path = Path("data/raw")
    output_dir: Path = Path("data")

    # filenames
    policy_file: str = "policy.json"
    allowlist_file: str = "allowlist.txt"
    blocklist_file: str = "blocklist.txt"
    dictionary_file: str = "dictionary-v1.json"
    dictionary_meta_file: str = "dictionary-v1-meta.json"
    puzzles_file: str = "puzzles-v1.json"

    def __post_init__(self):
        """ensure paths are Path objects."""
        self.root = Path(self.root)
        self.raw_dir = Path(self.raw_dir)
        self.output_dir = Path(self.output_dir)

    def resolve(self, path: str | Path) -> Path:
        """resolve a project-relative path against root."""
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    @property
    def policy_path(self) -> Path:
        return self.resolve(self.raw_dir / self.policy_file)

    @property
    def allowlist_path(self) -> Path:
        return self.resolve(self.raw_dir / self.allowlist_file)

    @property
    def blocklist_path(self) -> Path:
        return self.resolve(self.raw_dir / self.blocklist_file)

    @property
    def dictionary_path(self) -> Path:
        return self.resolve(self.output_dir / self.dictionary_file)

    @property
    def dictionary_meta_path(self) -> Path:
        return self.resolve(self.output_dir / self.dictionary_meta_file)

    @property
    def puzzles_path(self) -> Path:
        return self.resolve(self.output_dir / self.puzzles_file)


# default config instance
DEFAULT_CONFIG = Config()


@dataclass(frozen=True)
class SourceSpec:
    """one raw word list; optional ones may be absent."""

    path: str
    optional: bool = False

    @classmethod
    def from_entry(cls, entry: Any) -> "SourceSpec":
        if isinstance(entry, str):
            return cls(path=entry)
        if isinstance(entry, dict) and entry.get("path"):
            return cls(path=str(entry["path"]), optional=bool(entry.get("optional", False)))
        raise ConfigurationError(f"invalid sourceWordLists entry: {entry!r}")


@dataclass(frozen=True)
class FrequencyPolicy:
    enabled: bool = False
    path: str = "data/raw/sources/wordfreq.tsv"
    format: str = "tsv"
    word_column: str = "word"
    zipf_column: str = "zipf"
    min_zipf: float | None = None
    require_score: bool = False
    optional: bool = False
    # only used by the wordfreq format
    lang: str = "en"
    wordlist: str = "best"

    @property
    def gate_active(self) -> bool:
        """frequency gate only applies when enabled with a cutoff."""
        return self.enabled and self.min_zipf is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FrequencyPolicy":
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"frequency must be an object; got {data!r}")
        fmt = str(data.get("format", "tsv")).lower()
        if fmt not in FREQUENCY_FORMATS:
            raise ConfigurationError(
                f"frequency.format must be one of {', '.join(FREQUENCY_FORMATS)}; got {fmt!r}"
            )
        min_zipf = data.get("minZipf")
        try:
            min_zipf = float(min_zipf) if min_zipf is not None else None
        except (TypeError, ValueError):
            raise ConfigurationError(f"frequency.minZipf must be a number; got {min_zipf!r}")
        return cls(
            enabled=bool(data.get("enabled", False)),
            path=str(data.get("path", cls.path)),
            format=fmt,
            word_column=str(data.get("wordColumn", "word")),
            zipf_column=str(data.get("zipfColumn", "zipf")),
            min_zipf=min_zipf,
            require_score=bool(data.get("requireScore", False)),
            optional=bool(data.get("optional", False)),
            lang=str(data.get("lang", "en")),
            wordlist=str(data.get("wordlist", "best")),
        )


@dataclass(frozen=True)
class ScoringRules:
    """
    scoring constants shared by puzzle generation and validation.

    a word of exactly short_word_length scores 1, anything longer scores
    its length; pangrams add pangram_bonus on top.
    """

    short_word_length: int = 4
    pangram_bonus: int = 7


@dataclass(frozen=True)
class Policy:
    """curation policy (data/raw/policy.json)."""

    minimum_length: int = 4
    frequency: FrequencyPolicy = field(default_factory=FrequencyPolicy)
    exclude_profanity: bool = False
    exclude_geo_terms: bool = False
    exclude_demonyms: bool = False
    exclude_rare: bool = False
    profanity: frozenset[str] = frozenset()
    geo_terms: frozenset[str] = frozenset()
    demonyms: frozenset[str] = frozenset()
    rare_terms: frozenset[str] = frozenset()
    blocked_patterns: tuple[str, ...] = ()
    include_common_inflections: bool = False
    inflection_strategy: str = "suffix"
    source_word_lists: tuple[SourceSpec, ...] = (SourceSpec("data/raw/dictionary-base.txt"),)
    version: str = "v1"
    source_version: str = "v1"
    scoring: ScoringRules = field(default_factory=ScoringRules)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Policy":
        """build a policy from its JSON form, filling in defaults."""
        if not isinstance(data, dict):
            raise ConfigurationError("policy must be a JSON object")

        try:
            minimum_length = int(data.get("minimumLength", 4))
        except (TypeError, ValueError):
            raise ConfigurationError(f"minimumLength must be an integer; got {data.get('minimumLength')!r}")
        if minimum_length < 1:
            raise ConfigurationError(f"minimumLength must be positive; got {minimum_length}")

        strategy = str(data.get("inflectionStrategy", "suffix")).lower()
        if strategy not in INFLECTION_STRATEGIES:
            raise ConfigurationError(
                f"inflectionStrategy must be one of {', '.join(INFLECTION_STRATEGIES)}; got {strategy!r}"
            )

        entries = data.get("sourceWordLists") or ["data/raw/dictionary-base.txt"]
        if not isinstance(entries, list):
            raise ConfigurationError("sourceWordLists must be a list")

        patterns = data.get("blockedPatterns") or []
        if not isinstance(patterns, list):
            raise ConfigurationError("blockedPatterns must be a list of regex strings")

        scoring = data.get("scoring") or {}
        if not isinstance(scoring, dict):
            raise ConfigurationError(f"scoring must be an object; got {scoring!r}")
        try:
            rules = ScoringRules(
                short_word_length=int(scoring.get("shortWordLength", minimum_length)),
                pangram_bonus=int(scoring.get("pangramBonus", 7)),
            )
        except (TypeError, ValueError):
            raise ConfigurationError(f"scoring values must be integers; got {scoring!r}")

        return cls(
            minimum_length=minimum_length,
            frequency=FrequencyPolicy.from_dict(data.get("frequency")),
            exclude_profanity=bool(data.get("excludeProfanity", False)),
            exclude_geo_terms=bool(data.get("excludeGeoTerms", False)),
            exclude_demonyms=bool(data.get("excludeDemonyms", False)),
            exclude_rare=bool(data.get("excludeRare", False)),
            profanity=_term_set(data.get("profanity")),
            geo_terms=_term_set(data.get("geoTerms")),
            demonyms=_term_set(data.get("demonyms")),
            rare_terms=_term_set(data.get("rareTerms")),
            blocked_patterns=tuple(str(p) for p in patterns),
            include_common_inflections=bool(data.get("includeCommonInflections", False)),
            inflection_strategy=strategy,
            source_word_lists=tuple(SourceSpec.from_entry(e) for e in entries),
            version=str(data.get("version", "v1")),
            source_version=str(data.get("sourceVersion", "v1")),
            scoring=rules,
        )


def _term_set(values: Any) -> frozenset[str]:
    return frozenset(str(v).strip().lower() for v in values or [] if str(v).strip())


def load_policy(path: Path) -> Policy:
    """read and parse a policy file. a missing file is a configuration error."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"policy file not found: {path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"policy file is not valid JSON: {path} ({e})")
    return Policy.from_dict(data)
