"""
pipeline validation.

re-derives every invariant from the dictionary and schedule artifacts
(as loaded from disk) and stops at the first violation with a message
naming the record and the broken rule. max scores are recomputed with
the same scoring function the builder uses.
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Sequence

from .config import Policy
from .errors import PipelineValidationError
from .filters import ALPHA_WORD
from .rankings import LOWEST_RANK, RANK_ORDER, TOP_RANK
from .schedule import parse_iso_date
from .scoring import max_score

LETTER = re.compile(r"^[a-z]$")


@dataclass
class ValidationSummary:
    dictionary_words: int
    puzzles: int
    min_length: int


def check(condition: bool, message: str) -> None:
    if not condition:
        raise PipelineValidationError(message)


def _unique(values: Sequence[Any]) -> bool:
    return len(set(values)) == len(values)


def _sorted(values: Sequence[Any]) -> bool:
    return all(values[i - 1] <= values[i] for i in range(1, len(values)))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def validate_dictionary(dictionary: Any, min_length: int, version: str = "v1") -> None:
    check(isinstance(dictionary, dict), "dictionary must be a JSON object")
    check(
        dictionary.get("version") == version,
        f'expected dictionary version "{version}"; got "{dictionary.get("version")}"',
    )
    words = dictionary.get("words")
    check(_string_list(words), "dictionary.words must be an array of strings")
    check(_unique(words), "dictionary.words must not contain duplicates")
    check(_sorted(words), "dictionary.words must be sorted")
    for word in words:
        check(bool(ALPHA_WORD.match(word)), f'dictionary word must be lowercase alpha: "{word}"')
        check(len(word) >= min_length, f'dictionary word shorter than minLength ({min_length}): "{word}"')


def validate_puzzle(
    puzzle: Any,
    index: int,
    dictionary_version: str,
    policy: Policy,
    dictionary_words: frozenset[str] | None = None,
) -> None:
    """check one puzzle on its own (dates across puzzles are checked by the caller)."""
    ctx = f"puzzle[{index}]"
    min_length = policy.minimum_length
    check(isinstance(puzzle, dict), f"{ctx} must be a JSON object")

    for name in ("id", "date"):
        value = puzzle.get(name)
        try:
            parse_iso_date(value)
        except ValueError:
            check(False, f"{ctx} {name} must be ISO date")
    check(puzzle["id"] == puzzle["date"], f"{ctx} id must equal date")

    center = puzzle.get("centerLetter")
    outer = puzzle.get("outerLetters")
    check(isinstance(center, str) and bool(LETTER.match(center)), f"{ctx} invalid centerLetter")
    check(isinstance(outer, list), f"{ctx} outerLetters must be an array")
    check(len(outer) == 6, f"{ctx} outerLetters must have 6 letters")
    for letter in outer:
        check(
            isinstance(letter, str) and bool(LETTER.match(letter)),
            f"{ctx} outerLetters must be single lowercase chars",
        )
    check(_unique(outer), f"{ctx} outerLetters must be unique")
    check(center not in outer, f"{ctx} centerLetter cannot appear in outerLetters")

    allowed = {center, *outer}
    check(len(allowed) == 7, f"{ctx} must define exactly 7 unique letters")

    valid_words = puzzle.get("validWords")
    pangrams = puzzle.get("pangrams")
    check(_string_list(valid_words), f"{ctx} validWords must be an array of strings")
    check(_string_list(pangrams), f"{ctx} pangrams must be an array of strings")
    check(_unique(valid_words), f"{ctx} validWords must be unique")
    check(_unique(pangrams), f"{ctx} pangrams must be unique")
    check(_sorted(valid_words), f"{ctx} validWords must be sorted")
    check(_sorted(pangrams), f"{ctx} pangrams must be sorted")

    for word in valid_words:
        check(bool(ALPHA_WORD.match(word)), f'{ctx} validWords must be lowercase alpha: "{word}"')
        check(len(word) >= min_length, f'{ctx} valid word shorter than minLength: "{word}"')
        check(center in word, f'{ctx} valid word missing center letter: "{word}"')
        check(set(word) <= allowed, f'{ctx} valid word uses disallowed letter: "{word}"')
        if dictionary_words is not None:
            check(word in dictionary_words, f'{ctx} valid word not in dictionary: "{word}"')

    valid_set = set(valid_words)
    for word in pangrams:
        check(word in valid_set, f'{ctx} pangram missing from validWords: "{word}"')
        check(set(word) == allowed, f'{ctx} pangram does not use all 7 letters: "{word}"')

    check(
        puzzle.get("dictionaryVersion") == dictionary_version,
        f"{ctx} dictionaryVersion must match dictionary version",
    )

    stored = puzzle.get("maxScore")
    expected = max_score(valid_words, pangrams, policy.scoring)
    check(
        _is_int(stored) and stored == expected,
        f"{ctx} maxScore mismatch: expected {expected} got {stored}",
    )

    thresholds = puzzle.get("rankThresholds")
    check(isinstance(thresholds, dict), f"{ctx} missing rankThresholds")
    for key in RANK_ORDER:
        check(_is_int(thresholds.get(key)), f'{ctx} threshold "{key}" must be integer')
        check(thresholds[key] >= 0, f'{ctx} threshold "{key}" must be non-negative')
    previous = 0
    for key in RANK_ORDER:
        check(thresholds[key] >= previous, f'{ctx} threshold "{key}" must be monotonic')
        previous = thresholds[key]
    check(thresholds[LOWEST_RANK] == 0, f"{ctx} {LOWEST_RANK} threshold must be 0")
    check(thresholds[TOP_RANK] == stored, f"{ctx} {TOP_RANK} threshold must equal maxScore")


def validate_schedule(
    schedule: Any,
    dictionary_version: str,
    policy: Policy,
    version: str = "v1",
    dictionary_words: frozenset[str] | None = None,
) -> None:
    check(isinstance(schedule, dict), "puzzle schedule must be a JSON object")
    check(
        schedule.get("version") == version,
        f'expected puzzles version "{version}"; got "{schedule.get("version")}"',
    )
    check(
        schedule.get("sourceDictionaryVersion") == dictionary_version,
        "puzzles sourceDictionaryVersion must match dictionary version",
    )
    puzzles = schedule.get("puzzles")
    check(isinstance(puzzles, list), "puzzles must be an array")
    check(len(puzzles) > 0, "puzzles must not be empty")

    seen_ids: set[Any] = set()
    previous = None
    for i, puzzle in enumerate(puzzles):
        validate_puzzle(puzzle, i, dictionary_version, policy, dictionary_words)
        check(puzzle["id"] not in seen_ids, f'puzzle[{i}] duplicate id "{puzzle["id"]}"')
        seen_ids.add(puzzle["id"])

        day = parse_iso_date(puzzle["date"])
        if previous is not None:
            check(
                day - previous == timedelta(days=1),
                f"puzzle[{i}] date must be contiguous (+1 day) from previous puzzle",
            )
        previous = day


def validate_pipeline(
    dictionary: Any,
    schedule: Any,
    policy: Policy,
    version: str = "v1",
) -> ValidationSummary:
    """
    validate both artifacts and their cross references.

    args:
        dictionary: parsed dictionary artifact
        schedule: parsed puzzle schedule artifact
        policy: curation policy (minimum length, scoring constants)
        version: expected artifact version

    returns:
        ValidationSummary on success

    raises:
        PipelineValidationError: on the first violation found
    """
    validate_dictionary(dictionary, policy.minimum_length, version)
    validate_schedule(
        schedule,
        dictionary["version"],
        policy,
        version,
        dictionary_words=frozenset(dictionary["words"]),
    )
    return ValidationSummary(
        dictionary_words=len(dictionary["words"]),
        puzzles=len(schedule["puzzles"]),
        min_length=policy.minimum_length,
    )
