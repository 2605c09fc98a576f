import copy
from datetime import date

import pytest

from beebuilder.candidates import generate_candidates
from beebuilder.config import Policy
from beebuilder.errors import PipelineValidationError
from beebuilder.schedule import select_puzzles
from beebuilder.validate import validate_pipeline

POLICY = Policy()


@pytest.fixture
def artifacts(central_words):
    words = sorted(central_words)
    dictionary = {"version": "v1", "strict": True, "words": words}
    schedule = select_puzzles(generate_candidates(words), date(2026, 2, 10), 3, "v1").to_dict()
    return dictionary, schedule


def _fails(dictionary, schedule, message):
    with pytest.raises(PipelineValidationError, match=message):
        validate_pipeline(dictionary, schedule, POLICY)


def test_valid_artifacts_pass(artifacts):
    dictionary, schedule = artifacts
    summary = validate_pipeline(dictionary, schedule, POLICY)
    assert summary.dictionary_words == len(dictionary["words"])
    assert summary.puzzles == 3
    assert summary.min_length == 4


def test_center_letter_in_outer_letters(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    outer = [l for l in puzzle["outerLetters"][:5]] + [puzzle["centerLetter"]]
    puzzle["outerLetters"] = sorted(outer)
    _fails(dictionary, schedule, r"puzzle\[0\] centerLetter cannot appear in outerLetters")


@pytest.mark.parametrize("words, message", [
    (["beta", "alpha"], "must be sorted"),
    (["alpha", "alpha"], "duplicates"),
    (["Alpha"], "lowercase alpha"),
    (["bee"], "shorter than minLength"),
])
def test_dictionary_violations(artifacts, words, message):
    dictionary, schedule = artifacts
    _fails(dict(dictionary, words=words), schedule, message)


def test_dictionary_version(artifacts):
    dictionary, schedule = artifacts
    _fails(dict(dictionary, version="v2"), schedule, 'expected dictionary version "v1"')


def test_schedule_dictionary_version_mismatch(artifacts):
    dictionary, schedule = artifacts
    schedule["sourceDictionaryVersion"] = "v0"
    _fails(dictionary, schedule, "sourceDictionaryVersion must match")


def test_empty_schedule(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"] = []
    _fails(dictionary, schedule, "must not be empty")


def test_id_must_equal_date(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"][1]["id"] = "2026-03-01"
    _fails(dictionary, schedule, r"puzzle\[1\] id must equal date")


def test_dates_must_be_contiguous(artifacts):
    dictionary, schedule = artifacts
    for p in schedule["puzzles"][2:]:
        p["id"] = p["date"] = "2026-02-13"
    _fails(dictionary, schedule, r"puzzle\[2\] date must be contiguous")


def test_ids_unique_across_whole_schedule(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"].append(copy.deepcopy(schedule["puzzles"][0]))
    _fails(dictionary, schedule, r'puzzle\[3\] duplicate id "2026-02-10"')


def test_max_score_must_match_recomputed(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    puzzle["maxScore"] += 1
    puzzle["rankThresholds"]["queenBee"] += 1
    _fails(dictionary, schedule, r"puzzle\[0\] maxScore mismatch")


def test_valid_word_missing_center(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    puzzle["validWords"] = sorted(puzzle["validWords"] + ["zzzz"])
    _fails(dictionary, schedule, r"puzzle\[0\] valid word")


def test_pangram_must_be_valid_word(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    pangram = puzzle["pangrams"][0]
    puzzle["validWords"] = [w for w in puzzle["validWords"] if w != pangram]
    _fails(dictionary, schedule, "pangram missing from validWords")


def test_pangram_must_use_all_letters(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    short = next(w for w in puzzle["validWords"] if w not in puzzle["pangrams"])
    puzzle["pangrams"] = sorted(puzzle["pangrams"] + [short])
    _fails(dictionary, schedule, "pangram does not use all 7 letters")


def test_rank_thresholds_monotonic(artifacts):
    dictionary, schedule = artifacts
    thresholds = schedule["puzzles"][0]["rankThresholds"]
    thresholds["great"] = thresholds["nice"] - 1
    _fails(dictionary, schedule, 'threshold "great" must be monotonic')


def test_rank_threshold_integer(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"][0]["rankThresholds"]["good"] = 1.5
    _fails(dictionary, schedule, 'threshold "good" must be integer')


def test_top_rank_equals_max_score(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"][0]["rankThresholds"]["queenBee"] += 5
    _fails(dictionary, schedule, "queenBee threshold must equal maxScore")


def test_puzzle_dictionary_version(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"][0]["dictionaryVersion"] = "v9"
    _fails(dictionary, schedule, "dictionaryVersion must match")


def _insert_word(puzzle, word):
    puzzle["validWords"] = sorted(puzzle["validWords"] + [word])


def test_valid_word_uses_disallowed_letter(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    _insert_word(puzzle, puzzle["centerLetter"] + "zzz")
    _fails(dictionary, schedule, r'puzzle\[0\] valid word uses disallowed letter: "\wzzz"')


def test_valid_word_shorter_than_minimum(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    _insert_word(puzzle, puzzle["centerLetter"] * 3)
    _fails(dictionary, schedule, r"puzzle\[0\] valid word shorter than minLength")


def test_valid_word_not_in_dictionary(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    _insert_word(puzzle, puzzle["centerLetter"] * 4)
    _fails(dictionary, schedule, r"puzzle\[0\] valid word not in dictionary")


def test_valid_words_sorted(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    puzzle["validWords"] = list(reversed(puzzle["validWords"]))
    _fails(dictionary, schedule, r"puzzle\[0\] validWords must be sorted")


def test_valid_words_unique(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    _insert_word(puzzle, puzzle["validWords"][0])
    _fails(dictionary, schedule, r"puzzle\[0\] validWords must be unique")


def test_pangrams_sorted(artifacts):
    dictionary, schedule = artifacts
    schedule["puzzles"][0]["pangrams"] = ["zzzz", "aaaa"]
    _fails(dictionary, schedule, r"puzzle\[0\] pangrams must be sorted")


def test_pangrams_unique(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    puzzle["pangrams"] = sorted(puzzle["pangrams"] + puzzle["pangrams"][:1])
    _fails(dictionary, schedule, r"puzzle\[0\] pangrams must be unique")


def test_outer_letters_count(artifacts):
    dictionary, schedule = artifacts
    puzzle = schedule["puzzles"][0]
    puzzle["outerLetters"] = puzzle["outerLetters"][:5]
    _fails(dictionary, schedule, r"puzzle\[0\] outerLetters must have 6 letters")


@pytest.mark.parametrize("bad", ["1", "AB", "", 7])
def test_outer_letters_single_lowercase(artifacts, bad):
    dictionary, schedule = artifacts
    schedule["puzzles"][0]["outerLetters"][0] = bad
    _fails(dictionary, schedule, r"puzzle\[0\] outerLetters must be single lowercase chars")
