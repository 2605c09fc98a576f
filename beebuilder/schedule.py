"""
puzzle selection and scheduling.

takes the best candidates in quality order and gives each one a day,
starting at the requested date. a puzzle's id is its date.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Any, Sequence
from zoneinfo import ZoneInfo

from .candidates import Candidate
from .config import Config, DEFAULT_CONFIG

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date:
    """strict YYYY-MM-DD -> date. raises ValueError otherwise."""
    if not isinstance(value, str) or not ISO_DATE.match(value):
        raise ValueError(f"date must be YYYY-MM-DD, got: {value!r}")
    return date.fromisoformat(value)


def today_in(tz_name: str) -> date:
    """today's date at the day boundary timezone."""
    return datetime.now(ZoneInfo(tz_name)).date()


@dataclass
class Puzzle:
    id: str
    date: str
    center_letter: str
    outer_letters: list[str]
    dictionary_version: str
    valid_words: list[str]
    pangrams: list[str]
    max_score: int
    rank_thresholds: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "centerLetter": self.center_letter,
            "outerLetters": list(self.outer_letters),
            "dictionaryVersion": self.dictionary_version,
            "validWords": list(self.valid_words),
            "pangrams": list(self.pangrams),
            "maxScore": self.max_score,
            "rankThresholds": dict(self.rank_thresholds),
        }


@dataclass
class Schedule:
    version: str
    source_dictionary_version: str
    puzzles: list[Puzzle]
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "generatedAt": self.generated_at,
            "sourceDictionaryVersion": self.source_dictionary_version,
            "puzzles": [p.to_dict() for p in self.puzzles],
        }


def puzzle_from_candidate(candidate: Candidate, day: date, dictionary_version: str) -> Puzzle:
    iso = day.isoformat()
    return Puzzle(
        id=iso,
        date=iso,
        center_letter=candidate.center_letter,
        outer_letters=list(candidate.outer_letters),
        dictionary_version=dictionary_version,
        valid_words=list(candidate.valid_words),
        pangrams=list(candidate.pangrams),
        max_score=candidate.max_score,
        rank_thresholds=dict(candidate.rank_thresholds),
    )


def select_puzzles(
    candidates: Sequence[Candidate],
    start: date,
    count: int,
    dictionary_version: str,
    config: Config = DEFAULT_CONFIG,
) -> Schedule:
    """
    schedule the top `count` candidates on consecutive days.

    args:
        candidates: already ranked, best first
        start: date of the first puzzle (day 0)
        count: how many puzzles to publish (positive)
        dictionary_version: version of the dictionary the candidates came from

    returns:
        Schedule ready to be written
    """
    if count < 1:
        raise ValueError(f"count must be a positive integer, got: {count}")

    puzzles = [
        puzzle_from_candidate(c, start + timedelta(days=i), dictionary_version)
        for i, c in enumerate(candidates[:count])
    ]
    return Schedule(
        version=config.artifact_version,
        source_dictionary_version=dictionary_version,
        puzzles=puzzles,
    )
