"""
read and write pipeline artifacts.

files the browser reads:
- dictionary-v1.json: {version, strict, words}
- puzzles-v1.json: {version, generatedAt, sourceDictionaryVersion, puzzles}
plus dictionary-v1-meta.json, an audit record nothing downstream reads.

every write goes through a temp file and os.replace, so a reader sees
either the old artifact or the new one, never half of either. writes
are skipped when the content wouldn't change.
"""

import json
import os
from pathlib import Path
from typing import Any
from uuid import uuid4

from .dictionary import DictionaryArtifact
from .schedule import Schedule


def serialize(payload: Any) -> str:
    """2-space JSON with a trailing newline."""
    return json.dumps(payload, indent=2) + "\n"


def load_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _atomic_temp_path(target: Path) -> Path:
    return target.parent / f".{target.name}.{uuid4().hex}.tmp"


def write_text_atomically(text: str, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = _atomic_temp_path(path)
    try:
        temp_path.write_text(text, encoding="utf-8")
        os.replace(temp_path, path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return path


def write_if_changed(text: str, path: Path) -> bool:
    """write text unless the file already holds exactly that. returns True if written."""
    try:
        existing = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = None
    if existing == text:
        return False
    write_text_atomically(text, path)
    return True


def write_dictionary(
    dictionary: DictionaryArtifact,
    metrics: dict[str, Any],
    dictionary_path: Path,
    meta_path: Path,
) -> dict[str, bool]:
    """write the dictionary and its metrics. returns name -> whether it was rewritten."""
    return {
        "dictionary": write_if_changed(serialize(dictionary.to_dict()), dictionary_path),
        "meta": write_if_changed(serialize(metrics), meta_path),
    }


def load_dictionary(path: Path) -> DictionaryArtifact:
    return DictionaryArtifact.from_dict(load_json(path))


def canonical_schedule(payload: dict[str, Any]) -> dict[str, Any]:
    """the comparable part of a schedule: everything but generatedAt."""
    return {
        "version": payload.get("version"),
        "sourceDictionaryVersion": payload.get("sourceDictionaryVersion"),
        "puzzles": payload.get("puzzles"),
    }


def write_schedule(schedule: Schedule, path: Path) -> bool:
    """
    write the puzzle schedule unless an identical one is already there.

    a missing prior file just means first run. any other read or parse
    failure propagates, leaving the old file untouched.

    returns:
        True if the file was written
    """
    payload = schedule.to_dict()
    try:
        existing = load_json(path)
    except FileNotFoundError:
        existing = None

    if isinstance(existing, dict) and canonical_schedule(existing) == canonical_schedule(payload):
        return False

    write_text_atomically(serialize(payload), path)
    return True
