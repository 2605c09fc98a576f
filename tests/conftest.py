import json
from pathlib import Path

import pytest

from beebuilder.config import Config

# every word below uses only a, c, e, l, n, r, t
CENTRAL_WORDS = [
    "acre", "alert", "alter", "cant", "canter", "care", "cart", "cent",
    "central", "clan", "clear", "crane", "lance", "later", "learn", "neat",
    "near", "nectar", "rant", "rate", "react", "real", "recant", "rental",
    "tale", "talent", "tear", "trace", "trance",
]


def write_project(
    root: Path,
    words: list[str],
    policy: dict | None = None,
    allow: list[str] = (),
    block: list[str] = (),
) -> Config:
    raw = root / "data" / "raw"
    raw.mkdir(parents=True, exist_ok=True)
    (raw / "dictionary-base.txt").write_text("# base\n" + "\n".join(words) + "\n", encoding="utf-8")
    (raw / "allowlist.txt").write_text("\n".join(allow) + "\n", encoding="utf-8")
    (raw / "blocklist.txt").write_text("\n".join(block) + "\n", encoding="utf-8")
    policy = policy if policy is not None else {
        "version": "v1",
        "minimumLength": 4,
        "sourceWordLists": [
            "data/raw/dictionary-base.txt",
            {"path": "data/raw/missing.txt", "optional": True},
        ],
    }
    (raw / "policy.json").write_text(json.dumps(policy), encoding="utf-8")
    return Config(root=root)


@pytest.fixture
def project(tmp_path: Path) -> Config:
    return write_project(tmp_path, CENTRAL_WORDS + ["ancestral", "rats"])


@pytest.fixture
def central_words() -> list[str]:
    return list(CENTRAL_WORDS)
