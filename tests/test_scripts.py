import importlib.util
import json
from pathlib import Path

import pytest

from .conftest import write_project

SCRIPTS = Path(__file__).parent.parent / "scripts"


def _load(name: str):
    spec = importlib.util.spec_from_file_location(name, SCRIPTS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def scripts():
    return {name: _load(name) for name in ("build_dictionary", "build_puzzles", "validate_pipeline")}


def test_full_pipeline(project, scripts, capsys):
    root = str(project.root)

    assert scripts["build_dictionary"].main(["--root", root, "-q"]) == 0
    dictionary_bytes = project.dictionary_path.read_bytes()
    dictionary = json.loads(dictionary_bytes)
    assert dictionary["words"] == sorted(set(dictionary["words"]))
    assert project.dictionary_meta_path.exists()

    # unchanged inputs -> byte-identical dictionary, write skipped
    assert scripts["build_dictionary"].main(["--root", root, "-q"]) == 0
    assert project.dictionary_path.read_bytes() == dictionary_bytes
    assert "skipped write" in capsys.readouterr().out

    args = ["--root", root, "--start=2026-02-10", "--count=2", "-q"]
    assert scripts["build_puzzles"].main(args) == 0
    schedule = json.loads(project.puzzles_path.read_text())
    assert [p["date"] for p in schedule["puzzles"]] == ["2026-02-10", "2026-02-11"]

    puzzles_bytes = project.puzzles_path.read_bytes()
    assert scripts["build_puzzles"].main(args) == 0
    assert project.puzzles_path.read_bytes() == puzzles_bytes
    assert "skipped write" in capsys.readouterr().out

    assert scripts["validate_pipeline"].main(["--root", root]) == 0
    assert "pipeline validation passed" in capsys.readouterr().out


def test_metrics_record(project, scripts):
    assert scripts["build_dictionary"].main(["--root", str(project.root), "-q"]) == 0
    meta = json.loads(project.dictionary_meta_path.read_text())
    assert meta["sourceFilesUsed"] == ["data/raw/dictionary-base.txt"]
    assert meta["counts"]["removedAbbreviations"] == 0
    assert meta["counts"]["finalTotal"] == len(json.loads(project.dictionary_path.read_text())["words"])


def test_missing_required_source_exits_nonzero(tmp_path, scripts, capsys):
    config = write_project(tmp_path, ["honey"], policy={"sourceWordLists": ["data/raw/nope.txt"]})
    assert scripts["build_dictionary"].main(["--root", str(config.root)]) == 1
    assert "nope.txt" in capsys.readouterr().err
    assert not config.dictionary_path.exists()


def test_validator_reports_first_failure(project, scripts, capsys):
    root = str(project.root)
    scripts["build_dictionary"].main(["--root", root, "-q"])
    scripts["build_puzzles"].main(["--root", root, "--start=2026-02-10", "--count=2", "-q"])

    payload = json.loads(project.puzzles_path.read_text())
    payload["puzzles"][1]["maxScore"] = 0
    project.puzzles_path.write_text(json.dumps(payload), encoding="utf-8")

    assert scripts["validate_pipeline"].main(["--root", root]) == 1
    assert "puzzle[1] maxScore mismatch" in capsys.readouterr().err


def test_build_puzzles_rejects_bad_count(project, scripts):
    with pytest.raises(SystemExit) as exc:
        scripts["build_puzzles"].main(["--root", str(project.root), "--count=0"])
    assert exc.value.code != 0


def test_no_candidates_keeps_last_schedule(tmp_path, scripts, capsys):
    config = write_project(tmp_path, ["acre", "alert", "alter", "central"])
    root = str(config.root)
    config.puzzles_path.parent.mkdir(parents=True, exist_ok=True)
    config.puzzles_path.write_text('{"previous": true}\n', encoding="utf-8")

    assert scripts["build_dictionary"].main(["--root", root, "-q"]) == 0
    assert scripts["build_puzzles"].main(["--root", root, "--start=2026-02-10", "-q"]) == 1
    assert "no puzzle candidates" in capsys.readouterr().err
    assert config.puzzles_path.read_text() == '{"previous": true}\n'


def test_frequency_table_and_allowlist_warning(tmp_path, scripts, capsys):
    policy = {
        "sourceWordLists": ["data/raw/dictionary-base.txt"],
        "frequency": {"enabled": True, "path": "data/raw/freq.tsv", "minZipf": 3.0},
    }
    config = write_project(tmp_path, ["honey", "hive", "drone"], policy=policy, allow=["x-ray"])
    (tmp_path / "data" / "raw" / "freq.tsv").write_text(
        "word\tzipf\nhoney\t4.1\nhive\t3.5\ndrone\t2.0\n", encoding="utf-8"
    )

    assert scripts["build_dictionary"].main(["--root", str(config.root), "-q"]) == 0
    assert "warning: skipped 1 allow-list word(s)" in capsys.readouterr().out
    assert json.loads(config.dictionary_path.read_text())["words"] == ["hive", "honey"]
    meta = json.loads(config.dictionary_meta_path.read_text())
    assert meta["frequency"]["rowsLoaded"] == 3
    assert meta["counts"]["removedByFrequency"] == 1
    assert meta["counts"]["allowlistRejected"] == 1


def test_bad_policy_section_exits_nonzero(tmp_path, scripts, capsys):
    config = write_project(tmp_path, ["honey"], policy={"scoring": "loud"})
    assert scripts["build_dictionary"].main(["--root", str(config.root)]) == 1
    assert "scoring must be an object" in capsys.readouterr().err
