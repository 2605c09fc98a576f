import pytest

from beebuilder.inflections import LemmInflectInflections, SuffixInflections, strategy_for


@pytest.mark.parametrize("base, expected", [
    ("walk", ["walks", "walked", "walking"]),
    ("box", ["boxs", "boxes", "boxed", "boxing"]),
    ("church", ["churchs", "churches", "churched", "churching"]),
    ("carry", ["carrys", "carries", "carried", "carrying"]),
    ("play", ["plays", "played", "playing"]),
    ("trace", ["traces", "traced", "tracing"]),
])
def test_suffix_rules(base, expected):
    assert SuffixInflections().candidates(base) == expected


def test_suffix_empty_base():
    assert SuffixInflections().candidates("") == []


def test_lemminflect_known_word():
    forms = LemmInflectInflections().candidates("walk")
    assert "walked" in forms
    assert "walking" in forms
    assert "walk" not in forms


def test_strategy_for():
    assert isinstance(strategy_for("suffix"), SuffixInflections)
    assert isinstance(strategy_for("lemminflect"), LemmInflectInflections)
