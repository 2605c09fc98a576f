"""
inflection strategies for dictionary augmentation.

a strategy proposes candidate inflections for a base word. the curator
decides which candidates actually get in (they must already exist in
the normalized source corpus and pass the non-frequency filters), so a
strategy is free to over-generate.

two strategies:
- SuffixInflections: regular english suffix rules, no dependencies
- LemmInflectInflections: asks LemmInflect for every inflected form
"""

import re
from typing import Protocol

from lemminflect import getAllInflections, getAllInflectionsOOV

CONSONANT = re.compile(r"^[bcdfghjklmnpqrstvwxyz]$")
TAKES_ES = re.compile(r"(s|x|z|ch|sh)$")


class InflectionStrategy(Protocol):
    def candidates(self, base: str) -> list[str]:
        ...


class SuffixInflections:
    """
    regular suffix rules:
    - plural `s`, plus `es` after s/x/z/ch/sh
    - consonant + y -> `ies`
    - past tense `d` after e, consonant + y -> `ied`, otherwise `ed`
    - `ing`, dropping a trailing e
    """

    def candidates(self, base: str) -> list[str]:
        if not base:
            return []

        consonant_y = (
            base.endswith("y") and len(base) > 1 and bool(CONSONANT.match(base[-2]))
        )
        out = [f"{base}s"]
        if TAKES_ES.search(base):
            out.append(f"{base}es")
        if consonant_y:
            out.append(f"{base[:-1]}ies")

        if base.endswith("e"):
            out.append(f"{base}d")
            out.append(f"{base[:-1]}ing")
        elif consonant_y:
            out.append(f"{base[:-1]}ied")
            out.append(f"{base}ing")
        else:
            out.append(f"{base}ed")
            out.append(f"{base}ing")

        return list(dict.fromkeys(out))


class LemmInflectInflections:
    """
    inflections from LemmInflect's lookup tables.

    in-vocabulary lemmas use getAllInflections; unknown words fall back
    to the rule-based OOV inflector for nouns and verbs.
    """

    def __init__(self, oov_pos: tuple[str, ...] = ("NOUN", "VERB")):
        self.oov_pos = oov_pos

    def candidates(self, base: str) -> list[str]:
        if not base:
            return []

        forms = getAllInflections(base)
        if not forms:
            forms = {}
            for upos in self.oov_pos:
                forms.update(getAllInflectionsOOV(base, upos))

        out: list[str] = []
        for tag in sorted(forms):
            for form in forms[tag]:
                w = form.lower()
                if w != base:
                    out.append(w)
        return list(dict.fromkeys(out))


def strategy_for(name: str) -> InflectionStrategy:
    """look up an inflection strategy by its policy name."""
    if name == "lemminflect":
        return LemmInflectInflections()
    return SuffixInflections()
