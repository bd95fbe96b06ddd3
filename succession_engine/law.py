"""
law.py - Statutory section identifiers and their citation text.

Plain constants only: the enum names a section, CITATIONS maps it to the
wording quoted in reasons and legal bases. Neither carries behaviour.

Module: succession_engine.law
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

__all__ = ['LawSection', 'CITATIONS', 'cite']


class LawSection(str, Enum):
    S3_5 = "S.3(5)"
    S29_A = "S.29(a)"
    S29_B = "S.29(b)"
    S29_C = "S.29(c)"
    S35 = "S.35"
    S35_1_A = "S.35(1)(a)"
    S35_1_B = "S.35(1)(b)"
    S36 = "S.36"
    S38 = "S.38"
    S39 = "S.39"
    S40 = "S.40"
    S41 = "S.41"

    def __str__(self) -> str:
        return self.value


CITATIONS: Mapping[LawSection, str] = MappingProxyType({
    LawSection.S3_5: "a woman who has lived with the deceased as his wife is treated as a wife for the purposes of dependency",
    LawSection.S29_A: "the wife or wives, or former wife or wives, and the children of the deceased whether or not maintained by the deceased",
    LawSection.S29_B: "parents, step-parents, grandparents, grandchildren, step-children, children taken into the family as own, "
                      "brothers, sisters, half-brothers and half-sisters, as were being maintained by the deceased",
    LawSection.S29_C: "where the deceased was a woman, her husband if he was being maintained by her",
    LawSection.S35: "intestate with one surviving spouse and children",
    LawSection.S35_1_A: "the surviving spouse takes the personal and household effects absolutely",
    LawSection.S35_1_B: "the surviving spouse takes a life interest in the whole residue, which passes to the children on its determination",
    LawSection.S36: "intestate with a surviving spouse and no children",
    LawSection.S38: "intestate with surviving children and no spouse: the estate is divided equally among the children",
    LawSection.S39: "intestate with no surviving spouse or children: the estate devolves on parents, then more remote relatives",
    LawSection.S40: "polygamous intestate: the estate is divided among the houses by the number of children in each, "
                    "adding any surviving wife as an additional unit",
    LawSection.S41: "the share of a child who predeceased leaving issue is held for that issue in equal shares",
})


def cite(section: LawSection) -> str:
    """Return 'S.x(y): wording' for a section."""
    return f"{section.value}: {CITATIONS[section]}"
