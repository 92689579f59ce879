"""
Calendrier sexagésimal: pilier du jour (tronc céleste, branche terrestre, élément).

Le cycle des 60 jours combine 10 troncs célestes et 12 branches terrestres. Le jour de
référence est le 1er janvier 1900, considéré comme jour Gab-Ja (indices 0/0). Tous les
calculs sont purs et déterministes: la même date produit toujours le même pilier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from functools import lru_cache

REFERENCE_EPOCH = date(1900, 1, 1)
ZODIAC_EPOCH_YEAR = 1924  # année du Rat

LOCAL_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class Element(str, Enum):
    """Les cinq éléments."""

    WOOD = "Wood"
    FIRE = "Fire"
    EARTH = "Earth"
    METAL = "Metal"
    WATER = "Water"


HEAVENLY_STEMS: tuple[str, ...] = (
    "Gab (甲)", "Eul (乙)", "Byeong (丙)", "Jeong (丁)", "Mu (戊)",
    "Gi (己)", "Gyeong (庚)", "Sin (辛)", "Im (壬)", "Gye (癸)",
)

EARTHLY_BRANCHES: tuple[str, ...] = (
    "Ja (子)", "Chuk (丑)", "In (寅)", "Myo (卯)", "Jin (辰)", "Sa (巳)",
    "O (午)", "Mi (未)", "Sin (申)", "Yu (酉)", "Sul (戌)", "Hae (亥)",
)

# Deux troncs consécutifs par élément
STEM_ELEMENTS: tuple[Element, ...] = (
    Element.WOOD, Element.WOOD,
    Element.FIRE, Element.FIRE,
    Element.EARTH, Element.EARTH,
    Element.METAL, Element.METAL,
    Element.WATER, Element.WATER,
)

ELEMENT_THEMES: dict[Element, str] = {
    Element.WOOD: "Growth, flexibility, vision",
    Element.FIRE: "Warmth, clarity, expression",
    Element.EARTH: "Stability, nourishment, grounding",
    Element.METAL: "Precision, refinement, letting go",
    Element.WATER: "Flow, depth, adaptation",
}

ZODIAC_ANIMALS: tuple[str, ...] = (
    "Rat", "Ox", "Tiger", "Rabbit", "Dragon", "Snake",
    "Horse", "Goat", "Monkey", "Rooster", "Dog", "Pig",
)


@dataclass(frozen=True)
class DayPillar:
    """Position d'un jour dans le cycle sexagésimal."""

    stem_index: int
    branch_index: int
    element: Element

    @property
    def heavenly_stem(self) -> str:
        return HEAVENLY_STEMS[self.stem_index]

    @property
    def earthly_branch(self) -> str:
        return EARTHLY_BRANCHES[self.branch_index]

    @property
    def element_theme(self) -> str:
        return ELEMENT_THEMES[self.element]


def element_for_stem(stem_index: int) -> Element:
    """Retourne l'élément associé à un indice de tronc (0-9)."""
    return STEM_ELEMENTS[stem_index]


@lru_cache(maxsize=1024)
def compute_day_pillar(local_date: date) -> DayPillar:
    """
    Calcule le pilier du jour pour une date calendaire.

    L'écart en jours par rapport à l'époque de référence peut être négatif; le modulo
    Python étant un modulo plancher, les indices restent dans [0, 10) et [0, 12).
    """
    days_diff = (local_date - REFERENCE_EPOCH).days
    stem_index = days_diff % len(HEAVENLY_STEMS)
    branch_index = days_diff % len(EARTHLY_BRANCHES)
    return DayPillar(
        stem_index=stem_index,
        branch_index=branch_index,
        element=element_for_stem(stem_index),
    )


def zodiac_animal(year: int) -> str:
    """
    Animal du zodiaque pour une année grégorienne.

    Approximation: la frontière du nouvel an lunaire est ignorée, une naissance en
    janvier reçoit donc l'animal de l'année civile.
    """
    return ZODIAC_ANIMALS[(year - ZODIAC_EPOCH_YEAR) % len(ZODIAC_ANIMALS)]


def parse_local_date(value: str) -> date:
    """
    Parse une date locale stricte `YYYY-MM-DD`.

    Lève `ValueError` si le format ou la date calendaire est invalide.
    """
    if not LOCAL_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"invalid local date format: {value!r}")
    return date.fromisoformat(value)
