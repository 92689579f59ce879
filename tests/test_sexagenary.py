"""Tests pour le calendrier sexagésimal.

Ce module teste le calcul du pilier du jour, la table tronc → élément, le zodiaque et
le parsing strict des dates locales.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from inyon.domain.sexagenary import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    REFERENCE_EPOCH,
    Element,
    compute_day_pillar,
    element_for_stem,
    parse_local_date,
    zodiac_animal,
)

GOLDEN_STEM = 0
GOLDEN_BRANCH = 6


def test_golden_day_2024_02_10() -> None:
    """Valeur de référence figée: 2024-02-10 → Gab (甲) / O (午), Wood."""
    pillar = compute_day_pillar(date(2024, 2, 10))
    assert (pillar.stem_index, pillar.branch_index) == (GOLDEN_STEM, GOLDEN_BRANCH)
    assert pillar.heavenly_stem == "Gab (甲)"
    assert pillar.earthly_branch == "O (午)"
    assert pillar.element is Element.WOOD
    assert pillar.element_theme == "Growth, flexibility, vision"


def test_reference_epoch_is_cycle_start() -> None:
    """Le jour de référence est l'indice 0/0."""
    pillar = compute_day_pillar(REFERENCE_EPOCH)
    assert (pillar.stem_index, pillar.branch_index) == (0, 0)


def test_day_before_epoch_wraps_to_end_of_cycle() -> None:
    """Un jour avant l'époque: indices normalisés 9/11, pas -1."""
    pillar = compute_day_pillar(REFERENCE_EPOCH - timedelta(days=1))
    assert (pillar.stem_index, pillar.branch_index) == (9, 11)
    assert pillar.element is Element.WATER


def test_deterministic() -> None:
    """Deux appels sur la même date donnent le même pilier."""
    d = date(1987, 7, 23)
    assert compute_day_pillar(d) == compute_day_pillar(date(1987, 7, 23))


@pytest.mark.parametrize("offset", [-40000, -3653, -61, -1, 0, 1, 59, 60, 3653, 45330, 80000])
def test_indices_in_range(offset: int) -> None:
    """Indices toujours dans [0,10) et [0,12), avant comme après l'époque."""
    pillar = compute_day_pillar(REFERENCE_EPOCH + timedelta(days=offset))
    assert 0 <= pillar.stem_index < len(HEAVENLY_STEMS)
    assert 0 <= pillar.branch_index < len(EARTHLY_BRANCHES)
    assert pillar.stem_index == offset % 10
    assert pillar.branch_index == offset % 12


def test_cycle_repeats_every_sixty_days() -> None:
    d = date(2024, 2, 10)
    assert compute_day_pillar(d) == compute_day_pillar(d + timedelta(days=60))
    assert compute_day_pillar(d) != compute_day_pillar(d + timedelta(days=10))


def test_stem_element_table() -> None:
    """Deux troncs consécutifs par élément."""
    expected = [
        Element.WOOD, Element.WOOD, Element.FIRE, Element.FIRE, Element.EARTH,
        Element.EARTH, Element.METAL, Element.METAL, Element.WATER, Element.WATER,
    ]
    assert [element_for_stem(i) for i in range(10)] == expected


def test_element_follows_stem() -> None:
    for offset in range(60):
        pillar = compute_day_pillar(REFERENCE_EPOCH + timedelta(days=offset))
        assert pillar.element is element_for_stem(pillar.stem_index)


def test_zodiac_animal() -> None:
    assert zodiac_animal(1924) == "Rat"
    assert zodiac_animal(2024) == "Dragon"
    assert zodiac_animal(1990) == "Horse"
    assert zodiac_animal(1923) == "Pig"


def test_zodiac_ignores_lunar_new_year() -> None:
    """Approximation conservée: le nouvel an lunaire 2024 (10 février) est ignoré."""
    birth = date(2024, 1, 15)
    assert zodiac_animal(birth.year) == "Dragon"


def test_parse_local_date_valid() -> None:
    assert parse_local_date("2024-02-10") == date(2024, 2, 10)


@pytest.mark.parametrize("value", ["2024-2-10", "20240210", "2024/02/10", "", "2024-02-10T00:00"])
def test_parse_local_date_bad_format(value: str) -> None:
    with pytest.raises(ValueError):
        parse_local_date(value)


def test_parse_local_date_impossible_day() -> None:
    """Format correct mais date calendaire impossible."""
    with pytest.raises(ValueError):
        parse_local_date("2024-02-30")


@pytest.mark.parametrize("value", ["2024-02-10\n", "２０２４-02-10", " 2024-02-10"])
def test_parse_local_date_ascii_digits_only(value: str) -> None:
    with pytest.raises(ValueError):
        parse_local_date(value)
