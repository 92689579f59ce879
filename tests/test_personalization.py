"""Tests pour le contexte de personnalisation et le gabarit de prompt."""

from __future__ import annotations

from datetime import date

from inyon.domain.personalization import birth_context, build_personalization_context
from inyon.domain.prompts import build_insight_prompt
from inyon.domain.sexagenary import Element, compute_day_pillar

BIRTH = date(1990, 5, 17)
FOCUS_CAP = 10


def test_no_birth_date_returns_none() -> None:
    assert build_personalization_context(None, ["career"], Element.FIRE) is None
    assert birth_context(None) is None


def test_birth_context_fields() -> None:
    ctx = birth_context(BIRTH, ["rest"])
    assert ctx is not None
    assert ctx.birth_element is compute_day_pillar(BIRTH).element
    assert ctx.birth_zodiac == "Horse"
    assert ctx.focus_areas == ["rest"]


def test_context_embeds_element_zodiac_and_relationship() -> None:
    birth_element = compute_day_pillar(BIRTH).element
    text = build_personalization_context(BIRTH, [], birth_element)
    assert text is not None
    assert f"birth element is {birth_element.value}" in text
    assert "Horse" in text
    assert "shares the same quality" in text
    assert "focused on" not in text


def test_focus_areas_clause_appended_in_order() -> None:
    text = build_personalization_context(BIRTH, ["health", "family"], Element.WATER)
    assert text is not None
    assert text.endswith("They are currently focused on: health, family.")


def test_focus_areas_capped_and_cleaned() -> None:
    areas = ["", "  ", "career", "career"] + [f"area{i}" for i in range(30)]
    ctx = birth_context(BIRTH, areas)
    assert ctx is not None
    assert len(ctx.focus_areas) == FOCUS_CAP
    assert ctx.focus_areas[0] == "career"
    assert ctx.focus_areas.count("career") == 1


def test_focus_cap_is_configurable() -> None:
    ctx = birth_context(BIRTH, ["a", "b", "c"], focus_areas_max=2)
    assert ctx is not None
    assert ctx.focus_areas == ["a", "b"]


def test_prompt_without_personalization() -> None:
    pillar = compute_day_pillar(date(2024, 2, 10))
    prompt = build_insight_prompt("2024-02-10", pillar)
    assert "- Date: 2024-02-10" in prompt
    assert "- Day Element: Wood (Growth, flexibility, vision)" in prompt
    assert "- Heavenly Stem: Gab (甲)" in prompt
    assert "- Earthly Branch: O (午)" in prompt
    assert "User context" not in prompt
    assert "Exactly two sentences" in prompt
    assert '{"insightText"' in prompt


def test_prompt_with_personalization() -> None:
    pillar = compute_day_pillar(date(2024, 2, 10))
    prompt = build_insight_prompt("2024-02-10", pillar, "The user's birth element is Fire.")
    assert "User context:\n- The user's birth element is Fire." in prompt
