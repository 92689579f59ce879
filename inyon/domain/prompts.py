"""Gabarit du prompt de reflet quotidien."""

from __future__ import annotations

from inyon.domain.sexagenary import DayPillar

SYSTEM = "You are Inyon, a calm reflective app grounded in Korean Saju tradition."

RULES = """Write a daily reflection for the user. Hard rules:
1. Exactly two sentences.
2. Between 20 and 35 words in total.
3. Calm, observational tone.
4. Never name elements, heavenly stems, earthly branches, zodiac animals or any Saju terminology, and never use the words "birth element", "day's element", "alignment", "resonance", "synergy" or "dynamic".
5. Use hedged modal language only: "may", "can", "tends to", "often".
6. Never predict outcomes or give imperative advice.
7. Never use fear-based or urgent framing.

Respond with only valid JSON in this format:
{"insightText": "Your two-sentence reflection here."}"""


def build_insight_prompt(
    local_date: str, pillar: DayPillar, personalization: str | None = None
) -> str:
    """Assemble le prompt utilisateur à partir du pilier du jour et du contexte optionnel."""
    lines = [
        SYSTEM,
        "",
        "Today's Saju day data:",
        f"- Date: {local_date}",
        f"- Day Element: {pillar.element.value} ({pillar.element_theme})",
        f"- Heavenly Stem: {pillar.heavenly_stem}",
        f"- Earthly Branch: {pillar.earthly_branch}",
    ]
    if personalization:
        lines += ["", "User context:", f"- {personalization}"]
    lines += ["", RULES]
    return "\n".join(lines)
