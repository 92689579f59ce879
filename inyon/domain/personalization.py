"""
Construction du contexte de personnalisation injecté dans le prompt.

À partir de la date de naissance (si connue) et des centres d'intérêt de l'utilisateur,
produit une courte description bornée: élément de naissance, animal du zodiaque et
relation avec l'élément du jour. Ce texte est du contenu de prompt, jamais affiché.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from inyon.domain.elements import relationship, relationship_phrase
from inyon.domain.entities import BirthContext
from inyon.domain.sexagenary import Element, compute_day_pillar, zodiac_animal

DEFAULT_FOCUS_AREAS_MAX = 10
FOCUS_AREA_MAX_CHARS = 40


def _bounded_focus_areas(focus_areas: Iterable[str], limit: int) -> list[str]:
    """Nettoie la liste: entrées vides retirées, doublons ignorés, ordre conservé, plafond."""
    out: list[str] = []
    for raw in focus_areas:
        area = " ".join(str(raw).split())[:FOCUS_AREA_MAX_CHARS]
        if not area or area in out:
            continue
        out.append(area)
        if len(out) >= limit:
            break
    return out


def birth_context(
    birth_date: date | None,
    focus_areas: Iterable[str] | None = None,
    *,
    focus_areas_max: int = DEFAULT_FOCUS_AREAS_MAX,
) -> BirthContext | None:
    """Dérive le contexte de naissance typé, ou None si la date est inconnue."""
    if birth_date is None:
        return None
    return BirthContext(
        birth_element=compute_day_pillar(birth_date).element,
        birth_zodiac=zodiac_animal(birth_date.year),
        focus_areas=_bounded_focus_areas(focus_areas or [], focus_areas_max),
    )


def build_personalization_context(
    birth_date: date | None,
    focus_areas: Iterable[str] | None,
    day_element: Element,
    *,
    focus_areas_max: int = DEFAULT_FOCUS_AREAS_MAX,
) -> str | None:
    """
    Produit la chaîne de contexte personnalisé pour le prompt.

    Retour:
    - None si la date de naissance est absente.
    - Sinon une ou deux phrases: élément/zodiaque/relation, puis les centres d'intérêt.
    """
    ctx = birth_context(birth_date, focus_areas, focus_areas_max=focus_areas_max)
    if ctx is None:
        return None
    kind = relationship(ctx.birth_element, day_element)
    text = (
        f"The user's birth element is {ctx.birth_element.value} "
        f"and their zodiac animal is the {ctx.birth_zodiac}. "
        f"Their nature {relationship_phrase(kind)} ({day_element.value})."
    )
    if ctx.focus_areas:
        text += f" They are currently focused on: {', '.join(ctx.focus_areas)}."
    return text
