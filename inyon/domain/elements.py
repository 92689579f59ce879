"""
Relations entre éléments selon les cycles d'engendrement et de contrôle.

- Engendrement: Wood → Fire → Earth → Metal → Water → Wood
- Contrôle: Wood → Earth → Water → Fire → Metal → Wood
"""

from __future__ import annotations

from enum import Enum

from inyon.domain.sexagenary import Element

GENERATES: dict[Element, Element] = {
    Element.WOOD: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.METAL,
    Element.METAL: Element.WATER,
    Element.WATER: Element.WOOD,
}

CONTROLS: dict[Element, Element] = {
    Element.WOOD: Element.EARTH,
    Element.EARTH: Element.WATER,
    Element.WATER: Element.FIRE,
    Element.FIRE: Element.METAL,
    Element.METAL: Element.WOOD,
}


class RelationshipKind(str, Enum):
    """Nature qualitative de la relation entre deux éléments."""

    RESONATES = "resonates"
    FEEDS = "feeds"
    NOURISHED_BY = "nourished_by"
    TEMPERS = "tempers"
    CHALLENGED_BY = "challenged_by"
    MEETS = "meets"


RELATIONSHIP_PHRASES: dict[RelationshipKind, str] = {
    RelationshipKind.RESONATES: "shares the same quality as today's energy",
    RelationshipKind.FEEDS: "naturally feeds into today's energy",
    RelationshipKind.NOURISHED_BY: "is nourished by today's energy",
    RelationshipKind.TEMPERS: "tends to temper today's energy",
    RelationshipKind.CHALLENGED_BY: "is gently challenged by today's energy",
    RelationshipKind.MEETS: "meets today's energy",
}


def generates(element: Element) -> Element:
    """Élément engendré par `element`."""
    return GENERATES[element]


def controls(element: Element) -> Element:
    """Élément contrôlé par `element`."""
    return CONTROLS[element]


def relationship(subject: Element, reference: Element) -> RelationshipKind:
    """
    Classe la relation de `subject` vers `reference`.

    Règles évaluées dans l'ordre, la première qui s'applique l'emporte:
    identité, engendrement (dans les deux sens), puis contrôle (dans les deux sens).
    `MEETS` reste un repli défini bien qu'inatteignable avec cinq éléments.
    """
    if subject == reference:
        return RelationshipKind.RESONATES
    if generates(subject) == reference:
        return RelationshipKind.FEEDS
    if generates(reference) == subject:
        return RelationshipKind.NOURISHED_BY
    if controls(subject) == reference:
        return RelationshipKind.TEMPERS
    if controls(reference) == subject:
        return RelationshipKind.CHALLENGED_BY
    return RelationshipKind.MEETS


def relationship_phrase(kind: RelationshipKind) -> str:
    """Phrase descriptive (contenu de prompt) pour une relation."""
    return RELATIONSHIP_PHRASES[kind]
