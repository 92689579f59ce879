"""
Entités du domaine métier.

Ce module définit les modèles manipulés par le service de reflets quotidiens: requête,
reflet persisté, enregistrement de naissance (document partiel) et identité de l'appelant.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from inyon.domain.sexagenary import Element


def to_epoch_millis(value: datetime) -> int:
    """Convertit un instant en millisecondes depuis l'époque Unix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp() * 1000)


def from_epoch_millis(value: int) -> datetime:
    """Convertit des millisecondes Unix en instant UTC."""
    return datetime.fromtimestamp(value / 1000, tz=UTC)


class CallerIdentity(BaseModel):
    """Identité vérifiée de l'appelant (déléguée au fournisseur d'identité)."""

    user_id: str


class InsightRequest(BaseModel):
    """Requête immuable de reflet quotidien."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    time_zone_id: str
    local_date: str  # YYYY-MM-DD


class BirthRecord(BaseModel):
    """Document de naissance lu depuis le store; chaque champ est optionnel."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    birth_date: datetime | None = None
    personal_anchors: list[str] | None = None

    def birth_day(self) -> date | None:
        """Date calendaire (UTC) de la naissance, si connue."""
        if self.birth_date is None:
            return None
        bd = self.birth_date
        if bd.tzinfo is not None:
            bd = bd.astimezone(UTC)
        return bd.date()


class BirthContext(BaseModel):
    """Contexte de personnalisation dérivé de la date de naissance."""

    birth_element: Element
    birth_zodiac: str
    focus_areas: list[str] = Field(default_factory=list)


class Insight(BaseModel):
    """Reflet quotidien persisté, un par (utilisateur, date locale, fuseau)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    local_date: str
    time_zone_id: str
    day_element: str
    element_theme: str
    heavenly_stem: str
    earthly_branch: str
    insight_text: str
    generated_at: datetime
    version: str
    source: str = "generated"

    def to_document(self) -> dict[str, Any]:
        """Sérialise vers le document stocké (camelCase, `generatedAt` en ms)."""
        doc = self.model_dump(by_alias=True)
        doc["generatedAt"] = to_epoch_millis(self.generated_at)
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Insight:
        """Reconstruit un reflet depuis un document stocké."""
        data = dict(doc)
        raw = data.get("generatedAt")
        if isinstance(raw, int | float):
            data["generatedAt"] = from_epoch_millis(int(raw))
        return cls.model_validate(data)

    def to_response(self) -> dict[str, Any]:
        """Charge utile de réponse RPC (sans la provenance)."""
        doc = self.to_document()
        doc.pop("source", None)
        return doc
