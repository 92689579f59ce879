"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Centraliser la résolution de l'appelant et de l'orchestrateur depuis le conteneur.
- Permettre de substituer ces dépendances dans les tests via `app.dependency_overrides`.
"""

from fastapi import Header

from inyon.core.container import container
from inyon.domain.auth import caller_from_authorization
from inyon.domain.daily_insight import DailyInsightOrchestrator
from inyon.domain.entities import CallerIdentity


def get_caller(authorization: str | None = Header(None)) -> CallerIdentity | None:
    """Identité de l'appelant, ou None; le refus est décidé par l'orchestrateur."""
    return caller_from_authorization(
        authorization, container.settings.JWT_SECRET, container.settings.JWT_ALG
    )


def get_orchestrator() -> DailyInsightOrchestrator:
    """Orchestrateur configuré par le conteneur."""
    return container.orchestrator
