"""Configuration de test pour pytest avec gestion des chemins et fixtures communes.

Ajoute la racine du projet au sys.path et fournit un orchestrateur câblé sur des dépôts
en mémoire, un LLM scripté et une horloge figée.
"""

import os
import sys
from datetime import UTC, datetime

import pytest

# Ensure project root is on sys.path so that
# imports like `from inyon...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from inyon.domain.daily_insight import DailyInsightOrchestrator  # noqa: E402
from inyon.domain.generation import GenerationClient, GenerationConfig  # noqa: E402
from inyon.domain.insight_cache import InsightCache  # noqa: E402
from inyon.infra.repositories import InMemoryBirthContextRepo, InMemoryInsightRepo  # noqa: E402
from tests.fakes import RecordingSleep, ScriptedLLM, insight_json  # noqa: E402

FIXED_NOW = datetime(2024, 2, 10, 15, 30, tzinfo=UTC)


@pytest.fixture
def fixed_clock():
    """Horloge figée au 2024-02-10 15:30 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def insight_repo():
    return InMemoryInsightRepo()


@pytest.fixture
def birth_repo():
    return InMemoryBirthContextRepo()


@pytest.fixture
def scripted_llm():
    """LLM qui réussit au premier appel (remplaçable via `.script`)."""
    return ScriptedLLM([insight_json()])


@pytest.fixture
def generator(scripted_llm, recording_sleep):
    return GenerationClient(
        scripted_llm, GenerationConfig(timeout_s=0.05), sleep=recording_sleep
    )


@pytest.fixture
def orchestrator(insight_repo, birth_repo, generator, fixed_clock):
    return DailyInsightOrchestrator(
        InsightCache(insight_repo), birth_repo, generator, clock=fixed_clock
    )
