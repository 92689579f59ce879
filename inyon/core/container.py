"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôts, client LLM, client de génération,
orchestrateur) et expose un singleton `container` utilisé par les routes. Les secrets
sont résolus ici et injectés; aucun client fournisseur n'est global au module.
"""

import os

import structlog

from inyon.core.settings import Settings, get_settings
from inyon.domain.daily_insight import DailyInsightOrchestrator
from inyon.domain.generation import GenerationClient, GenerationConfig
from inyon.domain.insight_cache import InsightCache
from inyon.infra.llm.openai_client import OpenAILLM
from inyon.infra.repositories import (
    InMemoryBirthContextRepo,
    InMemoryInsightRepo,
    RedisBirthContextRepo,
    RedisInsightRepo,
)

log = structlog.get_logger(__name__)


def _env_or_settings(key: str, settings) -> str:
    """Retourne d'abord l'env, sinon l'attribut dans settings, sinon chaîne vide.

    Ne loggue jamais la valeur du secret.
    """
    val = os.getenv(key)
    if val:
        return val
    return getattr(settings, key, "") or ""


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        s = self.settings

        if s.REDIS_URL:
            try:
                self.insight_repo = RedisInsightRepo(s.REDIS_URL)
                self.birth_repo = RedisBirthContextRepo(s.REDIS_URL)
                self.storage_backend = "redis"
            except Exception as err:
                if s.REQUIRE_REDIS:
                    raise RuntimeError("Redis required but unavailable") from err
                log.warning("redis_unavailable_memory_fallback", error=type(err).__name__)
                self.insight_repo = InMemoryInsightRepo()
                self.birth_repo = InMemoryBirthContextRepo()
                self.storage_backend = "memory-fallback"
        else:
            if s.REQUIRE_REDIS:
                raise RuntimeError("Redis required but REDIS_URL not set")
            self.insight_repo = InMemoryInsightRepo()
            self.birth_repo = InMemoryBirthContextRepo()
            self.storage_backend = "memory"

        api_key = _env_or_settings("OPENAI_API_KEY", s)
        self.generation_configured = bool(api_key)
        self.llm = OpenAILLM(api_key=api_key or None, model=s.OPENAI_MODEL)
        self.generator = GenerationClient(
            self.llm,
            GenerationConfig(
                timeout_s=s.GENERATION_TIMEOUT_S,
                max_retries=s.GENERATION_MAX_RETRIES,
                backoff_base_s=s.GENERATION_BACKOFF_BASE_S,
                temperature=s.GENERATION_TEMPERATURE,
                max_tokens=s.GENERATION_MAX_TOKENS,
            ),
            model_label=s.OPENAI_MODEL,
        )
        self.insight_cache = InsightCache(self.insight_repo)
        self.orchestrator = DailyInsightOrchestrator(
            self.insight_cache,
            self.birth_repo,
            self.generator,
            version=s.INSIGHT_VERSION,
            window_days=s.LOCAL_DATE_WINDOW_DAYS,
            focus_areas_max=s.FOCUS_AREAS_MAX,
        )


container = Container()
