"""Orchestrateur du reflet quotidien.

Ce module coordonne la validation de la requête, la consultation du cache, la
personnalisation, la génération et la persistance d'un reflet.

Machine à états d'une requête:
    Validating → CacheLookup → (hit) Returning
                             → (miss) ContextBuilding → Generating → Persisting → Returning
Toute erreur mène à l'état terminal Failed et remonte telle quelle à l'appelant.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import structlog
from opentelemetry import trace

from inyon.app.metrics import INSIGHT_CACHE, INSIGHT_REQUESTS
from inyon.domain.entities import BirthRecord, CallerIdentity, Insight, InsightRequest
from inyon.domain.errors import InsightServiceError, InvalidArgument, StorageError, Unauthenticated
from inyon.domain.generation import GenerationClient
from inyon.domain.insight_cache import InsightCache
from inyon.domain.personalization import DEFAULT_FOCUS_AREAS_MAX, build_personalization_context
from inyon.domain.prompts import build_insight_prompt
from inyon.domain.sexagenary import compute_day_pillar, parse_local_date

DEFAULT_WINDOW_DAYS = 2
INSIGHT_SOURCE = "generated"

log = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class DailyInsightOrchestrator:
    """Gestionnaire sans état d'une requête de reflet quotidien."""

    def __init__(
        self,
        cache: InsightCache,
        birth_repo,
        generator: GenerationClient,
        *,
        version: str = "v1",
        window_days: int = DEFAULT_WINDOW_DAYS,
        focus_areas_max: int = DEFAULT_FOCUS_AREAS_MAX,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialise l'orchestrateur avec ses collaborateurs.

        Paramètres:
        - cache: `InsightCache` (lecture/écriture des reflets).
        - birth_repo: dépôt des contextes de naissance (`get(user_id)`).
        - generator: `GenerationClient` configuré.
        - clock: source de l'instant courant (UTC), injectable pour les tests.
        """
        self.cache = cache
        self.birth_repo = birth_repo
        self.generator = generator
        self.version = version
        self.window_days = window_days
        self.focus_areas_max = focus_areas_max
        self.clock = clock

    def validate(
        self,
        caller: CallerIdentity | None,
        time_zone_id: str | None,
        local_date: str | None,
    ) -> InsightRequest:
        """État Validating: authentification, présence, format et fenêtre de dates."""
        if caller is None or not caller.user_id:
            raise Unauthenticated()
        if not time_zone_id or not local_date:
            raise InvalidArgument("timeZoneId and localDate are required.")
        try:
            requested = parse_local_date(local_date)
        except ValueError as err:
            raise InvalidArgument("localDate must be YYYY-MM-DD format.") from err

        today = self.clock().astimezone(UTC).date()
        if abs((requested - today).days) > self.window_days:
            raise InvalidArgument(
                f"localDate must be within {self.window_days} days of today."
            )
        return InsightRequest(
            user_id=caller.user_id, time_zone_id=time_zone_id, local_date=local_date
        )

    async def _load_birth_record(self, user_id: str) -> BirthRecord | None:
        """État ContextBuilding: lecture du document de naissance (absence tolérée)."""
        try:
            doc = await self.birth_repo.get(user_id)
            return BirthRecord.model_validate(doc) if doc else None
        except Exception as err:
            log.error("birth_context_read_failed", error=type(err).__name__)
            raise StorageError() from err

    async def get_daily_insight(
        self,
        caller: CallerIdentity | None,
        time_zone_id: str | None,
        local_date: str | None,
    ) -> Insight:
        """Traite une requête complète et retourne le reflet (en cache ou nouveau)."""
        with tracer.start_as_current_span("daily_insight"):
            try:
                insight = await self._handle(caller, time_zone_id, local_date)
            except InsightServiceError as err:
                INSIGHT_REQUESTS.labels(err.code.lower()).inc()
                raise
            return insight

    async def _handle(
        self,
        caller: CallerIdentity | None,
        time_zone_id: str | None,
        local_date: str | None,
    ) -> Insight:
        req = self.validate(caller, time_zone_id, local_date)
        bound = log.bind(local_date=req.local_date, time_zone_id=req.time_zone_id)

        cached = await self.cache.get(req.user_id, req.local_date, req.time_zone_id)
        if cached is not None:
            INSIGHT_CACHE.labels("hit").inc()
            INSIGHT_REQUESTS.labels("cache_hit").inc()
            bound.info("insight_cache_hit")
            return cached
        INSIGHT_CACHE.labels("miss").inc()

        pillar = compute_day_pillar(parse_local_date(req.local_date))
        record = await self._load_birth_record(req.user_id)
        personalization = None
        if record is not None:
            personalization = build_personalization_context(
                record.birth_day(),
                record.personal_anchors,
                pillar.element,
                focus_areas_max=self.focus_areas_max,
            )

        prompt = build_insight_prompt(req.local_date, pillar, personalization)
        text = await self.generator.generate(prompt)

        insight = Insight(
            local_date=req.local_date,
            time_zone_id=req.time_zone_id,
            day_element=pillar.element.value,
            element_theme=pillar.element_theme,
            heavenly_stem=pillar.heavenly_stem,
            earthly_branch=pillar.earthly_branch,
            insight_text=text,
            generated_at=self.clock(),
            version=self.version,
            source=INSIGHT_SOURCE,
        )
        await self.cache.put(req.user_id, req.local_date, req.time_zone_id, insight)
        INSIGHT_REQUESTS.labels("generated").inc()
        bound.info("insight_generated", personalized=personalization is not None)
        return insight
