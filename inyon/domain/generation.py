"""
Client de génération du reflet quotidien avec timeout, retry et validation.

Chaque tentative est un appel atomique au fournisseur borné par un timeout dur. La
réponse doit être un objet JSON unique `{"insightText": str}` d'au moins 40 caractères;
toute autre sortie compte comme un échec de tentative. Les échecs intermédiaires sont
journalisés mais jamais remontés: seul le résultat final traverse la frontière.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

from inyon.app.metrics import GENERATION_ATTEMPTS, GENERATION_LATENCY, LLM_TOKENS_TOTAL
from inyon.domain.errors import DeadlineExceeded, GenerationFailed
from inyon.infra.llm.base import LLM, LLMProviderError

MIN_INSIGHT_CHARS = 40

log = structlog.get_logger(__name__)


class InvalidInsightOutput(ValueError):
    """Sortie du modèle non conforme au contrat `{"insightText": str}`."""


@dataclass
class GenerationConfig:
    """Budget d'une génération: timeout par tentative, retries et paramètres modèle."""

    timeout_s: float = 25.0
    max_retries: int = 2
    backoff_base_s: float = 1.0
    temperature: float = 0.7
    max_tokens: int = 120


def calculate_backoff_delay(retry: int, config: GenerationConfig) -> float:
    """Délai avant le retry `retry` (indexé à 0): base * 2**retry, sans jitter."""
    return config.backoff_base_s * (2**retry)


def parse_insight_output(content: str) -> str:
    """
    Valide la sortie brute du modèle et en extrait `insightText`.

    Lève `InvalidInsightOutput` si le JSON est invalide, si ce n'est pas un objet, ou si
    `insightText` n'est pas une chaîne d'au moins 40 caractères.
    """
    try:
        payload = json.loads(content)
    except (TypeError, ValueError) as err:
        raise InvalidInsightOutput("response is not valid JSON") from err
    if not isinstance(payload, dict):
        raise InvalidInsightOutput("response is not a JSON object")
    text = payload.get("insightText")
    if not isinstance(text, str):
        raise InvalidInsightOutput("insightText missing or not a string")
    text = text.strip()
    if len(text) < MIN_INSIGHT_CHARS:
        raise InvalidInsightOutput("insightText too short")
    return text


class GenerationClient:
    """Appelle le fournisseur LLM avec la politique de retry/backoff du reflet."""

    def __init__(
        self,
        llm: LLM,
        config: GenerationConfig | None = None,
        *,
        model_label: str = "unknown",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.llm = llm
        self.config = config or GenerationConfig()
        self.model_label = model_label
        self._sleep = sleep

    async def _attempt(self, prompt: str) -> str:
        """Une tentative: appel borné par le timeout puis validation de la sortie."""
        messages = [{"role": "user", "content": prompt}]
        start = time.perf_counter()
        try:
            content, usage = await asyncio.wait_for(
                self.llm.generate(
                    messages,
                    with_usage=True,
                    response_format={"type": "json_object"},
                    temperature=self.config.temperature,
                    max_tokens=self.config.max_tokens,
                ),
                timeout=self.config.timeout_s,
            )
        finally:
            GENERATION_LATENCY.observe(time.perf_counter() - start)
        if usage.get("total_tokens"):
            LLM_TOKENS_TOTAL.labels(self.model_label).inc(usage["total_tokens"])
        return parse_insight_output(content)

    async def generate(self, prompt: str) -> str:
        """
        Génère le texte du reflet.

        Retour: `insightText` validé.
        Erreurs: `DeadlineExceeded` si la dernière tentative a expiré, sinon
        `GenerationFailed` une fois le budget de retries épuisé.
        """
        attempts = self.config.max_retries + 1
        last_timed_out = False
        for attempt in range(attempts):
            if attempt > 0:
                await self._sleep(calculate_backoff_delay(attempt - 1, self.config))
            try:
                text = await self._attempt(prompt)
            except TimeoutError:
                last_timed_out = True
                GENERATION_ATTEMPTS.labels("timeout").inc()
                log.warning("generation_attempt_timeout", attempt=attempt + 1)
            except InvalidInsightOutput as err:
                last_timed_out = False
                GENERATION_ATTEMPTS.labels("invalid_output").inc()
                log.warning("generation_attempt_invalid", attempt=attempt + 1, reason=str(err))
            except LLMProviderError as err:
                last_timed_out = False
                GENERATION_ATTEMPTS.labels("provider_error").inc()
                log.warning("generation_attempt_failed", attempt=attempt + 1, reason=str(err))
            except Exception as err:
                last_timed_out = False
                GENERATION_ATTEMPTS.labels("provider_error").inc()
                log.warning(
                    "generation_attempt_failed",
                    attempt=attempt + 1,
                    error_type=type(err).__name__,
                )
            else:
                GENERATION_ATTEMPTS.labels("success").inc()
                return text

        log.error("generation_exhausted", attempts=attempts, timed_out=last_timed_out)
        if last_timed_out:
            raise DeadlineExceeded()
        raise GenerationFailed()
