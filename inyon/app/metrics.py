"""
Métriques Prometheus pour l'application.

Ce module définit les métriques HTTP et métier (reflets, cache, génération) et expose
`/metrics` ainsi qu'un middleware de mesure de latence par route.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Business metrics
INSIGHT_REQUESTS = Counter(
    "insight_requests_total",
    "Daily insight requests by outcome",
    ["outcome"],
)
INSIGHT_CACHE = Counter(
    "insight_cache_total",
    "Daily insight cache lookups",
    ["result"],
)
GENERATION_ATTEMPTS = Counter(
    "insight_generation_attempts_total",
    "Generation provider attempts",
    ["result"],
)
GENERATION_LATENCY = Histogram(
    "insight_generation_latency_seconds",
    "Latency of a single generation attempt",
    buckets=[0.5, 1.0, 2.0, 4.0, 8.0, 15.0, 25.0],
)
LLM_TOKENS_TOTAL = Counter(
    "llm_tokens_total",
    "Accumulated LLM tokens",
    ["model"],
)


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = request.scope.get("path", "unknown")
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
