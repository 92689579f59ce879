"""
Application principale FastAPI.

Responsabilités du module:
- Initialiser le logging structuré et le tracing
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, métriques)
- Brancher les handlers d'erreurs et monter les routers (santé, reflets, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI

from inyon.api.routes_health import router as health_router
from inyon.api.routes_insight import router as insight_router
from inyon.apigw.errors import register_error_handlers
from inyon.app.metrics import PrometheusMiddleware, metrics_router
from inyon.app.tracing import setup_tracing
from inyon.core.container import container
from inyon.core.logging import setup_logging
from inyon.middlewares.request_id import RequestIDMiddleware


def create_app() -> FastAPI:
    """Construit et retourne l'application FastAPI prête à l'usage."""
    settings = container.settings
    setup_logging(debug=settings.APP_DEBUG)
    setup_tracing(settings)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(insight_router)
    app.include_router(metrics_router)
    return app


app = create_app()
