"""Configuration du tracing OpenTelemetry pour l'observabilité.

Configure le tracing distribué pour exporter les spans (dont `daily_insight`) vers un
endpoint OTLP, uniquement lorsque `OTLP_ENDPOINT` est défini.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def setup_tracing(settings) -> bool:
    """Installe le provider OTLP si configuré; retourne True si le tracing est actif."""
    endpoint = getattr(settings, "OTLP_ENDPOINT", None)
    if not endpoint:
        return False

    provider = TracerProvider(resource=Resource.create({"service.name": settings.APP_NAME}))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)
    return True
