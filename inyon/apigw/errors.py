"""Gestion standardisée des erreurs API avec enveloppes d'erreur.

Ce module traduit la taxonomie d'erreurs du domaine en enveloppes standardisées
`{code, message, trace_id}` et enregistre les handlers FastAPI correspondants.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from inyon.domain.errors import InsightServiceError

log = structlog.get_logger(__name__)


@dataclass
class ErrorEnvelope:
    """Standard error envelope for API responses."""

    code: str
    message: str
    trace_id: str | None = None


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id)
    return JSONResponse(
        status_code=status_code,
        content={
            "code": envelope.code,
            "message": envelope.message,
            "trace_id": envelope.trace_id,
        },
    )


def extract_trace_id(request: Request) -> str | None:
    """Extract trace ID from request headers or request state."""
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id
    return getattr(request.state, "trace_id", None)


def handle_service_error(request: Request, exc: InsightServiceError) -> JSONResponse:
    """Handle domain errors with their stable code and generic message."""
    trace_id = extract_trace_id(request)
    log.warning(
        "insight_service_error",
        code=exc.code,
        status_code=exc.status_code,
        trace_id=trace_id,
    )
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=trace_id,
    )


def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException with standard envelope."""
    error_codes = {
        400: "BAD_REQUEST",
        401: "UNAUTHENTICATED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_ERROR",
    }
    code = error_codes.get(exc.status_code, "HTTP_ERROR")
    return create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=extract_trace_id(request),
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps illisible ou champs mal typés: INVALID_ARGUMENT, sans renvoyer l'entrée."""
    trace_id = extract_trace_id(request)
    log.warning(
        "request_validation_error",
        error_types=sorted({str(err.get("type")) for err in exc.errors()}),
        trace_id=trace_id,
    )
    return create_error_response(
        status_code=400,
        code="INVALID_ARGUMENT",
        message="timeZoneId and localDate are required.",
        trace_id=trace_id,
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    trace_id = extract_trace_id(request)
    log.error(
        "unexpected_error",
        trace_id=trace_id,
        exception_type=type(exc).__name__,
        exc_info=exc,
    )
    return create_error_response(
        status_code=500,
        code="INTERNAL_ERROR",
        message="An unexpected error occurred",
        trace_id=trace_id,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Branche les handlers d'erreurs sur l'application."""
    app.add_exception_handler(InsightServiceError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
