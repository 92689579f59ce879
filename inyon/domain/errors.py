"""Taxonomie des erreurs du service de reflets quotidiens.

Chaque erreur porte un code stable, un statut HTTP et un message générique qui ne divulgue
aucun détail interne (les détails partent dans les logs, pas vers l'appelant).
"""

from __future__ import annotations


class InsightServiceError(Exception):
    """Erreur de base, traduite en enveloppe API par `inyon.apigw.errors`."""

    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(InsightServiceError):
    code = "UNAUTHENTICATED"
    status_code = 401
    default_message = "Authentication required."


class InvalidArgument(InsightServiceError):
    code = "INVALID_ARGUMENT"
    status_code = 400
    default_message = "Invalid request."


class DeadlineExceeded(InsightServiceError):
    code = "DEADLINE_EXCEEDED"
    status_code = 504
    default_message = "Today's reflection took too long to prepare."


class GenerationFailed(InsightServiceError):
    code = "GENERATION_FAILED"
    status_code = 502
    default_message = "Failed to generate today's reflection."


class StorageError(InsightServiceError):
    code = "STORAGE_ERROR"
    status_code = 500
    default_message = "Reflection storage is unavailable."
