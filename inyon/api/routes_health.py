"""
Endpoint de santé pour vérifier la disponibilité de l'API et de ses collaborateurs.

Expose `/health` pour signaler l'état général, le backend de stockage et la présence
d'une clé de fournisseur de génération.
"""

from fastapi import APIRouter

from inyon.core.container import container

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et le backend de stockage."""
    return {
        "status": "ok",
        "storage": getattr(container, "storage_backend", "unknown"),
        "generation_configured": bool(getattr(container, "generation_configured", False)),
    }
