"""
Script de serveur de développement avec LLM factice.

Ce script lance le serveur avec un LLM déterministe et affiche un jeton de développement
pour appeler `POST /v1/insights/daily` localement sans fournisseur externe.
"""

import os

import uvicorn

from inyon.app.main import app
from inyon.core.container import container
from inyon.domain.auth import create_access_token
from inyon.domain.generation import GenerationClient
from inyon.infra.llm.fake_deterministic import FakeDeterministicLLM


def install_fake_llm() -> None:
    """Remplace le client de génération du conteneur par la version déterministe."""
    container.llm = FakeDeterministicLLM()
    container.generator = GenerationClient(
        container.llm, container.generator.config, model_label="fake"
    )
    container.orchestrator.generator = container.generator


def main():
    """
    Point d'entrée principal pour le serveur avec LLM factice.

    Lance l'application FastAPI avec un LLM simulé pour faciliter le développement.
    """
    install_fake_llm()
    token = create_access_token(
        container.settings.JWT_SECRET,
        container.settings.JWT_ALG,
        expires_min=24 * 60,
        payload={"sub": os.environ.get("DEV_USER_ID", "dev-user")},
    )
    print(f"Authorization: Bearer {token}")

    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port, reload=False)


if __name__ == "__main__":
    main()
