"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    else:
        _ENV_FILE_PATH = _cwd / ".env"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "inyon-insights"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True

    # Stockage documentaire
    REDIS_URL: str | None = None
    REQUIRE_REDIS: bool = False

    # Vérification des jetons émis par le fournisseur d'identité
    JWT_SECRET: str = "dev-secret-change-me-before-any-deploy"
    JWT_ALG: str = "HS256"

    # Fournisseur de génération
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    GENERATION_TIMEOUT_S: float = 25.0
    GENERATION_MAX_RETRIES: int = 2
    GENERATION_BACKOFF_BASE_S: float = 1.0
    GENERATION_TEMPERATURE: float = 0.7
    GENERATION_MAX_TOKENS: int = 120

    # Règles métier du reflet quotidien
    INSIGHT_VERSION: str = "v1"
    LOCAL_DATE_WINDOW_DAYS: int = 2
    FOCUS_AREAS_MAX: int = 10

    OTLP_ENDPOINT: str | None = None


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
