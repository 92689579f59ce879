"""
Repositories pour les documents utilisateur.

Ce module fournit les dépôts de reflets quotidiens et de contextes de naissance, avec des
versions en mémoire (dev/tests) et Redis. Les documents sont scopés par utilisateur:
l'identifiant utilisateur fait partie de l'espace de noms, jamais de la clé du document.
"""

import json
from typing import Any

import redis.asyncio as redis


class InMemoryInsightRepo:
    """
    Dépôt de reflets en mémoire (utilisé pour dev/tests).

    Stocke les documents dans un dict local `(user_id, doc_id) -> document`.
    """

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[tuple[str, str], dict[str, Any]] = {}

    async def get(self, user_id: str, doc_id: str) -> dict[str, Any] | None:
        """Retourne le document, ou None s'il est absent."""
        doc = self._db.get((user_id, doc_id))
        return dict(doc) if doc is not None else None

    async def set(self, user_id: str, doc_id: str, doc: dict[str, Any]) -> None:
        """Écrit (ou écrase) le document."""
        self._db[(user_id, doc_id)] = dict(doc)


class RedisInsightRepo:
    """Dépôt de reflets adossé à Redis (clé: `user:{uid}:insight:{doc_id}`)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)

    @staticmethod
    def _key(user_id: str, doc_id: str) -> str:
        return f"user:{user_id}:insight:{doc_id}"

    async def get(self, user_id: str, doc_id: str) -> dict[str, Any] | None:
        """Charge et désérialise le document, si présent."""
        raw = await self.client.get(self._key(user_id, doc_id))
        return json.loads(raw) if raw else None

    async def set(self, user_id: str, doc_id: str, doc: dict[str, Any]) -> None:
        """Sérialise en JSON et stocke le document."""
        await self.client.set(self._key(user_id, doc_id), json.dumps(doc))


class InMemoryBirthContextRepo:
    """Contextes de naissance en mémoire, indexés par utilisateur."""

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[str, dict[str, Any]] = {}

    async def get(self, user_id: str) -> dict[str, Any] | None:
        """Retourne le document brut de contexte de naissance, si présent."""
        doc = self._db.get(user_id)
        return dict(doc) if doc is not None else None

    async def save(self, user_id: str, doc: dict[str, Any]) -> None:
        """Enregistre le document (écrit par le flux d'onboarding)."""
        self._db[user_id] = dict(doc)


class RedisBirthContextRepo:
    """Contextes de naissance via Redis (clé: `user:{uid}:onboarding:context`)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)

    @staticmethod
    def _key(user_id: str) -> str:
        return f"user:{user_id}:onboarding:context"

    async def get(self, user_id: str) -> dict[str, Any] | None:
        """Charge et désérialise le document, si présent."""
        raw = await self.client.get(self._key(user_id))
        return json.loads(raw) if raw else None

    async def save(self, user_id: str, doc: dict[str, Any]) -> None:
        """Sérialise en JSON et stocke le document."""
        await self.client.set(self._key(user_id), json.dumps(doc, default=str))
