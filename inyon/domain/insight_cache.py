"""
Cache des reflets quotidiens, au plus un reflet par (utilisateur, date locale, fuseau).

Clé de document: `{local_date}_{fuseau assaini}`. Le fuseau IANA contient des `/` qui
seraient interprétés comme une hiérarchie par le store; ils sont remplacés par `-`.
Aucune déduplication des misses concurrents: le dernier écrivain l'emporte.
"""

from __future__ import annotations

import structlog

from inyon.domain.entities import Insight
from inyon.domain.errors import StorageError

log = structlog.get_logger(__name__)


def sanitize_time_zone_id(time_zone_id: str) -> str:
    """Remplace chaque séparateur de chemin `/` par `-`."""
    return time_zone_id.replace("/", "-")


def make_cache_key(local_date: str, time_zone_id: str) -> str:
    """Compose la clé `YYYY-MM-DD_Zone-Ville`."""
    return f"{local_date}_{sanitize_time_zone_id(time_zone_id)}"


class InsightCache:
    """Lecture/écriture des reflets sur un dépôt de documents scopé par utilisateur."""

    def __init__(self, repo):
        self.repo = repo

    async def get(self, user_id: str, local_date: str, time_zone_id: str) -> Insight | None:
        """
        Retourne le reflet stocké, ou None en cas d'absence.

        Un échec de lecture lève `StorageError`; il n'est jamais traité comme un miss.
        """
        key = make_cache_key(local_date, time_zone_id)
        try:
            doc = await self.repo.get(user_id, key)
            return Insight.from_document(doc) if doc else None
        except Exception as err:
            log.error("insight_cache_read_failed", key=key, error=type(err).__name__)
            raise StorageError() from err

    async def put(
        self, user_id: str, local_date: str, time_zone_id: str, insight: Insight
    ) -> None:
        """Persiste le reflet; lève `StorageError` en cas d'échec d'écriture."""
        key = make_cache_key(local_date, time_zone_id)
        try:
            await self.repo.set(user_id, key, insight.to_document())
        except Exception as err:
            log.error("insight_cache_write_failed", key=key, error=type(err).__name__)
            raise StorageError() from err
