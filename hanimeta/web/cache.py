"""
Cache des details d'oeuvres de la passerelle.

Le cache utilise diskcache pour la persistence sur disque. Les absences
(oeuvre introuvable) sont memorisees comme les resultats : une meme
requete ne relance pas le scraper avant l'expiration du TTL.

Les cles sont de la forme "{catalogue}:{id}", par exemple "hanime:86994".
"""

import asyncio
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Any, NamedTuple, Optional

from diskcache import Cache

from hanimeta.core.ports import CatalogMetadata

# Valeur stockee pour une oeuvre introuvable
_MISSING = "__missing__"
_ABSENT = object()


class CacheLookup(NamedTuple):
    """Resultat d'une consultation : hit=False si la cle est inconnue."""

    hit: bool
    metadata: Optional[CatalogMetadata] = None


class MetadataCache:
    """
    Cache asynchrone avec TTL pour les details des scrapers.

    Les operations diskcache sont executees via run_in_executor pour ne
    pas bloquer la boucle.

    Example:
        cache = MetadataCache(directory=Path(".cache/metadata"))
        await cache.store("hanime", "86994", metadata)
        lookup = await cache.lookup("hanime", "86994")
    """

    DETAILS_TTL = 7 * 24 * 60 * 60  # 7 jours en secondes

    def __init__(self, directory: Optional[Path] = None, ttl: int = DETAILS_TTL) -> None:
        """
        Args:
            directory: Repertoire du cache (None = repertoire temporaire)
            ttl: Duree de vie des entrees en secondes
        """
        self._cache = Cache(str(directory) if directory is not None else None)
        self._ttl = ttl
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _key(catalog: str, external_id: str) -> str:
        return f"{catalog.lower()}:{external_id}"

    async def lookup(self, catalog: str, external_id: str) -> CacheLookup:
        """Consulte le cache ; une absence memorisee est un hit sans metadonnees."""
        loop = asyncio.get_running_loop()
        value: Any = await loop.run_in_executor(
            None, partial(self._cache.get, self._key(catalog, external_id), default=_ABSENT)
        )
        if value is _ABSENT:
            self._misses += 1
            return CacheLookup(hit=False)
        self._hits += 1
        return CacheLookup(hit=True, metadata=None if value == _MISSING else value)

    async def store(
        self, catalog: str, external_id: str, metadata: Optional[CatalogMetadata]
    ) -> None:
        """Memorise un resultat, y compris None (oeuvre introuvable)."""
        loop = asyncio.get_running_loop()
        value = _MISSING if metadata is None else metadata
        await loop.run_in_executor(
            None,
            partial(self._cache.set, self._key(catalog, external_id), value, expire=self._ttl),
        )

    async def remove(self, catalog: str, external_id: str) -> bool:
        """Supprime une entree ; False si elle n'existait pas."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self._cache.delete, self._key(catalog, external_id)
        )

    async def clear(self) -> int:
        """Supprime toutes les entrees et retourne leur nombre."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.clear)

    def statistics(self) -> dict[str, Any]:
        """Compteurs de consultation, au format JSON de la passerelle."""
        total = self._hits + self._misses
        ratio = self._hits / total if total else 0.0
        return {
            "hitCount": self._hits,
            "missCount": self._misses,
            "totalRequests": total,
            "hitRatio": f"{ratio:.2%}",
            "entryCount": len(self._cache),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
