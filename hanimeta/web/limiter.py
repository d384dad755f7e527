"""
Controle d'admission par catalogue.

Chaque catalogue dispose de max_concurrent_requests creneaux. Une requete
qui n'en trouve aucun libre est refusee tout de suite (429) plutot que
mise en file d'attente.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class ServiceBusyError(Exception):
    """Tous les creneaux du catalogue sont occupes."""

    def __init__(self, catalog: str) -> None:
        self.catalog = catalog
        super().__init__(f"Service busy for catalog '{catalog}'")


class CatalogLimiter:
    """Semaphore non bloquant d'un catalogue."""

    def __init__(self, catalog: str, limit: int) -> None:
        self.catalog = catalog
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """
        Reserve un creneau pour la duree du bloc.

        Raises:
            ServiceBusyError: si aucun creneau n'est libre
        """
        # acquire() ne suspend pas quand le semaphore n'est pas verrouille
        if self._semaphore.locked():
            raise ServiceBusyError(self.catalog)
        await self._semaphore.acquire()
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1
            self._semaphore.release()
