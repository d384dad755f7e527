"""
Port des scrapers du backend.

Le scraping reel (navigation, parsing HTML) est fourni par des
implementations externes ; la passerelle ne connait que ce contrat.
"""

from abc import ABC, abstractmethod
from typing import Optional

from hanimeta.core.ports.api_clients import CatalogMetadata
from hanimeta.core.value_objects import CatalogDescriptor


class IMetadataScraper(ABC):
    """Scraper d'un catalogue, appele par les routes /api/{catalog}/..."""

    @property
    @abstractmethod
    def descriptor(self) -> CatalogDescriptor:
        """Catalogue servi par ce scraper."""
        ...

    def parse_id(self, raw: str) -> Optional[str]:
        """Normalise un ID recu dans l'URL, ou None s'il est invalide."""
        return self.descriptor.extract_id(raw)

    @abstractmethod
    async def fetch_detail(self, external_id: str) -> Optional[CatalogMetadata]:
        """Recupere une oeuvre par ID normalise, None si introuvable."""
        ...

    @abstractmethod
    async def search(self, title: str, max_results: int) -> list[CatalogMetadata]:
        """Recherche par titre, resultats detailles."""
        ...

    async def aclose(self) -> None:
        """Libere les ressources du scraper (navigateur, sessions) a l'arret."""
        return None
