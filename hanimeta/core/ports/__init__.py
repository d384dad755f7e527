"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports client API : Contrats cote hote
- IMetadataClient : Client de metadonnees d'un catalogue
- CatalogMetadata : Metadonnees renvoyees par le backend
- CatalogSearchResult : Resultat de recherche
- CatalogPerson : Personne creditee

Ports backend : Contrats cote service
- IMetadataScraper : Scraper d'un catalogue
"""

from hanimeta.core.ports.api_clients import (
    CatalogMetadata,
    CatalogPerson,
    CatalogSearchResult,
    IMetadataClient,
)
from hanimeta.core.ports.scrapers import IMetadataScraper

__all__ = [
    # Client API
    "IMetadataClient",
    "CatalogMetadata",
    "CatalogPerson",
    "CatalogSearchResult",
    # Backend
    "IMetadataScraper",
]
