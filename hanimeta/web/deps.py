"""
Dependances partagees des routes de la passerelle.

L'etat de l'application (configuration, scrapers, limiteurs, cache) est pose
sur app.state par create_app().
"""

from typing import NamedTuple

from fastapi import Request

from hanimeta.config import ServiceSettings
from hanimeta.core.ports import IMetadataScraper
from hanimeta.web.cache import MetadataCache
from hanimeta.web.limiter import CatalogLimiter


class UnknownCatalogError(Exception):
    """Segment de catalogue sans scraper enregistre."""

    def __init__(self, catalog: str) -> None:
        self.catalog = catalog
        super().__init__(f"Unknown catalog: {catalog}")


class CatalogContext(NamedTuple):
    scraper: IMetadataScraper
    limiter: CatalogLimiter
    cache: MetadataCache
    settings: ServiceSettings


def get_settings(request: Request) -> ServiceSettings:
    return request.app.state.settings


def get_cache(request: Request) -> MetadataCache:
    return request.app.state.cache


def get_catalog(request: Request, catalog: str) -> CatalogContext:
    """Scraper, limiteur et cache du catalogue, ou UnknownCatalogError."""
    key = catalog.lower()
    scraper = request.app.state.scrapers.get(key)
    if scraper is None:
        raise UnknownCatalogError(catalog)
    return CatalogContext(
        scraper,
        request.app.state.limiters[key],
        get_cache(request),
        get_settings(request),
    )
