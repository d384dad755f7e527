"""
Client du backend de scraping.

Ce module fournit l'adaptateur qui parle a la passerelle backend :
- ScraperApiClient : client HTTP d'un catalogue (metadonnees, recherche, images)

Infrastructure partagee :
- MetadataFetchError et ses sous-classes : echecs distincts d'une absence
- RateLimitError / with_retry / request_with_retry : backoff sur 429

Le client implemente IMetadataClient defini dans core/ports/api_clients.py.
"""

from hanimeta.adapters.api.errors import (
    BackendStatusError,
    BackendTimeoutError,
    BackendUnavailableError,
    MalformedResponseError,
    MetadataFetchError,
)
from hanimeta.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from hanimeta.adapters.api.scraper_client import ScraperApiClient

__all__ = [
    "ScraperApiClient",
    "MetadataFetchError",
    "BackendUnavailableError",
    "BackendTimeoutError",
    "BackendStatusError",
    "MalformedResponseError",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
