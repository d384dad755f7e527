"""
Mecanisme de retry avec backoff exponentiel pour le backend de scraping.

Le backend repond 429 quand tous ses creneaux de scraping sont occupes.
Ces reponses sont relancees avec un delai croissant et du jitter ; le
header Retry-After, s'il est present, prend le pas sur le backoff.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=5, min_wait=3, max_wait=100)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand le backend retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _retry_after_or_backoff(min_wait: float, max_wait: float):
    """Attente : Retry-After borne par max_wait, sinon backoff exponentiel."""
    backoff = wait_random_exponential(multiplier=min_wait, min=min_wait, max=max_wait)

    def wait(retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            return float(min(max(exc.retry_after, 0), max_wait))
        return backoff(retry_state)

    return wait


def _log_retry(retry_state: RetryCallState) -> None:
    logger.warning(
        "Backend sature (429), nouvelle tentative",
        attempt=retry_state.attempt_number,
    )


def with_retry(max_attempts: int = 5, min_wait: float = 1, max_wait: float = 60):
    """
    Decorateur pour relancer sur RateLimitError avec backoff exponentiel.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        min_wait: Delai de base en secondes (defaut: 1)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=_retry_after_or_backoff(min_wait, max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    min_wait: float = 1,
    max_wait: float = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec retry automatique sur 429.

    Les autres erreurs HTTP (4xx, 5xx) et les erreurs de transport sont
    propagees immediatement sans retry.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        min_wait: Delai de base du backoff en secondes
        max_wait: Delai maximum du backoff en secondes
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Pour les erreurs reseau et les timeouts
    """

    @with_retry(max_attempts=max_attempts, min_wait=min_wait, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            retry_after_header = response.headers.get("Retry-After")
            retry_after = (
                int(retry_after_header)
                if retry_after_header and retry_after_header.isdigit()
                else None
            )
            raise RateLimitError(retry_after)
        response.raise_for_status()
        return response

    return await _do_request()
