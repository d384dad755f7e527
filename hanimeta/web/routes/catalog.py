"""
Routes des catalogues : recherche par titre et detail par ID.

GET /api/{catalog}/search?title=...&max=...
GET /api/{catalog}/{id}

Chaque appel au scraper occupe un creneau du catalogue (429 si aucun
n'est libre) et est borne par request_timeout_seconds (504 au-dela).
Un ID invalide ou une oeuvre introuvable repondent success=false. Les
details (absences comprises) sont servis depuis le cache quand il les
connait, sans prendre de creneau.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from hanimeta.core.ports import CatalogMetadata
from hanimeta.utils.constants import API_PREFIX, SEARCH_DEFAULT_MAX, SEARCH_HARD_MAX
from hanimeta.web.deps import CatalogContext, get_catalog
from hanimeta.web.limiter import ServiceBusyError
from hanimeta.web.schemas import ApiResponse

router = APIRouter(prefix=API_PREFIX)

T = TypeVar("T")

BUSY_MESSAGE = "Service busy. Retry later."
TIMEOUT_MESSAGE = "Request timed out"


def _envelope(response: ApiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(response.model_dump(), status_code=status_code)


async def _call_scraper(ctx: CatalogContext, call: Callable[[], Awaitable[T]]) -> T:
    """Execute l'appel dans un creneau du catalogue, borne par le delai configure."""
    async with ctx.limiter.slot():
        return await asyncio.wait_for(call(), timeout=ctx.settings.request_timeout_seconds)


def _log_busy(ctx: CatalogContext, catalog: str, route: str) -> None:
    logger.warning(
        "Catalogue sature",
        catalog=catalog,
        route=route,
        in_flight=ctx.limiter.in_flight,
        limit=ctx.limiter.limit,
    )


def _clamp_max(max_results: Optional[int]) -> int:
    if max_results is None or max_results < 1:
        return SEARCH_DEFAULT_MAX
    return min(max_results, SEARCH_HARD_MAX)


@router.get("/{catalog}/search")
async def search(request: Request, catalog: str, title: str = "", max: Optional[int] = None):
    """Recherche par mots-cles ; une entree qui ressemble a un ID reste un mot-cle."""
    ctx = get_catalog(request, catalog)
    if not title.strip():
        return _envelope(ApiResponse.fail("Missing search title"))

    max_results = _clamp_max(max)
    logger.info("Recherche", catalog=catalog, title=title, max=max_results)

    try:
        hits = await _call_scraper(ctx, lambda: ctx.scraper.search(title, max_results))
    except ServiceBusyError:
        _log_busy(ctx, catalog, "search")
        return _envelope(ApiResponse.fail(BUSY_MESSAGE), status_code=429)
    except asyncio.TimeoutError:
        logger.warning("Delai depasse", catalog=catalog, title=title)
        return _envelope(ApiResponse.fail(TIMEOUT_MESSAGE), status_code=504)
    except Exception as exc:
        logger.error("Erreur de recherche", catalog=catalog, title=title, error=str(exc))
        return _envelope(ApiResponse.fail(f"Search error: {exc}"))

    results = [hit.to_dict() for hit in hits[:max_results]]
    logger.info("Recherche terminee", catalog=catalog, title=title, count=len(results))
    return _envelope(ApiResponse.ok(results))


@router.get("/{catalog}/{external_id}")
async def detail(request: Request, catalog: str, external_id: str):
    """
    Detail d'une oeuvre, cache en priorite.

    Le cache est consulte avant de prendre un creneau, puis de nouveau une
    fois le creneau obtenu (une requete concurrente a pu le remplir).
    """
    ctx = get_catalog(request, catalog)
    catalog_key = ctx.scraper.descriptor.api_path
    provider = ctx.scraper.descriptor.provider_name
    logger.info("Requete par ID", catalog=catalog, id=external_id)

    parsed_id = ctx.scraper.parse_id(external_id)
    if not parsed_id:
        logger.warning("Format d'ID invalide", catalog=catalog, id=external_id)
        return _envelope(ApiResponse.fail(f"Invalid {provider} ID: {external_id}"))

    cached = await ctx.cache.lookup(catalog_key, parsed_id)
    if cached.hit:
        logger.info("Reponse servie depuis le cache", catalog=catalog, id=parsed_id)
        return _detail_envelope(cached.metadata, external_id)

    try:
        async with ctx.limiter.slot():
            cached = await ctx.cache.lookup(catalog_key, parsed_id)
            if cached.hit:
                logger.info("Cache rempli pendant l'attente", catalog=catalog, id=parsed_id)
                return _detail_envelope(cached.metadata, external_id)

            metadata = await asyncio.wait_for(
                ctx.scraper.fetch_detail(parsed_id),
                timeout=ctx.settings.request_timeout_seconds,
            )
            await ctx.cache.store(catalog_key, parsed_id, metadata)
    except ServiceBusyError:
        _log_busy(ctx, catalog, "detail")
        return _envelope(ApiResponse.fail(BUSY_MESSAGE), status_code=429)
    except asyncio.TimeoutError:
        logger.warning("Delai depasse", catalog=catalog, id=parsed_id)
        return _envelope(ApiResponse.fail(TIMEOUT_MESSAGE), status_code=504)
    except Exception as exc:
        logger.error("Erreur de recuperation", catalog=catalog, id=parsed_id, error=str(exc))
        return _envelope(ApiResponse.fail(f"Detail error: {exc}"))

    if metadata is not None:
        logger.info("Oeuvre trouvee", catalog=catalog, id=parsed_id, title=metadata.title)
    else:
        logger.info("Oeuvre introuvable", catalog=catalog, id=parsed_id)
    return _detail_envelope(metadata, external_id)


def _detail_envelope(metadata: Optional[CatalogMetadata], external_id: str) -> JSONResponse:
    if metadata is None:
        return _envelope(ApiResponse.fail(f"Content not found: {external_id}"))
    return _envelope(ApiResponse.ok(metadata.to_dict()))
