"""
Routes de gestion du cache des details.

GET /cache/stats
DELETE /cache/clear
DELETE /cache/{catalog}/{id}

Hors du prefixe /api : le controle du jeton ne s'y applique pas.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from loguru import logger

from hanimeta.web.deps import get_cache

router = APIRouter(prefix="/cache")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/stats")
async def cache_stats(request: Request):
    return get_cache(request).statistics()


@router.delete("/clear")
async def cache_clear(request: Request):
    removed = await get_cache(request).clear()
    logger.info("Cache vide", entries=removed)
    return {"message": "Cache cleared successfully", "timestamp": _now()}


@router.delete("/{catalog}/{external_id}")
async def cache_remove(request: Request, catalog: str, external_id: str):
    removed = await get_cache(request).remove(catalog, external_id)
    logger.info("Entree de cache supprimee", catalog=catalog, id=external_id, existed=removed)
    return {
        "message": f"Cache entry removed for {catalog}:{external_id}",
        "timestamp": _now(),
    }
