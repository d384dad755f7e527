"""
Routes publiques : informations du service et sonde de sante.

Elles ne passent jamais par le controle du jeton.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from hanimeta import __version__
from hanimeta.web.deps import get_settings
from hanimeta.web.schemas import ApiResponse, ServiceInfo

router = APIRouter()

SERVICE_NAME = "Hanimeta Scraper Backend"


@router.get("/")
async def home(request: Request):
    """Nom, version, etat de l'authentification et catalogues servis."""
    settings = get_settings(request)
    info = ServiceInfo(
        name=SERVICE_NAME,
        version=__version__,
        authEnabled=settings.auth_enabled,
        catalogs=sorted(request.app.state.scrapers),
    )
    return ApiResponse.ok(info.model_dump())


@router.get("/health")
async def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
