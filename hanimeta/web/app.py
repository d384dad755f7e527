"""
Application FastAPI de la passerelle backend.

create_app() assemble la configuration, les scrapers enregistres, un
limiteur par catalogue, le cache des details, le controle du jeton et
les routes.
"""

from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from hanimeta import __version__
from hanimeta.config import ServiceSettings
from hanimeta.core.ports import IMetadataScraper
from hanimeta.web.cache import MetadataCache
from hanimeta.web.deps import UnknownCatalogError
from hanimeta.web.limiter import CatalogLimiter
from hanimeta.web.middleware import TokenAuthenticationMiddleware
from hanimeta.web.routes.cache import router as cache_router
from hanimeta.web.routes.catalog import router as catalog_router
from hanimeta.web.routes.home import router as home_router
from hanimeta.web.routes.redirect import router as redirect_router
from hanimeta.web.schemas import ApiResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Journalise le demarrage, ferme les scrapers et le cache a l'arret."""
    settings: ServiceSettings = app.state.settings
    logger.info(
        "Passerelle demarree",
        version=__version__,
        auth_enabled=settings.auth_enabled,
        catalogs=sorted(app.state.scrapers),
        max_concurrent_requests=settings.max_concurrent_requests,
    )
    yield
    for scraper in app.state.scrapers.values():
        await scraper.aclose()
    app.state.cache.close()
    logger.info("Passerelle arretee")


async def _unknown_catalog(request: Request, exc: UnknownCatalogError) -> JSONResponse:
    logger.warning("Catalogue inconnu", catalog=exc.catalog, path=request.url.path)
    return JSONResponse(ApiResponse.fail(str(exc)).model_dump(), status_code=404)


def create_app(
    settings: Optional[ServiceSettings] = None,
    scrapers: Iterable[IMetadataScraper] = (),
    cache: Optional[MetadataCache] = None,
) -> FastAPI:
    """
    Construit l'application.

    Args:
        settings: Configuration du service (chargee depuis l'environnement si None)
        scrapers: Implementations a exposer, indexees par segment d'API
        cache: Cache des details (construit depuis settings si None)
    """
    settings = settings or ServiceSettings()
    registry = {scraper.descriptor.api_path: scraper for scraper in scrapers}

    app = FastAPI(title="Hanimeta", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.scrapers = registry
    app.state.limiters = {
        api_path: CatalogLimiter(api_path, settings.max_concurrent_requests)
        for api_path in registry
    }
    app.state.cache = cache or MetadataCache(settings.cache_dir, settings.cache_ttl_seconds)

    app.add_middleware(
        TokenAuthenticationMiddleware,
        auth_token=settings.auth_token,
        header_name=settings.token_header_name,
    )
    app.add_exception_handler(UnknownCatalogError, _unknown_catalog)

    app.include_router(home_router)
    app.include_router(redirect_router)
    app.include_router(cache_router)
    app.include_router(catalog_router)
    return app
