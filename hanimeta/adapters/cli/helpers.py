"""
Fonctions utilitaires partagees par les commandes CLI.

- console : console Rich commune
- suppress_loguru : coupe les logs pendant l'affichage Rich
- with_container : injecte un Container en premier argument
- resolve_plugin : fournisseurs d'un catalogue depuis son segment d'API
- load_scrapers : scrapers declares via le groupe d'entry points hanimeta.scrapers
"""

from contextlib import contextmanager
from functools import wraps
from importlib.metadata import entry_points

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from hanimeta.adapters.jellyfin.plugin import CatalogPlugin
from hanimeta.container import Container
from hanimeta.core.ports import IMetadataScraper
from hanimeta.utils.constants import CATALOGS, DLSITE, HANIME

SCRAPER_ENTRY_POINT_GROUP = "hanimeta.scrapers"

console = Console()


# Modules qui journalisent pendant fetch et search
CLIENT_LOGGER_NAMES = ("hanimeta.adapters.api", "hanimeta.services")


@contextmanager
def suppress_loguru(*names: str):
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Seuls les modules nommes sont coupes puis reactives ; la
    desactivation de l'adaptateur hote posee par configure_logging
    reste en place.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    names = names or CLIENT_LOGGER_NAMES
    for name in names:
        loguru_logger.disable(name)
    try:
        yield
    finally:
        for name in names:
            loguru_logger.enable(name)


def with_container(func):
    """
    Decorateur qui injecte un container neuf en premier argument.

    Usage:
        @with_container
        async def my_command(container, ...):
            config = container.config()
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        return await func(Container(), *args, **kwargs)

    return wrapper


def resolve_plugin(container: Container, catalog: str) -> CatalogPlugin:
    """Fournisseurs du catalogue, ou sortie en erreur s'il est inconnu."""
    key = catalog.lower()
    if key not in CATALOGS:
        console.print(
            f"[red]Catalogue inconnu:[/red] {catalog} "
            f"(disponibles: {', '.join(sorted(CATALOGS))})"
        )
        raise typer.Exit(code=2)
    plugins = {
        HANIME.api_path: container.hanime_plugin,
        DLSITE.api_path: container.dlsite_plugin,
    }
    return plugins[key]()


def load_scrapers() -> list[IMetadataScraper]:
    """
    Instancie les scrapers declares par les paquets installes.

    Chaque entry point du groupe hanimeta.scrapers designe une fabrique
    sans argument qui retourne un IMetadataScraper.
    """
    scrapers: list[IMetadataScraper] = []
    for entry_point in entry_points(group=SCRAPER_ENTRY_POINT_GROUP):
        factory = entry_point.load()
        scraper = factory()
        if not isinstance(scraper, IMetadataScraper):
            raise TypeError(
                f"L'entry point {entry_point.name} ne produit pas un IMetadataScraper"
            )
        loguru_logger.info(
            "Scraper charge",
            name=entry_point.name,
            catalog=scraper.descriptor.api_path,
        )
        scrapers.append(scraper)
    return scrapers
