"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI, l'adaptateur
hote et la passerelle web.
"""

from dependency_injector import containers, providers

from .adapters.jellyfin.plugin import build_catalog_plugin
from .config import PluginSettings, ServiceSettings
from .services.external_urls import ExternalUrlRegistry
from .utils.constants import DLSITE, HANIME
from .web.app import create_app


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        hanime = container.hanime_plugin()
        async with hanime.create_client() as client:
            metadata = await client.get_metadata("86994")
    """

    # Configuration - singletons charges une seule fois
    config = providers.Singleton(PluginSettings)
    service_config = providers.Singleton(ServiceSettings)

    # Registre des URLs externes partage par tous les fournisseurs
    url_registry = providers.Singleton(ExternalUrlRegistry)

    # Fournisseurs hote par catalogue
    hanime_plugin = providers.Singleton(
        build_catalog_plugin,
        descriptor=HANIME,
        settings=config,
        url_registry=url_registry,
    )
    dlsite_plugin = providers.Singleton(
        build_catalog_plugin,
        descriptor=DLSITE,
        settings=config,
        url_registry=url_registry,
    )

    # Passerelle web - les scrapers sont fournis par l'appelant
    # Utiliser: container.web_app(scrapers=[...])
    web_app = providers.Factory(
        create_app,
        settings=service_config,
    )

