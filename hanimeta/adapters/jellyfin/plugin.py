"""
Assemblage des fournisseurs d'un catalogue.

Le serveur multimedia enregistre, pour chaque catalogue, un fournisseur
de metadonnees, un fournisseur d'images, la declaration de l'ID externe
et le fournisseur d'URLs externes. CatalogPlugin les regroupe et partage
entre eux la configuration, le mapper et le registre d'URLs.
"""

from dataclasses import dataclass, field

from hanimeta.adapters.api.scraper_client import ScraperApiClient
from hanimeta.adapters.jellyfin.providers import (
    CatalogExternalId,
    CatalogExternalUrlProvider,
    CatalogImageProvider,
    CatalogMetadataProvider,
)
from hanimeta.config import PluginSettings
from hanimeta.core.value_objects import CatalogDescriptor
from hanimeta.services.external_urls import ExternalUrlRegistry, ExternalUrlStore
from hanimeta.services.mapper import MetadataMapper


@dataclass
class CatalogPlugin:
    """Fournisseurs hote d'un catalogue, prets a etre enregistres."""

    descriptor: CatalogDescriptor
    settings: PluginSettings
    url_store: ExternalUrlStore
    metadata_provider: CatalogMetadataProvider = field(init=False)
    image_provider: CatalogImageProvider = field(init=False)
    external_id: CatalogExternalId = field(init=False)
    external_url_provider: CatalogExternalUrlProvider = field(init=False)

    def __post_init__(self) -> None:
        mapper = MetadataMapper(self.descriptor, self.settings.tag_mapping_mode)
        self.metadata_provider = CatalogMetadataProvider(
            self.descriptor, self.create_client, mapper, self.settings
        )
        self.image_provider = CatalogImageProvider(self.descriptor, self.create_client)
        self.external_id = CatalogExternalId(self.descriptor)
        self.external_url_provider = CatalogExternalUrlProvider(self.descriptor, self.url_store)

    def create_client(self) -> ScraperApiClient:
        """Nouveau client du backend configure pour ce catalogue."""
        return ScraperApiClient(
            descriptor=self.descriptor,
            base_url=self.settings.backend_url,
            api_token=self.settings.api_token,
            token_header_name=self.settings.token_header_name,
            timeout=float(self.settings.request_timeout_seconds),
            url_store=self.url_store,
        )


def build_catalog_plugin(
    descriptor: CatalogDescriptor,
    settings: PluginSettings,
    url_registry: ExternalUrlRegistry,
) -> CatalogPlugin:
    return CatalogPlugin(
        descriptor=descriptor,
        settings=settings,
        url_store=url_registry.for_catalog(descriptor),
    )
