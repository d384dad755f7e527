"""
Adaptateur cote serveur multimedia.

Fournisseurs de metadonnees, d'images et d'URLs externes, tous delegant
au client du backend (adapters/api) et au mapper (services/mapper).
Les logs de ce paquet sont coupes quand le journal du plugin est desactive.
"""

from hanimeta.adapters.jellyfin.plugin import CatalogPlugin, build_catalog_plugin
from hanimeta.adapters.jellyfin.providers import (
    CatalogExternalId,
    CatalogExternalUrlProvider,
    CatalogImageProvider,
    CatalogMetadataProvider,
)

__all__ = [
    "CatalogPlugin",
    "build_catalog_plugin",
    "CatalogMetadataProvider",
    "CatalogImageProvider",
    "CatalogExternalId",
    "CatalogExternalUrlProvider",
]
