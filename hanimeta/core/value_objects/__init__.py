"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- CatalogDescriptor : Description d'un catalogue externe (cle, chemin API, modele d'URL)
"""

from hanimeta.core.value_objects.catalog import CatalogDescriptor, IdExtractor, UrlBuilder

__all__ = [
    "CatalogDescriptor",
    "IdExtractor",
    "UrlBuilder",
]
