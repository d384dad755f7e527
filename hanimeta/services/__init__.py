"""
Couche application.

- MetadataMapper : copie des metadonnees de catalogue vers les entites hote
- ExternalUrlStore / ExternalUrlRegistry : URLs publiques connues par catalogue
"""

from hanimeta.services.external_urls import ExternalUrlRegistry, ExternalUrlStore
from hanimeta.services.mapper import MetadataMapper

__all__ = [
    "ExternalUrlRegistry",
    "ExternalUrlStore",
    "MetadataMapper",
]
