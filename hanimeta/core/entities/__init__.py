"""
Host entities filled by the metadata providers.

Exports:
- Movie: Movie as stored by the media server
- PersonInfo: Credited person
- PersonKind: Person type understood by the host
- MovieInfo: Lookup request for a movie
- MetadataResult: Provider answer to a lookup
- RemoteSearchResult: Search candidate shown to the user
- RemoteImageInfo: Remote image offered to the host
- ImageType: Image slot (Primary, Backdrop, Thumb)
"""

from hanimeta.core.entities.media import Movie, PersonInfo, PersonKind
from hanimeta.core.entities.provider import (
    ImageType,
    MetadataResult,
    MovieInfo,
    RemoteImageInfo,
    RemoteSearchResult,
)

__all__ = [
    "Movie",
    "PersonInfo",
    "PersonKind",
    "MovieInfo",
    "MetadataResult",
    "RemoteSearchResult",
    "RemoteImageInfo",
    "ImageType",
]
