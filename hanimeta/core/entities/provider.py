"""
Host provider contract objects.

Requests the media server passes to metadata providers and the results
providers hand back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from hanimeta.core.entities.media import Movie, PersonInfo


class ImageType(str, Enum):
    PRIMARY = "Primary"
    BACKDROP = "Backdrop"
    THUMB = "Thumb"


@dataclass
class MovieInfo:
    """
    Lookup information for a movie being refreshed.

    Attributes:
        name: Current name, often the file name
        original_title: Original title, if known
        year: Year hint
        provider_ids: External ids already attached to the item
    """

    name: Optional[str] = None
    original_title: Optional[str] = None
    year: Optional[int] = None
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class MetadataResult:
    """Provider answer to a metadata request."""

    item: Movie = field(default_factory=Movie)
    has_metadata: bool = False
    people: list[PersonInfo] = field(default_factory=list)

    def add_person(self, person: PersonInfo) -> None:
        self.people.append(person)


@dataclass
class RemoteSearchResult:
    name: str
    overview: Optional[str] = None
    production_year: Optional[int] = None
    image_url: Optional[str] = None
    provider_ids: dict[str, str] = field(default_factory=dict)
    search_provider_name: Optional[str] = None


@dataclass
class RemoteImageInfo:
    provider_name: str
    url: str
    type: ImageType = ImageType.PRIMARY
