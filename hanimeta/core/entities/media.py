"""
Host media entities.

Entities mirroring the objects the media server hands to metadata
providers. The adapter layer fills them from catalog metadata; the host
persists them.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class PersonKind(str, Enum):
    """Person types understood by the host."""

    ACTOR = "Actor"
    DIRECTOR = "Director"
    WRITER = "Writer"
    PRODUCER = "Producer"
    COMPOSER = "Composer"
    GUEST_STAR = "GuestStar"


@dataclass
class PersonInfo:
    """
    A credited person attached to a movie.

    Attributes:
        name: Display name
        type: Host person type
        role: Character or job, when known
    """

    name: str
    type: PersonKind = PersonKind.ACTOR
    role: Optional[str] = None


@dataclass
class Movie:
    """
    Movie entity as seen by the host.

    Every metadata field starts as None or empty. The mapper only writes
    fields it has a value for, so existing data survives partial scrapes.

    Attributes:
        name: Display title
        original_title: Title in the original language
        overview: Plot summary
        production_year: Release year
        community_rating: Rating stored as a 32-bit float
        premiere_date: Release date
        genres: Genre names
        tags: Free tags
        studios: Studio names
        provider_ids: External ids keyed by provider ("Hanime", "DLsite")
        people: Credited people
    """

    name: str = ""
    original_title: Optional[str] = None
    overview: Optional[str] = None
    production_year: Optional[int] = None
    community_rating: Optional[float] = None
    premiere_date: Optional[date] = None
    genres: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    studios: list[str] = field(default_factory=list)
    provider_ids: dict[str, str] = field(default_factory=dict)
    people: list[PersonInfo] = field(default_factory=list)

    def get_provider_id(self, key: str) -> Optional[str]:
        return self.provider_ids.get(key)

    def set_provider_id(self, key: str, value: str) -> None:
        self.provider_ids[key] = value
