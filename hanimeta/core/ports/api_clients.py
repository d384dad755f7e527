"""
Interfaces ports pour le client de metadonnees.

Definit les objets echanges avec le backend (CatalogMetadata,
CatalogSearchResult) et le contrat du client (IMetadataClient).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional


@dataclass
class CatalogPerson:
    """
    Personne creditee par un catalogue.

    Attributs :
        name : Nom affiche
        type : Type brut du catalogue (ex: "Actor", "声優", "Director")
        role : Role ou personnage, si connu
    """

    name: str
    type: Optional[str] = None
    role: Optional[str] = None


@dataclass
class CatalogMetadata:
    """
    Metadonnees d'une oeuvre, telles que renvoyees par le backend.

    Seul l'ID est obligatoire. Un champ a None signifie "inconnu" et non
    "vide" : le mapper ne l'ecrit jamais sur l'entite hote.

    Attributs :
        id : ID natif du catalogue
        title : Titre (obligatoire pour une reponse valide)
        original_title : Titre original
        description : Resume
        year : Annee de sortie
        rating : Note (echelle du catalogue, non validee ici)
        release_date : Date de sortie
        primary : URL de l'image principale
        backdrop : URL de l'image de fond
        thumbnails : URLs de vignettes, dans l'ordre du catalogue
        genres, tags, studios, series : Sequences ordonnees de noms
        people : Personnes creditees
        source_urls : URLs des pages source
    """

    id: str
    title: Optional[str] = None
    original_title: Optional[str] = None
    description: Optional[str] = None
    year: Optional[int] = None
    rating: Optional[float] = None
    release_date: Optional[date] = None
    primary: Optional[str] = None
    backdrop: Optional[str] = None
    thumbnails: tuple[str, ...] = ()
    genres: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    studios: tuple[str, ...] = ()
    series: tuple[str, ...] = ()
    people: tuple[CatalogPerson, ...] = ()
    source_urls: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialise au format JSON du backend (cles camelCase)."""
        return {
            "id": self.id,
            "title": self.title,
            "originalTitle": self.original_title,
            "description": self.description,
            "year": self.year,
            "rating": self.rating,
            "releaseDate": self.release_date.isoformat() if self.release_date else None,
            "primary": self.primary,
            "backdrop": self.backdrop,
            "thumbnails": list(self.thumbnails),
            "genres": list(self.genres),
            "tags": list(self.tags),
            "studios": list(self.studios),
            "series": list(self.series),
            "people": [
                {"name": p.name, "type": p.type, "role": p.role} for p in self.people
            ],
            "sourceUrls": list(self.source_urls),
        }


@dataclass
class CatalogSearchResult:
    """Resultat de recherche par titre."""

    id: str
    title: Optional[str] = None
    original_title: Optional[str] = None
    description: Optional[str] = None
    year: Optional[int] = None
    primary: Optional[str] = None


class IMetadataClient(ABC):
    """
    Contrat du client de metadonnees d'un catalogue.

    Une implementation parle au backend pour un seul catalogue.
    """

    @property
    @abstractmethod
    def catalog(self) -> str:
        """Segment d'API du catalogue (ex: 'hanime', 'dlsite')."""
        ...

    @abstractmethod
    async def get_metadata(self, external_id: str) -> Optional[CatalogMetadata]:
        """
        Recupere les metadonnees d'une oeuvre.

        Args :
            external_id : ID natif du catalogue

        Retourne :
            Les metadonnees, ou None si l'ID est vide ou si le catalogue
            n'a pas d'entree. Les echecs (transport, timeout, reponse
            invalide) levent une exception.
        """
        ...

    @abstractmethod
    async def search(self, title: str, max_results: int = 10) -> list[CatalogSearchResult]:
        """Recherche des oeuvres par titre."""
        ...
