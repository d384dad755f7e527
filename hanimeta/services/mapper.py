"""
Mapping des metadonnees de catalogue vers les entites hote.

Regle centrale : un champ absent des metadonnees ne touche jamais la valeur
existante de l'entite. Des scrapes partiels successifs ne doivent pas
effacer des donnees deja correctes.
"""

from typing import Optional

from hanimeta.config import TagMappingMode
from hanimeta.core.entities import (
    Movie,
    PersonInfo,
    PersonKind,
    RemoteSearchResult,
)
from hanimeta.core.ports import CatalogMetadata, CatalogPerson, CatalogSearchResult
from hanimeta.core.value_objects import CatalogDescriptor
from hanimeta.utils.helpers import to_float32

# Types de personnes des catalogues (en minuscules) -> type hote
_PERSON_KINDS: dict[str, PersonKind] = {
    "actor": PersonKind.ACTOR,
    "voice": PersonKind.ACTOR,
    "voiceactor": PersonKind.ACTOR,
    "cv": PersonKind.ACTOR,
    "声優": PersonKind.ACTOR,
    "director": PersonKind.DIRECTOR,
    "監督": PersonKind.DIRECTOR,
    "writer": PersonKind.WRITER,
    "scenario": PersonKind.WRITER,
    "author": PersonKind.WRITER,
    "シナリオ": PersonKind.WRITER,
    "作者": PersonKind.WRITER,
    "著者": PersonKind.WRITER,
    "producer": PersonKind.PRODUCER,
    "composer": PersonKind.COMPOSER,
    "music": PersonKind.COMPOSER,
    "音楽": PersonKind.COMPOSER,
    "gueststar": PersonKind.GUEST_STAR,
}


def _has_text(value: Optional[str]) -> bool:
    return value is not None and bool(value.strip())


def person_kind(raw_type: Optional[str]) -> PersonKind:
    """Normalise un type de personne ; inconnu -> Actor."""
    if not _has_text(raw_type):
        return PersonKind.ACTOR
    key = raw_type.strip().lower().replace(" ", "").replace("_", "")
    return _PERSON_KINDS.get(key, PersonKind.ACTOR)


class MetadataMapper:
    """
    Copie les metadonnees d'un catalogue sur les entites hote.

    Un mapper par catalogue : le descripteur fournit la cle d'ID externe,
    le mode de mapping decide si les tags du catalogue deviennent des tags
    ou des genres.
    """

    def __init__(
        self,
        descriptor: CatalogDescriptor,
        tag_mapping_mode: TagMappingMode = TagMappingMode.TAGS,
    ) -> None:
        self._descriptor = descriptor
        self._tag_mapping_mode = tag_mapping_mode

    def map_to_movie(
        self,
        metadata: CatalogMetadata,
        movie: Movie,
        original_name: Optional[str] = None,
    ) -> None:
        """
        Remplit un Movie a partir des metadonnees.

        Args:
            metadata: Metadonnees recuperees
            movie: Entite destination (modifiee sur place)
            original_name: Nom de repli si le catalogue n'a pas de titre
                et que l'entite n'en a pas encore
        """
        if _has_text(metadata.id):
            movie.set_provider_id(self._descriptor.key, metadata.id)

        if _has_text(metadata.title):
            movie.name = metadata.title
        elif not movie.name and _has_text(original_name):
            movie.name = original_name

        if _has_text(metadata.original_title):
            movie.original_title = metadata.original_title

        if _has_text(metadata.description):
            movie.overview = metadata.description

        if metadata.year is not None:
            movie.production_year = metadata.year

        if metadata.rating is not None:
            movie.community_rating = to_float32(metadata.rating)

        if metadata.release_date is not None:
            movie.premiere_date = metadata.release_date

        if metadata.studios:
            movie.studios = list(metadata.studios)

        # Tags du catalogue : tags ou genres selon la configuration
        if self._tag_mapping_mode is TagMappingMode.GENRES:
            genres = _merge(metadata.genres, metadata.tags)
            tags = list(metadata.series)
        else:
            genres = list(metadata.genres)
            tags = _merge(metadata.tags, metadata.series)

        if genres:
            movie.genres = genres
        if tags:
            movie.tags = tags

    def map_to_search_result(self, result: CatalogSearchResult) -> RemoteSearchResult:
        return RemoteSearchResult(
            name=result.title or "",
            overview=result.description,
            production_year=result.year,
            image_url=result.primary,
            provider_ids={self._descriptor.key: result.id},
            search_provider_name=self._descriptor.provider_name,
        )

    def map_metadata_to_search_result(self, metadata: CatalogMetadata) -> RemoteSearchResult:
        """Resultat de recherche construit depuis une recuperation par ID."""
        return RemoteSearchResult(
            name=metadata.title or "",
            overview=metadata.description,
            production_year=metadata.year,
            image_url=metadata.primary,
            provider_ids={self._descriptor.key: metadata.id},
            search_provider_name=self._descriptor.provider_name,
        )

    def create_person_infos(self, metadata: CatalogMetadata) -> list[PersonInfo]:
        return [_to_person_info(p) for p in metadata.people if _has_text(p.name)]


def _to_person_info(person: CatalogPerson) -> PersonInfo:
    return PersonInfo(
        name=person.name.strip(),
        type=person_kind(person.type),
        role=person.role if _has_text(person.role) else None,
    )


def _merge(*sequences: tuple[str, ...]) -> list[str]:
    """Concatene en conservant l'ordre et sans doublons."""
    seen: set[str] = set()
    merged: list[str] = []
    for sequence in sequences:
        for value in sequence:
            if value not in seen:
                seen.add(value)
                merged.append(value)
    return merged
