"""
Fournisseurs appeles par le serveur multimedia.

Couche d'adaptation minimale : chaque fournisseur implemente une seule
capacite du contrat hote (metadonnees par ID, recherche, images, URLs
externes) et delegue au client du backend et au mapper. Un meme jeu de
classes sert tous les catalogues, parametre par un CatalogDescriptor.

Un echec de recuperation ne doit jamais interrompre un rafraichissement
en lot : il est journalise et le fournisseur repond "pas de metadonnees".
"""

from typing import Callable, Optional

import httpx
from loguru import logger

from hanimeta.adapters.api.errors import MetadataFetchError
from hanimeta.adapters.api.scraper_client import ScraperApiClient
from hanimeta.config import PluginSettings
from hanimeta.core.entities import (
    ImageType,
    MetadataResult,
    Movie,
    MovieInfo,
    RemoteImageInfo,
    RemoteSearchResult,
)
from hanimeta.core.ports import CatalogMetadata
from hanimeta.core.value_objects import CatalogDescriptor
from hanimeta.services.external_urls import ExternalUrlStore
from hanimeta.services.mapper import MetadataMapper
from hanimeta.utils.helpers import clean_title

# Un client neuf par invocation, ferme a la sortie du bloc async with
ClientFactory = Callable[[], ScraperApiClient]


class CatalogMetadataProvider:
    """
    Fournisseur de metadonnees et de recherche d'un catalogue.

    Resolution de l'ID, dans l'ordre :
    1. ID externe deja attache a l'element
    2. ID extrait du nom nettoye (nom de fichier, URL collee...)
    3. Premier resultat d'une recherche par titre
    """

    order = 0

    def __init__(
        self,
        descriptor: CatalogDescriptor,
        client_factory: ClientFactory,
        mapper: MetadataMapper,
        settings: PluginSettings,
    ) -> None:
        self._descriptor = descriptor
        self._client_factory = client_factory
        self._mapper = mapper
        self._settings = settings

    @property
    def name(self) -> str:
        return self._descriptor.provider_name

    async def get_metadata(self, info: Optional[MovieInfo]) -> MetadataResult:
        """
        Recupere et mappe les metadonnees d'un film.

        Returns:
            MetadataResult avec has_metadata=True si une oeuvre a ete trouvee.
            En cas d'echec, un resultat vide (l'entite n'est pas touchee).
        """
        result = MetadataResult()
        if info is None:
            logger.error("Requete de metadonnees sans MovieInfo", provider=self.name)
            return result

        logger.info(
            "Recherche de metadonnees",
            provider=self.name,
            name=info.name,
            provider_ids=info.provider_ids,
        )

        try:
            external_id = await self._resolve_id(info)
            if not external_id:
                logger.debug("Aucun ID trouve", provider=self.name, name=info.name)
                return result

            if not self._settings.is_valid:
                logger.error("Configuration du plugin invalide", backend_url=self._settings.backend_url)
                return result

            async with self._client_factory() as client:
                metadata = await client.get_metadata(external_id)
        except MetadataFetchError as exc:
            logger.error("Echec de recuperation des metadonnees", provider=self.name, error=str(exc))
            return result

        if metadata is None:
            logger.warning("Aucune metadonnee pour cet ID", provider=self.name, id=external_id)
            return result

        self._mapper.map_to_movie(metadata, result.item, info.name)
        for person in self._mapper.create_person_infos(metadata):
            result.add_person(person)
        result.has_metadata = True

        logger.info(
            "Metadonnees recuperees",
            provider=self.name,
            id=external_id,
            title=result.item.name,
        )
        return result

    async def get_search_results(self, info: MovieInfo) -> list[RemoteSearchResult]:
        """
        Liste les candidats pour une identification manuelle.

        Un ID externe deja present donne au plus un resultat ; sinon une
        recherche par titre nettoye est lancee.
        """
        existing_id = info.provider_ids.get(self._descriptor.key)
        try:
            if existing_id and existing_id.strip():
                async with self._client_factory() as client:
                    metadata = await client.get_metadata(existing_id)
                if metadata is None or not metadata.title:
                    return []
                return [self._mapper.map_metadata_to_search_result(metadata)]

            query = clean_title(info.original_title or info.name)
            if not query:
                return []
            return await self._search(query)
        except MetadataFetchError as exc:
            logger.error("Echec de la recherche", provider=self.name, error=str(exc))
            return []

    async def get_image_response(self, url: str) -> httpx.Response:
        async with self._client_factory() as client:
            return await client.get_image_response(url)

    async def _resolve_id(self, info: MovieInfo) -> Optional[str]:
        existing = info.provider_ids.get(self._descriptor.key)
        if existing and existing.strip():
            return existing.strip()

        cleaned_name = clean_title(info.name)
        parsed = self._descriptor.extract_id(cleaned_name) or self._descriptor.extract_id(info.name)
        if parsed:
            logger.info("ID extrait du nom", provider=self.name, name=info.name, id=parsed)
            return parsed

        query = clean_title(info.original_title) or cleaned_name
        if not query:
            return None

        logger.info("Pas d'ID, recherche par titre", provider=self.name, query=query)
        results = await self._search(query)
        if results:
            found = results[0].provider_ids.get(self._descriptor.key)
            if found:
                logger.info("Recherche par titre concluante", provider=self.name, id=found)
                return found
        return None

    async def _search(self, query: str) -> list[RemoteSearchResult]:
        async with self._client_factory() as client:
            hits = await client.search(query, self._settings.max_search_results)
        results = [self._mapper.map_to_search_result(hit) for hit in hits]
        logger.info("Resultats de recherche", provider=self.name, query=query, count=len(results))
        return results


class CatalogImageProvider:
    """Images distantes d'un film (image principale et fond)."""

    order = 0

    def __init__(self, descriptor: CatalogDescriptor, client_factory: ClientFactory) -> None:
        self._descriptor = descriptor
        self._client_factory = client_factory

    @property
    def name(self) -> str:
        return self._descriptor.provider_name

    def supports(self, item: object) -> bool:
        return isinstance(item, Movie)

    def get_supported_images(self, item: object) -> list[ImageType]:
        return [ImageType.PRIMARY, ImageType.BACKDROP, ImageType.THUMB]

    async def get_images(self, item: Movie) -> list[RemoteImageInfo]:
        external_id = item.get_provider_id(self._descriptor.key)
        if not external_id:
            external_id = self._descriptor.extract_id(item.name)
        if not external_id:
            logger.debug("Aucun ID pour les images", provider=self.name, name=item.name)
            return []

        try:
            async with self._client_factory() as client:
                metadata = await client.get_metadata(external_id)
        except MetadataFetchError as exc:
            logger.error("Echec de recuperation des images", provider=self.name, error=str(exc))
            return []

        if metadata is None:
            return []

        images = self._images_for(metadata)
        logger.info("Images trouvees", provider=self.name, id=external_id, count=len(images))
        return images

    async def get_image_response(self, url: str) -> httpx.Response:
        async with self._client_factory() as client:
            return await client.get_image_response(url)

    def _images_for(self, metadata: CatalogMetadata) -> list[RemoteImageInfo]:
        images: list[RemoteImageInfo] = []
        if metadata.primary:
            # L'image principale sert aussi de fond et de vignette
            for image_type in (ImageType.PRIMARY, ImageType.BACKDROP, ImageType.THUMB):
                images.append(RemoteImageInfo(self.name, metadata.primary, image_type))
        if metadata.backdrop and metadata.backdrop != metadata.primary:
            images.append(RemoteImageInfo(self.name, metadata.backdrop, ImageType.BACKDROP))
        for thumbnail in metadata.thumbnails:
            if thumbnail != metadata.primary:
                images.append(RemoteImageInfo(self.name, thumbnail, ImageType.THUMB))
        return images


class CatalogExternalId:
    """Declaration de l'ID externe aupres de l'hote."""

    def __init__(self, descriptor: CatalogDescriptor) -> None:
        self._descriptor = descriptor

    @property
    def provider_name(self) -> str:
        return self._descriptor.provider_name

    @property
    def key(self) -> str:
        return self._descriptor.key

    @property
    def url_format_string(self) -> str:
        return self._descriptor.url_template

    def supports(self, item: object) -> bool:
        return isinstance(item, Movie)


class CatalogExternalUrlProvider:
    """Lien vers la page publique de l'oeuvre."""

    def __init__(self, descriptor: CatalogDescriptor, url_store: ExternalUrlStore) -> None:
        self._descriptor = descriptor
        self._url_store = url_store

    @property
    def name(self) -> str:
        return self._descriptor.provider_name

    def get_external_urls(self, item: Movie) -> list[str]:
        """
        URL memorisee lors de la derniere recuperation, sinon URL
        construite depuis le modele du catalogue.
        """
        external_id = item.get_provider_id(self._descriptor.key)
        if not external_id or not external_id.strip():
            return []
        stored = self._url_store.get_url(external_id)
        if stored:
            return [stored]
        return [self._descriptor.build_url(external_id.strip())]
