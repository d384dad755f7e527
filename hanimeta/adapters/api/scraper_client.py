"""
Client HTTP du backend de scraping.

Implemente IMetadataClient pour un catalogue (Hanime, DLsite...). Le
catalogue n'est qu'un parametre : un seul client sert tous les catalogues
via leur CatalogDescriptor.

Usage:
    client = ScraperApiClient(
        descriptor=HANIME,
        base_url="http://127.0.0.1:8585",
        api_token="secret",
    )
    metadata = await client.get_metadata("86994")
    results = await client.search("Titre")
    await client.close()
"""

import json
from datetime import date, datetime
from typing import Any, Optional

import httpx
from loguru import logger

from hanimeta.adapters.api.errors import (
    BackendStatusError,
    BackendTimeoutError,
    BackendUnavailableError,
    MalformedResponseError,
)
from hanimeta.adapters.api.retry import RateLimitError, request_with_retry
from hanimeta.config import DEFAULT_TOKEN_HEADER
from hanimeta.core.ports import (
    CatalogMetadata,
    CatalogPerson,
    CatalogSearchResult,
    IMetadataClient,
)
from hanimeta.core.value_objects import CatalogDescriptor
from hanimeta.services.external_urls import ExternalUrlStore


class ScraperApiClient(IMetadataClient):
    """
    Client du backend pour un catalogue.

    - GET {base_url}/api/{catalog}/{id} pour les metadonnees
    - GET {base_url}/api/{catalog}/search?title=...&max=... pour la recherche
    - Jeton optionnel envoye sous le header configure
    - Retry automatique sur 429 (backend sature)

    Les corps acceptes sont l'objet plat {"Title": ..., "Year": ...} ou
    l'enveloppe du backend {"success": ..., "data": {...}} ; les cles sont
    lues sans tenir compte de la casse.
    """

    # Backoff des recuperations par ID (secondes)
    METADATA_MIN_WAIT = 3
    METADATA_MAX_WAIT = 100
    # Backoff des recherches (secondes)
    SEARCH_MIN_WAIT = 1
    SEARCH_MAX_WAIT = 30

    def __init__(
        self,
        descriptor: CatalogDescriptor,
        base_url: str,
        api_token: Optional[str] = None,
        token_header_name: str = DEFAULT_TOKEN_HEADER,
        timeout: float = 60.0,
        url_store: Optional[ExternalUrlStore] = None,
        max_attempts: int = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialise le client.

        Args:
            descriptor: Catalogue servi
            base_url: URL de base du backend
            api_token: Jeton d'authentification (None ou vide = pas de header)
            token_header_name: Nom du header portant le jeton
            timeout: Delai maximum par requete en secondes
            url_store: Store des URLs publiques a alimenter
            max_attempts: Tentatives maximum sur 429
            transport: Transport httpx (tests)
        """
        self._descriptor = descriptor
        self._base_url = base_url.rstrip("/")
        self._api_token = api_token
        self._token_header_name = token_header_name
        self._timeout = timeout
        self._url_store = url_store
        self._max_attempts = max_attempts
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._api_token and self._api_token.strip():
                headers[self._token_header_name] = self._api_token

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    @property
    def catalog(self) -> str:
        return self._descriptor.api_path

    @property
    def descriptor(self) -> CatalogDescriptor:
        return self._descriptor

    async def get_metadata(self, external_id: str) -> Optional[CatalogMetadata]:
        """
        Recupere les metadonnees d'une oeuvre par ID.

        Args:
            external_id: ID natif du catalogue

        Returns:
            CatalogMetadata, ou None si l'ID est vide ou si le backend
            indique que l'oeuvre n'existe pas (success=false)

        Raises:
            BackendTimeoutError: Delai depasse
            BackendUnavailableError: Erreur de transport
            BackendStatusError: Statut hors 2xx (y compris 429 persistant)
            MalformedResponseError: Corps invalide ou titre absent
        """
        if external_id is None or not external_id.strip():
            return None

        external_id = external_id.strip()
        path = f"/api/{self.catalog}/{external_id}"
        logger.debug("Recuperation des metadonnees", catalog=self.catalog, id=external_id)

        response = await self._get(
            path,
            min_wait=self.METADATA_MIN_WAIT,
            max_wait=self.METADATA_MAX_WAIT,
        )
        payload = self._decode(response)
        if not isinstance(payload, dict):
            raise self._malformed(response, "le corps n'est pas un objet JSON")

        data = _unwrap(payload)
        if data is None:
            logger.warning(
                "Le backend ne connait pas cette oeuvre",
                catalog=self.catalog,
                id=external_id,
            )
            return None
        if not isinstance(data, dict):
            raise self._malformed(response, "le champ data n'est pas un objet")

        metadata = parse_metadata(data, external_id)
        if not metadata.title or not metadata.title.strip():
            raise self._malformed(response, "titre absent")

        if self._url_store is not None:
            self._url_store.record(metadata.id, metadata.source_urls)

        return metadata

    async def search(self, title: str, max_results: int = 10) -> list[CatalogSearchResult]:
        """
        Recherche des oeuvres par titre.

        Args:
            title: Titre a rechercher
            max_results: Nombre maximum de resultats

        Returns:
            Liste de CatalogSearchResult (vide si rien trouve)
        """
        if title is None or not title.strip():
            return []

        path = f"/api/{self.catalog}/search"
        logger.debug("Recherche par titre", catalog=self.catalog, title=title)

        response = await self._get(
            path,
            params={"title": title.strip(), "max": max_results},
            min_wait=self.SEARCH_MIN_WAIT,
            max_wait=self.SEARCH_MAX_WAIT,
        )
        payload = self._decode(response)

        if isinstance(payload, dict):
            items = _unwrap(payload)
            if items is None:
                logger.warning("Recherche refusee par le backend", catalog=self.catalog, title=title)
                return []
        else:
            items = payload

        if not isinstance(items, list):
            raise self._malformed(response, "la recherche ne renvoie pas de liste")

        results = []
        for item in items:
            if not isinstance(item, dict):
                continue
            result = parse_search_result(item)
            if result is not None:
                results.append(result)
        return results[:max_results]

    async def get_image_response(self, url: str) -> httpx.Response:
        """Telecharge une image avec le meme client (et le meme jeton)."""
        client = self._get_client()
        try:
            return await client.get(url)
        except httpx.TimeoutException as exc:
            raise BackendTimeoutError(url, self._timeout) from exc
        except httpx.TransportError as exc:
            raise BackendUnavailableError(url, str(exc)) from exc

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "ScraperApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _get(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        min_wait: float = 1,
        max_wait: float = 60,
    ) -> httpx.Response:
        """GET avec conversion des erreurs httpx en MetadataFetchError."""
        client = self._get_client()
        url = f"{self._base_url}{path}"
        try:
            return await request_with_retry(
                client,
                "GET",
                path,
                max_attempts=self._max_attempts,
                min_wait=min_wait,
                max_wait=max_wait,
                params=params,
            )
        except httpx.TimeoutException as exc:
            raise BackendTimeoutError(url, self._timeout) from exc
        except httpx.TransportError as exc:
            raise BackendUnavailableError(url, str(exc)) from exc
        except httpx.HTTPStatusError as exc:
            raise BackendStatusError(url, exc.response.status_code) from exc
        except RateLimitError as exc:
            raise BackendStatusError(url, 429) from exc

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._malformed(response, "JSON invalide") from exc

    def _malformed(self, response: httpx.Response, reason: str) -> MalformedResponseError:
        url = str(response.request.url)
        logger.warning("Reponse du backend invalide", catalog=self.catalog, url=url, reason=reason)
        return MalformedResponseError(url, f"Reponse invalide: {reason}")


# ---------------------------------------------------------------------------
# Parsing des reponses
# ---------------------------------------------------------------------------


def _unwrap(payload: dict[str, Any]) -> Any:
    """
    Extrait le contenu d'une enveloppe {"success", "data"}.

    Returns:
        Le champ data si success=true, None si success=false, ou l'objet
        lui-meme s'il ne s'agit pas d'une enveloppe
    """
    fields = _lower_keys(payload)
    success = fields.get("success")
    if not isinstance(success, bool):
        return payload
    if not success:
        return None
    return fields.get("data")


def _lower_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {str(k).lower(): v for k, v in data.items()}


def _get_str(fields: dict[str, Any], name: str) -> Optional[str]:
    value = fields.get(name)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _get_int(fields: dict[str, Any], name: str) -> Optional[int]:
    value = fields.get(name)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _get_float(fields: dict[str, Any], name: str) -> Optional[float]:
    value = fields.get(name)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().replace(",", ""))
        except ValueError:
            return None
    return None


def _get_date(fields: dict[str, Any], name: str) -> Optional[date]:
    value = fields.get(name)
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _get_str_list(fields: dict[str, Any], name: str) -> tuple[str, ...]:
    value = fields.get(name)
    if not isinstance(value, list):
        return ()
    return tuple(v for v in value if isinstance(v, str) and v.strip())


def _get_people(fields: dict[str, Any]) -> tuple[CatalogPerson, ...]:
    value = fields.get("people")
    if not isinstance(value, list):
        return ()
    people = []
    for element in value:
        if not isinstance(element, dict):
            continue
        person = _lower_keys(element)
        name = _get_str(person, "name")
        if not name or not name.strip():
            continue
        people.append(
            CatalogPerson(
                name=name,
                type=_get_str(person, "type"),
                role=_get_str(person, "role"),
            )
        )
    return tuple(people)


def parse_metadata(data: dict[str, Any], external_id: str) -> CatalogMetadata:
    """
    Construit un CatalogMetadata depuis un objet JSON.

    Les cles sont lues sans tenir compte de la casse. Un champ absent ou
    d'un type inattendu reste a None (ou vide pour les sequences).
    L'ID retenu est celui de la requete.
    """
    fields = _lower_keys(data)
    return CatalogMetadata(
        id=external_id,
        title=_get_str(fields, "title"),
        original_title=_get_str(fields, "originaltitle"),
        description=_get_str(fields, "description"),
        year=_get_int(fields, "year"),
        rating=_get_float(fields, "rating"),
        release_date=_get_date(fields, "releasedate"),
        primary=_get_str(fields, "primary"),
        backdrop=_get_str(fields, "backdrop"),
        thumbnails=_get_str_list(fields, "thumbnails"),
        genres=_get_str_list(fields, "genres"),
        tags=_get_str_list(fields, "tags"),
        studios=_get_str_list(fields, "studios"),
        series=_get_str_list(fields, "series"),
        people=_get_people(fields),
        source_urls=_get_str_list(fields, "sourceurls"),
    )


def parse_search_result(item: dict[str, Any]) -> Optional[CatalogSearchResult]:
    """Construit un CatalogSearchResult ; None si l'element n'a pas d'ID."""
    fields = _lower_keys(item)
    external_id = _get_str(fields, "id")
    if not external_id or not external_id.strip():
        return None
    return CatalogSearchResult(
        id=external_id,
        title=_get_str(fields, "title"),
        original_title=_get_str(fields, "originaltitle"),
        description=_get_str(fields, "description"),
        year=_get_int(fields, "year"),
        primary=_get_str(fields, "primary"),
    )
