"""
Stockage en memoire des URLs publiques des oeuvres.

Chaque catalogue a son propre ExternalUrlStore (ID -> derniere URL vue),
rempli au fil des recuperations de metadonnees. Le store n'est qu'un cache
auxiliaire : il n'est jamais invalide et garde la derniere ecriture.

Les stores sont regroupes dans un ExternalUrlRegistry injecte dans les
composants qui en ont besoin, plutot que portes par des singletons de classe.
"""

import threading
from typing import Iterable, Optional

from hanimeta.core.value_objects import CatalogDescriptor


class ExternalUrlStore:
    """
    Association ID -> URL pour un catalogue.

    Les ecritures sont des upserts sur une seule cle (le dernier ecrit gagne),
    protegees par un verrou.
    """

    def __init__(self, descriptor: CatalogDescriptor) -> None:
        self._descriptor = descriptor
        self._urls: dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def descriptor(self) -> CatalogDescriptor:
        return self._descriptor

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def add_or_update(self, external_id: str, url: str) -> None:
        with self._lock:
            self._urls[external_id] = url

    def get_url(self, external_id: str) -> Optional[str]:
        with self._lock:
            return self._urls.get(external_id)

    def clear(self) -> None:
        with self._lock:
            self._urls.clear()

    def record(self, external_id: str, source_urls: Iterable[str] = ()) -> Optional[str]:
        """
        Enregistre l'URL canonique d'une oeuvre.

        Priorite :
        1. URL canonique construite depuis un ID trouve dans les URLs source
        2. URL canonique construite depuis l'ID lui-meme
        3. Premiere URL source non vide

        Args:
            external_id: ID natif de l'oeuvre
            source_urls: URLs des pages source renvoyees par le backend

        Returns:
            L'URL retenue, ou None si l'ID est vide
        """
        if not external_id or not external_id.strip():
            return None

        valid_urls: list[str] = []
        for url in source_urls:
            if url and url.strip() and url.strip().lower() not in (u.lower() for u in valid_urls):
                valid_urls.append(url.strip())

        selected = None
        for url in valid_urls:
            parsed = self._descriptor.extract_id(url)
            if parsed:
                selected = self._descriptor.build_url(parsed)
                break

        if selected is None:
            normalized = self._descriptor.extract_id(external_id)
            if normalized:
                selected = self._descriptor.build_url(normalized)

        if selected is None:
            selected = valid_urls[0] if valid_urls else self._descriptor.build_url(external_id)

        self.add_or_update(external_id, selected)
        return selected


class ExternalUrlRegistry:
    """Un ExternalUrlStore par catalogue, cree a la demande."""

    def __init__(self) -> None:
        self._stores: dict[str, ExternalUrlStore] = {}
        self._lock = threading.Lock()

    def for_catalog(self, descriptor: CatalogDescriptor) -> ExternalUrlStore:
        with self._lock:
            store = self._stores.get(descriptor.api_path)
            if store is None:
                store = ExternalUrlStore(descriptor)
                self._stores[descriptor.api_path] = store
            return store
