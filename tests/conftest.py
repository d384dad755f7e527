"""
Fixtures pytest partagees pour les tests Hanimeta.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test (plugin et passerelle) sans lecture de l'environnement
- Scrapers factices implementant IMetadataScraper
- Metadonnees d'exemple
"""

import os
from datetime import date

import pytest

from hanimeta.config import PluginSettings, ServiceSettings
from hanimeta.core.ports import CatalogMetadata, CatalogPerson
from hanimeta.services.external_urls import ExternalUrlRegistry
from hanimeta.utils.constants import DLSITE, HANIME
from tests.fixtures.fake_scraper import FakeScraper

BACKEND_URL = "http://backend.test"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Empeche les variables d'environnement locales de fuiter dans les tests."""
    for name in list(os.environ):
        if name.startswith(("HANIMETA_", "SCRAPER_")):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def plugin_settings() -> PluginSettings:
    """Configuration du plugin pointant vers un backend de test."""
    return PluginSettings(_env_file=None, backend_url=BACKEND_URL)


@pytest.fixture
def service_settings(tmp_path) -> ServiceSettings:
    """Configuration de la passerelle sans jeton, cache dans tmp_path."""
    return ServiceSettings(_env_file=None, cache_dir=tmp_path / "cache")


@pytest.fixture
def url_registry() -> ExternalUrlRegistry:
    return ExternalUrlRegistry()


@pytest.fixture
def sample_metadata() -> CatalogMetadata:
    """Metadonnees completes d'une oeuvre Hanime."""
    return CatalogMetadata(
        id="86994",
        title="Test Title",
        original_title="テストタイトル",
        description="Desc",
        year=2023,
        rating=4.5,
        release_date=date(2023, 5, 12),
        primary="https://cdn.example.org/86994/cover.jpg",
        genres=("Romance",),
        tags=("Vanilla", "School"),
        studios=("Studio A",),
        series=("Series X",),
        people=(
            CatalogPerson(name="Voice One", type="Actor", role="Heroine"),
            CatalogPerson(name="Boss", type="Director"),
        ),
        source_urls=("https://hanime1.me/watch?v=86994",),
    )


@pytest.fixture
def hanime_scraper(sample_metadata: CatalogMetadata) -> FakeScraper:
    return FakeScraper(HANIME, items={"86994": sample_metadata})


@pytest.fixture
def dlsite_scraper() -> FakeScraper:
    return FakeScraper(
        DLSITE,
        items={"RJ123456": CatalogMetadata(id="RJ123456", title="Maniax Work", year=2020)},
    )
