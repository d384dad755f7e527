"""
Tests for the gateway routes.

Uses in-memory scrapers and verifies:
- service info and health
- detail and search envelopes
- unknown catalog, invalid id and not-found answers
- admission control (429) and scraper timeout (504)
"""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from hanimeta import __version__
from hanimeta.config import ServiceSettings
from hanimeta.core.ports import CatalogMetadata
from hanimeta.utils.constants import HANIME
from hanimeta.web.app import create_app
from tests.fixtures.fake_scraper import FakeScraper


@pytest.fixture
def client(service_settings, hanime_scraper, dlsite_scraper) -> TestClient:
    return TestClient(create_app(service_settings, [hanime_scraper, dlsite_scraper]))


class TestHomeRoutes:
    """Tests for / and /health."""

    def test_service_info(self, client: TestClient):
        body = client.get("/").json()

        assert body["success"] is True
        assert body["data"]["version"] == __version__
        assert body["data"]["authEnabled"] is False
        assert body["data"]["catalogs"] == ["dlsite", "hanime"]

    def test_service_info_reports_auth(self, hanime_scraper):
        settings = ServiceSettings(_env_file=None, auth_token="t")
        client = TestClient(create_app(settings, [hanime_scraper]))

        assert client.get("/").json()["data"]["authEnabled"] is True

    def test_health(self, client: TestClient):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert "timestamp" in body


class TestDetailRoute:
    """Tests for GET /api/{catalog}/{id}."""

    def test_found(self, client: TestClient):
        body = client.get("/api/hanime/86994").json()

        assert body["success"] is True
        assert body["data"]["title"] == "Test Title"
        assert body["data"]["rating"] == 4.5
        assert body["data"]["releaseDate"] == "2023-05-12"

    def test_id_is_normalised_before_scraping(self, client: TestClient, dlsite_scraper: FakeScraper):
        body = client.get("/api/dlsite/rj123456").json()

        assert body["success"] is True
        assert dlsite_scraper.detail_calls == ["RJ123456"]

    def test_invalid_id(self, client: TestClient, hanime_scraper: FakeScraper):
        body = client.get("/api/hanime/not-an-id").json()

        assert body["success"] is False
        assert body["message"] == "Invalid Hanime ID: not-an-id"
        assert hanime_scraper.detail_calls == []

    def test_not_found(self, client: TestClient):
        response = client.get("/api/hanime/99999")

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "message": "Content not found: 99999",
            "data": None,
        }

    def test_unknown_catalog(self, client: TestClient):
        response = client.get("/api/fanza/12345")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_catalog_segment_is_case_insensitive(self, client: TestClient):
        assert client.get("/api/Hanime/86994").json()["success"] is True

    def test_scraper_error_is_reported(self, service_settings):
        scraper = FakeScraper(HANIME, error=RuntimeError("parse failure"))
        client = TestClient(create_app(service_settings, [scraper]))

        body = client.get("/api/hanime/86994").json()

        assert body["success"] is False
        assert "parse failure" in body["message"]

    def test_scraper_timeout_returns_504(self):
        settings = ServiceSettings(_env_file=None, request_timeout_seconds=1)
        scraper = FakeScraper(HANIME, items={"86994": CatalogMetadata(id="86994")}, delay=5)
        client = TestClient(create_app(settings, [scraper]))

        response = client.get("/api/hanime/86994")

        assert response.status_code == 504
        assert response.json()["success"] is False


class TestSearchRoute:
    """Tests for GET /api/{catalog}/search."""

    def test_search(self, client: TestClient, hanime_scraper: FakeScraper):
        body = client.get("/api/hanime/search", params={"title": "test"}).json()

        assert body["success"] is True
        assert [item["id"] for item in body["data"]] == ["86994"]
        assert hanime_scraper.search_calls == [("test", 12)]

    def test_numeric_title_is_searched_not_fetched(self, client: TestClient, hanime_scraper: FakeScraper):
        client.get("/api/hanime/search", params={"title": "86994"})

        assert hanime_scraper.search_calls == [("86994", 12)]
        assert hanime_scraper.detail_calls == []

    @pytest.mark.parametrize("requested, used", [(5, 5), (500, 50), (0, 12)])
    def test_max_is_clamped(self, client: TestClient, hanime_scraper: FakeScraper, requested, used):
        client.get("/api/hanime/search", params={"title": "x", "max": requested})

        assert hanime_scraper.search_calls[-1] == ("x", used)

    def test_blank_title(self, client: TestClient, hanime_scraper: FakeScraper):
        body = client.get("/api/hanime/search", params={"title": "  "}).json()

        assert body["success"] is False
        assert hanime_scraper.search_calls == []


class TestAdmissionControl:
    """A catalog with every slot taken refuses new work immediately."""

    @pytest.mark.asyncio
    async def test_busy_catalog_returns_429(self, hanime_scraper: FakeScraper):
        settings = ServiceSettings(_env_file=None, max_concurrent_requests=1)
        app = create_app(settings, [hanime_scraper])
        limiter = app.state.limiters["hanime"]
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://gateway") as client:
            async with limiter.slot():
                response = await client.get("/api/hanime/86994")

        assert response.status_code == 429
        assert response.json() == {
            "success": False,
            "message": "Service busy. Retry later.",
            "data": None,
        }
        assert hanime_scraper.detail_calls == []

    @pytest.mark.asyncio
    async def test_slots_are_per_catalog(self, hanime_scraper: FakeScraper, dlsite_scraper: FakeScraper):
        settings = ServiceSettings(_env_file=None, max_concurrent_requests=1)
        app = create_app(settings, [hanime_scraper, dlsite_scraper])
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://gateway") as client:
            async with app.state.limiters["hanime"].slot():
                response = await client.get("/api/dlsite/RJ123456")

        assert response.status_code == 200
        assert response.json()["success"] is True

    @pytest.mark.asyncio
    async def test_slot_is_released_after_request(self, hanime_scraper: FakeScraper):
        settings = ServiceSettings(_env_file=None, max_concurrent_requests=1)
        app = create_app(settings, [hanime_scraper])
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://gateway") as client:
            first = await client.get("/api/hanime/86994")
            second = await client.get("/api/hanime/86994")

        assert first.status_code == second.status_code == 200
        assert app.state.limiters["hanime"].in_flight == 0

    @pytest.mark.asyncio
    async def test_concurrent_requests_beyond_limit(self):
        scraper = FakeScraper(
            HANIME, items={"86994": CatalogMetadata(id="86994", title="T")}, delay=0.2
        )
        settings = ServiceSettings(_env_file=None, max_concurrent_requests=2)
        app = create_app(settings, [scraper])
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://gateway") as client:
            responses = await asyncio.gather(
                *(client.get("/api/hanime/86994") for _ in range(4))
            )

        codes = sorted(r.status_code for r in responses)
        assert codes == [200, 200, 429, 429]


class TestRedirectRoute:
    """Tests for GET /r/dlsite/{id}."""

    def test_redirects_to_canonical_url(self, client: TestClient):
        response = client.get("/r/dlsite/vj012345", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == (
            "https://www.dlsite.com/pro/work/=/product_id/VJ012345.html"
        )

    def test_unparseable_id(self, client: TestClient):
        assert client.get("/r/dlsite/nothing", follow_redirects=False).status_code == 404


class TestLifespan:
    """Scrapers are closed when the app stops."""

    def test_scrapers_closed_on_shutdown(self, service_settings, hanime_scraper: FakeScraper):
        with TestClient(create_app(service_settings, [hanime_scraper])) as client:
            client.get("/health")
            assert not hanime_scraper.closed

        assert hanime_scraper.closed
