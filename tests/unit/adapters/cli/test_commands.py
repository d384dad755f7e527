"""
Tests for the CLI commands.

The backend is mocked with respx; configure_logging is neutralised so the
CLI callback does not rebind loguru to CliRunner's captured streams.
"""

import httpx
import pytest
import respx
from typer.testing import CliRunner

from hanimeta import __version__
from hanimeta.main import app
from tests.fixtures.backend_responses import (
    HANIME_ENVELOPE_RESPONSE,
    HANIME_NOT_FOUND_RESPONSE,
    HANIME_SEARCH_EMPTY_RESPONSE,
    HANIME_SEARCH_RESPONSE,
)

BACKEND_URL = "http://backend.test"

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HANIMETA_BACKEND_URL", BACKEND_URL)
    monkeypatch.setattr("hanimeta.main.configure_logging", lambda **kwargs: None)


class TestFetchCommand:
    """Tests for `hanimeta fetch`."""

    @respx.mock
    def test_fetch_prints_metadata(self):
        route = respx.get(f"{BACKEND_URL}/api/hanime/86994").mock(
            return_value=httpx.Response(200, json=HANIME_ENVELOPE_RESPONSE)
        )

        result = runner.invoke(app, ["fetch", "hanime", "86994"])

        assert result.exit_code == 0
        assert route.called
        assert "Test Title" in result.output

    @respx.mock
    def test_fetch_accepts_url(self):
        route = respx.get(f"{BACKEND_URL}/api/hanime/86994").mock(
            return_value=httpx.Response(200, json=HANIME_ENVELOPE_RESPONSE)
        )

        result = runner.invoke(app, ["fetch", "hanime", "https://hanime1.me/watch?v=86994"])

        assert result.exit_code == 0
        assert route.called

    @respx.mock
    def test_fetch_json(self):
        respx.get(f"{BACKEND_URL}/api/hanime/86994").mock(
            return_value=httpx.Response(200, json=HANIME_ENVELOPE_RESPONSE)
        )

        result = runner.invoke(app, ["fetch", "hanime", "86994", "--json"])

        assert result.exit_code == 0
        assert '"title": "Test Title"' in result.output

    @respx.mock
    def test_fetch_not_found(self):
        respx.get(f"{BACKEND_URL}/api/hanime/99999").mock(
            return_value=httpx.Response(200, json=HANIME_NOT_FOUND_RESPONSE)
        )

        result = runner.invoke(app, ["fetch", "hanime", "99999"])

        assert result.exit_code == 1

    @respx.mock
    def test_fetch_backend_error(self):
        respx.get(f"{BACKEND_URL}/api/hanime/86994").mock(
            return_value=httpx.Response(500)
        )

        result = runner.invoke(app, ["fetch", "hanime", "86994"])

        assert result.exit_code == 1
        assert "Echec" in result.output

    def test_unknown_catalog(self):
        result = runner.invoke(app, ["fetch", "fanza", "12345"])

        assert result.exit_code == 2
        assert "Catalogue inconnu" in result.output


class TestSearchCommand:
    """Tests for `hanimeta search`."""

    @respx.mock
    def test_search_lists_results(self):
        route = respx.get(f"{BACKEND_URL}/api/hanime/search").mock(
            return_value=httpx.Response(200, json=HANIME_SEARCH_RESPONSE)
        )

        result = runner.invoke(app, ["search", "hanime", "Love Story", "--max", "5"])

        assert result.exit_code == 0
        assert route.calls.last.request.url.params["max"] == "5"
        assert "86994" in result.output
        assert "86995" in result.output

    @respx.mock
    def test_search_default_limit_from_settings(self):
        route = respx.get(f"{BACKEND_URL}/api/hanime/search").mock(
            return_value=httpx.Response(200, json=HANIME_SEARCH_EMPTY_RESPONSE)
        )

        result = runner.invoke(app, ["search", "hanime", "nothing"])

        assert result.exit_code == 0
        assert route.calls.last.request.url.params["max"] == "10"
        assert "Aucun resultat" in result.output


class TestUrlCommand:
    """Tests for `hanimeta url`."""

    @pytest.mark.parametrize(
        "catalog, value, expected",
        [
            ("hanime", "86994", "https://hanime1.me/watch?v=86994"),
            ("dlsite", "rj123456", "https://www.dlsite.com/maniax/work/=/product_id/RJ123456.html"),
            ("DLsite", "VJ012345", "https://www.dlsite.com/pro/work/=/product_id/VJ012345.html"),
        ],
    )
    def test_url(self, catalog, value, expected):
        result = runner.invoke(app, ["url", catalog, value])

        assert result.exit_code == 0
        assert result.output.strip() == expected

    def test_invalid_id(self):
        result = runner.invoke(app, ["url", "dlsite", "not-a-code"])

        assert result.exit_code == 2


class TestVersionCommand:

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
