"""
Tests unitaires pour le mecanisme de retry sur backend sature.

Ces tests verifient:
- RateLimitError capture le header Retry-After
- Le delai d'attente suit Retry-After, borne par max_wait
- with_retry relance sur RateLimitError uniquement
- request_with_retry detecte les 429 et relance automatiquement
"""

from types import SimpleNamespace

import httpx
import pytest
import respx

from hanimeta.adapters.api.retry import (
    RateLimitError,
    _retry_after_or_backoff,
    request_with_retry,
    with_retry,
)

URL = "http://backend.test/api/hanime/86994"


def _state(exc: Exception, attempt: int = 1) -> SimpleNamespace:
    """Etat minimal de tenacity pour appeler la strategie d'attente."""
    return SimpleNamespace(
        outcome=SimpleNamespace(exception=lambda: exc),
        attempt_number=attempt,
    )


class TestRateLimitError:
    """Tests pour l'exception RateLimitError."""

    def test_stores_retry_after(self) -> None:
        error = RateLimitError(retry_after=60)
        assert error.retry_after == 60
        assert "60" in str(error)

    def test_without_retry_after(self) -> None:
        assert RateLimitError().retry_after is None


class TestWaitStrategy:
    """Tests pour le calcul du delai entre deux tentatives."""

    def test_retry_after_is_used(self) -> None:
        wait = _retry_after_or_backoff(min_wait=1, max_wait=60)
        assert wait(_state(RateLimitError(retry_after=5))) == 5.0

    def test_retry_after_is_capped_by_max_wait(self) -> None:
        wait = _retry_after_or_backoff(min_wait=1, max_wait=10)
        assert wait(_state(RateLimitError(retry_after=3600))) == 10.0

    def test_backoff_without_retry_after_stays_in_bounds(self) -> None:
        wait = _retry_after_or_backoff(min_wait=1, max_wait=8)
        for attempt in range(1, 6):
            delay = wait(_state(RateLimitError(), attempt=attempt))
            assert 1 <= delay <= 8


class TestWithRetryDecorator:
    """Tests pour le decorateur with_retry."""

    @pytest.mark.asyncio
    async def test_retries_on_rate_limit_error(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def flaky() -> str:
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RateLimitError(retry_after=0)
            return "success"

        assert await flaky() == "success"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_stops_after_max_attempts(self) -> None:
        call_count = 0

        @with_retry(max_attempts=2, min_wait=0, max_wait=0)
        async def always_busy() -> str:
            nonlocal call_count
            call_count += 1
            raise RateLimitError(retry_after=0)

        with pytest.raises(RateLimitError):
            await always_busy()
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_does_not_retry_other_exceptions(self) -> None:
        call_count = 0

        @with_retry(max_attempts=3, min_wait=0, max_wait=0)
        async def broken() -> str:
            nonlocal call_count
            call_count += 1
            raise ValueError("pas un 429")

        with pytest.raises(ValueError):
            await broken()
        assert call_count == 1


class TestRequestWithRetry:
    """Tests pour request_with_retry avec httpx."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_exhausts_attempts_on_429(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "30"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=3, min_wait=0, max_wait=0)

        assert exc_info.value.retry_after == 30
        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_then_succeeds(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json={"Title": "ok"}),
            ]
        )

        async with httpx.AsyncClient() as client:
            response = await request_with_retry(client, "GET", URL, max_attempts=3, min_wait=0, max_wait=0)

        assert response.json() == {"Title": "ok"}
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_numeric_retry_after_is_ignored(self, respx_mock: respx.Router) -> None:
        respx_mock.get(URL).mock(
            return_value=httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2026 07:28:00 GMT"})
        )

        async with httpx.AsyncClient() as client:
            with pytest.raises(RateLimitError) as exc_info:
                await request_with_retry(client, "GET", URL, max_attempts=1)

        assert exc_info.value.retry_after is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_other_errors_are_not_retried(self, respx_mock: respx.Router) -> None:
        route = respx_mock.get(URL).mock(return_value=httpx.Response(502))

        async with httpx.AsyncClient() as client:
            with pytest.raises(httpx.HTTPStatusError) as exc_info:
                await request_with_retry(client, "GET", URL)

        assert exc_info.value.response.status_code == 502
        assert route.call_count == 1
