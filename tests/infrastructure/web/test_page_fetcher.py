# 🧪 tests/infrastructure/web/test_page_fetcher.py
"""
🧪 Тести для `PageFetcher` на `httpx.MockTransport`.

Перевіряємо:
- успішне завантаження з «браузерними» заголовками;
- одну повторну спробу на 403/429 та тексти BLOCKED / RATE_LIMITED;
- FETCH_FAILED для інших статусів і NETWORK_ERROR для мережевих збоїв.
"""

from __future__ import annotations

import httpx
import pytest

from app.infrastructure.web import PageFetcher
from app.shared.result import Err, ExtractionErrorKind, Ok

URL = "https://www.amazon.in/dp/B0TEST"


def _fetcher(handler) -> PageFetcher:
    return PageFetcher(timeout_s=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_success_returns_html() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<html><h1>ok</h1></html>")

    result = await _fetcher(handler).fetch(URL, domain="amazon.in")

    assert isinstance(result, Ok)
    assert "<h1>ok</h1>" in result.value
    assert len(seen) == 1
    assert seen[0].headers["Sec-Fetch-Mode"] == "navigate"
    assert "Mozilla/5.0" in seen[0].headers["User-Agent"]


@pytest.mark.asyncio
async def test_blocked_twice_suggests_manual_entry() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(403)

    result = await _fetcher(handler).fetch(URL, domain="amazon.in")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.BLOCKED
    assert result.error.status_code == 403
    assert "Access blocked by amazon.in" in result.error.message
    assert "manual entry" in result.error.message
    assert len(calls) == 2
    assert "Sec-Fetch-Mode" not in calls[1].headers			# 🪶 Друга спроба — спрощені заголовки


@pytest.mark.asyncio
async def test_retry_after_block_can_succeed() -> None:
    statuses = iter([403, 200])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses), text="<html>second</html>")

    result = await _fetcher(handler).fetch(URL, domain="amazon.in")

    assert isinstance(result, Ok)
    assert "second" in result.value


@pytest.mark.asyncio
async def test_rate_limited_suggests_waiting() -> None:
    result = await _fetcher(lambda request: httpx.Response(429)).fetch(URL, domain="flipkart.com")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.RATE_LIMITED
    assert result.error.message == "Rate limited by flipkart.com. Please wait a few minutes and try again."


@pytest.mark.asyncio
async def test_other_status_is_fetch_failed_without_retry() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(503)

    result = await _fetcher(handler).fetch(URL, domain="amazon.in")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.FETCH_FAILED
    assert result.error.message == "Failed to fetch page: 503 Service Unavailable"
    assert result.error.status_code == 503
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_transport_error_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = await _fetcher(handler).fetch(URL, domain="amazon.in")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.NETWORK_ERROR
    assert result.error.message.startswith("Network error: could not connect")


@pytest.mark.asyncio
async def test_timeout_on_retry_is_alternative_fetch_failure() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(403)
        raise httpx.ReadTimeout("slow", request=request)

    result = await _fetcher(handler).fetch(URL, domain="amazon.in")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.NETWORK_ERROR
    assert result.error.message == "Alternative fetch failed: request timed out (ReadTimeout)"


@pytest.mark.asyncio
async def test_redirects_are_followed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://www.amazon.in/new"})
        return httpx.Response(200, text="<html>moved</html>")

    result = await _fetcher(handler).fetch("https://www.amazon.in/old", domain="amazon.in")

    assert isinstance(result, Ok)
    assert "moved" in result.value


@pytest.mark.asyncio
async def test_redirect_loop_beyond_cap_is_network_error() -> None:
    hops = []

    def handler(request: httpx.Request) -> httpx.Response:
        hops.append(request.url.path)
        return httpx.Response(302, headers={"Location": f"https://www.amazon.in/hop{len(hops)}"})

    fetcher = PageFetcher(timeout_s=1.0, max_redirects=3, transport=httpx.MockTransport(handler))
    result = await fetcher.fetch(URL, domain="amazon.in")

    assert isinstance(result, Err)
    assert result.error.kind is ExtractionErrorKind.NETWORK_ERROR
    assert result.error.message.startswith("Network error: ")
    assert result.error.details == "TooManyRedirects"
    assert len(hops) == 4									# 🔀 Початковий запит + 3 редіректи
