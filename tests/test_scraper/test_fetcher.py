"""Tests for the GitHub Trending fetcher."""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import logging

import httpx
import pytest

from trendboard.errors import RemoteError, ValidationError
from trendboard.models import TimeRange, TrendingResponse
from trendboard.scraper.fetcher import (
    BROWSER_HEADERS,
    build_trending_url,
    fetch_trending,
    fetch_trending_response,
    validate_language,
    validate_since,
)


def _mock_response(mock_client, text="", status_code=200):
    mock_instance = mock_client.return_value.__aenter__.return_value
    mock_instance.get = AsyncMock()
    mock_instance.get.return_value.text = text
    mock_instance.get.return_value.status_code = status_code
    mock_instance.get.return_value.is_success = 200 <= status_code < 300
    return mock_instance


class TestValidation:
    """Test parameter validation."""

    @pytest.mark.parametrize("since", ["daily", "weekly", "monthly"])
    def test_valid_since(self, since):
        assert validate_since(since) == TimeRange(since)

    @pytest.mark.parametrize("since", ["yearly", "", "Daily", " daily"])
    def test_invalid_since(self, since):
        with pytest.raises(ValidationError) as exc_info:
            validate_since(since)
        assert exc_info.value.field == "since"

    def test_blank_language(self):
        with pytest.raises(ValidationError, match="Language cannot be empty"):
            validate_language("   ")


class TestBuildTrendingUrl:
    """Test URL construction."""

    def test_simple_language(self):
        assert build_trending_url("python", "weekly") == "https://github.com/trending/python?since=weekly"

    def test_language_is_uri_encoded(self):
        assert build_trending_url("c++", TimeRange.DAILY) == "https://github.com/trending/c%2B%2B?since=daily"
        assert build_trending_url("c#", "monthly") == "https://github.com/trending/c%23?since=monthly"

    def test_custom_base(self):
        assert build_trending_url("go", "daily", "http://mirror/trending") == "http://mirror/trending/go?since=daily"


@pytest.mark.asyncio
async def test_fetch_trending_success(entry_html, page_html):
    """Test successful GitHub Trending scrape."""
    html = page_html(entry_html(owner="user", name="repo1"), entry_html(owner="user", name="repo2"))

    with patch("httpx.AsyncClient") as mock_client:
        mock_instance = _mock_response(mock_client, html)

        results = await fetch_trending("python", "weekly")

    assert [r.key for r in results] == ["user/repo1", "user/repo2"]
    assert results[0].stars == 1234
    url = mock_instance.get.call_args.args[0]
    assert url == "https://github.com/trending/python?since=weekly"
    assert mock_instance.get.call_args.kwargs["headers"] == BROWSER_HEADERS


@pytest.mark.asyncio
async def test_fetch_trending_sends_browser_user_agent(page_html):
    with patch("httpx.AsyncClient") as mock_client:
        mock_instance = _mock_response(mock_client, page_html())

        await fetch_trending("python", "daily")

    headers = mock_instance.get.call_args.kwargs["headers"]
    assert headers["User-Agent"].startswith("Mozilla/5.0")
    assert "text/html" in headers["Accept"]


@pytest.mark.asyncio
async def test_invalid_since_makes_no_request():
    """Test that validation fails before any network call."""
    with patch("httpx.AsyncClient") as mock_client:
        with pytest.raises(ValidationError):
            await fetch_trending("python", "yearly")

    mock_client.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_trending_empty_language():
    with pytest.raises(ValidationError, match="Language cannot be empty"):
        await fetch_trending("", "daily")


@pytest.mark.asyncio
async def test_non_success_status_raises_remote_error():
    with patch("httpx.AsyncClient") as mock_client:
        _mock_response(mock_client, "Too many requests", status_code=429)

        with pytest.raises(RemoteError) as exc_info:
            await fetch_trending("python", "daily")

    assert exc_info.value.status_code == 429
    assert "GitHub responded with status 429" in str(exc_info.value)


@pytest.mark.asyncio
async def test_transport_error_raises_remote_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(RemoteError) as exc_info:
            await fetch_trending("python", "daily", client=client)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_fetch_with_shared_client(entry_html, page_html):
    """Test that an injected client is used as-is."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text=page_html(entry_html()))

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        results = await fetch_trending("c++", "monthly", client=client)

    assert len(results) == 1
    assert seen[0].url.raw_path == b"/trending/c%2B%2B?since=monthly"


@pytest.mark.asyncio
async def test_fetch_trending_response(entry_html, page_html):
    with patch("httpx.AsyncClient") as mock_client:
        _mock_response(mock_client, page_html(entry_html()))

        response = await fetch_trending_response("python", "daily")

    assert isinstance(response, TrendingResponse)
    assert response.language == "python"
    assert response.since is TimeRange.DAILY
    assert len(response.repositories) == 1
    assert isinstance(response.last_updated, datetime)
    assert response.last_updated.tzinfo is not None


@pytest.mark.asyncio
async def test_fetch_trending_response_echoes_stripped_language(entry_html, page_html):
    """Test that the response reports the language that was actually queried."""
    with patch("httpx.AsyncClient") as mock_client:
        mock_instance = _mock_response(mock_client, page_html(entry_html()))

        response = await fetch_trending_response("  rust ", "weekly")

    assert response.language == "rust"
    assert response.since is TimeRange.WEEKLY
    assert mock_instance.get.call_args.args[0] == "https://github.com/trending/rust?since=weekly"


@pytest.mark.asyncio
async def test_scrape_logs_carry_request_context(entry_html, page_html, caplog):
    with patch("httpx.AsyncClient") as mock_client:
        _mock_response(mock_client, page_html(entry_html(), entry_html(owner="x", name="y")))

        with caplog.at_level(logging.INFO, logger="trendboard.scraper.fetcher"):
            await fetch_trending("go", "monthly")

    started, finished = [r for r in caplog.records if r.name == "trendboard.scraper.fetcher"]
    assert started.extra_fields == {
        "language": "go",
        "since": "monthly",
        "url": "https://github.com/trending/go?since=monthly",
    }
    assert finished.extra_fields["count"] == 2
