"""GitHub Trending fetcher.

Downloads a trending listing page and hands it to the extractor.
"""

from datetime import datetime, timezone
from typing import Final
from urllib.parse import quote

import httpx

from trendboard.errors import RemoteError, ValidationError
from trendboard.models import Repository, TimeRange, TrendingResponse
from trendboard.scraper.extractor import extract_repositories
from trendboard.utils.config import Settings, get_settings
from trendboard.utils.logging_config import get_logger, log_context

# Fixed desktop-browser header set
BROWSER_HEADERS: Final[dict[str, str]] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE: Final = "-_.!~*'()"


def _get_logger():
    """Get logger instance lazily to avoid import-time config loading."""
    return get_logger(__name__)


def validate_since(since: str) -> TimeRange:
    """Check that since names a known time window.

    Raises:
        ValidationError: If since is not exactly daily, weekly or monthly
    """
    try:
        return TimeRange(since)
    except ValueError:
        raise ValidationError(
            f"since must be one of {[t.value for t in TimeRange]}, got {since!r}",
            field="since",
        ) from None


def validate_language(language: str) -> str:
    """Check that a language filter was given.

    Raises:
        ValidationError: If language is empty or blank
    """
    if not language or not language.strip():
        raise ValidationError("Language cannot be empty", field="language")
    return language.strip()


def build_trending_url(
    language: str,
    since: TimeRange | str,
    base_url: str = "https://github.com/trending",
) -> str:
    """Build the trending listing URL for a language and time window."""
    since_value = since.value if isinstance(since, TimeRange) else since
    return f"{base_url}/{quote(language, safe=_URI_COMPONENT_SAFE)}?since={since_value}"


async def fetch_trending(
    language: str,
    since: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> list[Repository]:
    """Scrape one GitHub Trending page.

    Args:
        language: Language filter (e.g. 'python', 'c++')
        since: Time window, one of daily, weekly, monthly
        client: Optional shared HTTP client; a short-lived one is used otherwise
        settings: Optional settings override

    Returns:
        Repositories in page order

    Raises:
        ValidationError: If language or since is invalid (no request is made)
        RemoteError: If the request fails or GitHub answers with a non-2xx status
    """
    settings = settings or get_settings()
    language = validate_language(language)
    time_range = validate_since(since)

    url = build_trending_url(language, time_range, settings.GITHUB_TRENDING_URL)
    context = {"language": language, "since": time_range.value, "url": url}
    _get_logger().info("Scraping: %s", url, extra=log_context(**context))

    try:
        if client is None:
            client_kwargs = {"follow_redirects": True}
            if settings.REQUEST_TIMEOUT is not None:
                client_kwargs["timeout"] = settings.REQUEST_TIMEOUT
            async with httpx.AsyncClient(**client_kwargs) as owned_client:
                response = await owned_client.get(url, headers=BROWSER_HEADERS)
        else:
            response = await client.get(url, headers=BROWSER_HEADERS)
    except httpx.HTTPError as e:
        _get_logger().error("Request to %s failed: %s", url, e, extra=log_context(**context))
        raise RemoteError(f"Request to GitHub failed: {e}", url=url) from e

    if not response.is_success:
        _get_logger().error(
            "GitHub responded with status %s for %s",
            response.status_code,
            url,
            extra=log_context(**context, status_code=response.status_code),
        )
        raise RemoteError(
            f"GitHub responded with status {response.status_code}",
            status_code=response.status_code,
            url=url,
        )

    repositories = extract_repositories(
        response.text,
        language,
        base_url=settings.GITHUB_BASE_URL,
        contributor_limit=settings.CONTRIBUTOR_LIMIT,
    )
    _get_logger().info(
        "Successfully scraped %d repositories",
        len(repositories),
        extra=log_context(**context, count=len(repositories)),
    )
    return repositories


async def fetch_trending_response(
    language: str,
    since: str,
    *,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> TrendingResponse:
    """Scrape a trending page and wrap it in a timestamped response."""
    repositories = await fetch_trending(language, since, client=client, settings=settings)
    return TrendingResponse(
        repositories=repositories,
        language=validate_language(language),
        since=validate_since(since),
        last_updated=datetime.now(timezone.utc),
    )
