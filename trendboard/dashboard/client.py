"""Dashboard-side client for the trending API.

Serves fresh cache entries without touching the network and otherwise
fetches from the API's /trending endpoint. Failures never raise: they come
back as a FetchResult carrying an error message, and the cache is left as
it was.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadValidationError

from trendboard.dashboard.cache import TrendingCache
from trendboard.errors import NetworkError
from trendboard.models import Repository, TimeRange
from trendboard.utils.config import Settings, get_settings
from trendboard.utils.logging_config import get_logger

FETCH_ERROR_MESSAGE = "Failed to fetch repositories"

_REPOSITORY_LIST = TypeAdapter(list[Repository])


def _get_logger():
    """Get logger instance lazily to avoid import-time config loading."""
    return get_logger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a get_or_fetch call for one (language, window) slot.

    Attributes:
        language: Requested language
        since: Requested time window
        repositories: Repositories, empty on failure
        error: Error message for display, None on success
        from_cache: True when served from a fresh cache entry
    """

    language: str
    since: str
    repositories: tuple[Repository, ...] = ()
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class TrendingClient:
    """Cached access to the trending API.

    Concurrent misses for the same key each issue their own request; the
    results are identical reads so the last one stored wins.
    """

    def __init__(
        self,
        base_url: str,
        cache: TrendingCache,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the trending API (e.g. http://127.0.0.1:8000)
            cache: Cache shared by every caller of this client
            http_client: Optional shared HTTP client, owned by the caller
            timeout: Request timeout in seconds when no http_client is given
        """
        self.base_url = base_url.rstrip("/")
        self.cache = cache
        self._http_client = http_client
        self._timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "TrendingClient":
        """Build a client and its cache from application settings."""
        settings = settings or get_settings()
        cache = TrendingCache(ttl=timedelta(seconds=settings.CACHE_TTL_SECONDS))
        return cls(
            settings.BACKEND_URL,
            cache,
            http_client=http_client,
            timeout=settings.REQUEST_TIMEOUT,
        )

    async def _request(self, language: str, since: str) -> httpx.Response:
        url = f"{self.base_url}/trending"
        params = {"language": language, "since": since}
        if self._http_client is not None:
            return await self._http_client.get(url, params=params)

        client_kwargs = {}
        if self._timeout is not None:
            client_kwargs["timeout"] = self._timeout
        async with httpx.AsyncClient(**client_kwargs) as client:
            return await client.get(url, params=params)

    async def fetch(self, language: str, since: str) -> tuple[Repository, ...]:
        """Fetch one slot from the API, bypassing the cache.

        Raises:
            NetworkError: If the request fails, the status is not 2xx,
                or the body is not a trending payload
        """
        try:
            response = await self._request(language, since)
        except httpx.HTTPError as e:
            raise NetworkError(str(e), language=language, since=since) from e

        if not response.is_success:
            raise NetworkError(
                f"HTTP error! status: {response.status_code}",
                language=language,
                since=since,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
            if not isinstance(payload, dict):
                raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
            return tuple(_REPOSITORY_LIST.validate_python(payload.get("repositories") or []))
        except (PayloadValidationError, ValueError, TypeError) as e:
            raise NetworkError(f"Malformed response: {e}", language=language, since=since) from e

    async def get_or_fetch(self, language: str, since: TimeRange | str) -> FetchResult:
        """Return cached repositories for a slot, fetching when stale or absent.

        Args:
            language: Language slug
            since: Time window

        Returns:
            FetchResult with the repositories or an error message
        """
        since = getattr(since, "value", since)

        entry = self.cache.get_fresh(language, since)
        if entry is not None:
            _get_logger().debug("Using cached data for %s %s", language, since)
            return FetchResult(language, since, entry.data, from_cache=True)

        _get_logger().debug("Fetching fresh data for %s %s", language, since)
        try:
            repositories = await self.fetch(language, since)
        except NetworkError as e:
            _get_logger().error("Error fetching %s", e)
            return FetchResult(language, since, error=FETCH_ERROR_MESSAGE)

        entry = self.cache.put(language, since, repositories)
        return FetchResult(language, since, entry.data)
