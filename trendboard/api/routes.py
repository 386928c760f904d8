"""Trending API endpoints."""

from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from trendboard.errors import ValidationError
from trendboard.models import TrendingResponse
from trendboard.scraper.fetcher import fetch_trending_response, validate_language, validate_since
from trendboard.utils.config import Settings, get_settings
from trendboard.utils.logging_config import get_logger

TrendingFetch = Callable[[str, str], Awaitable[TrendingResponse]]

router = APIRouter(tags=["trending"])


def _get_logger():
    """Get logger instance lazily to avoid import-time config loading."""
    return get_logger(__name__)


def get_fetcher() -> TrendingFetch:
    """Dependency returning the coroutine used to scrape GitHub."""
    return fetch_trending_response


def _error(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "details": details})


@router.get("/trending")
@router.get("/api/trending", include_in_schema=False)
async def get_trending(
    language: Optional[str] = Query(default=None),
    since: Optional[str] = Query(default=None),
    fetch: TrendingFetch = Depends(get_fetcher),
    settings: Settings = Depends(get_settings),
):
    """
    Scrape the GitHub Trending page for a language and time window.

    - **language**: Language slug, defaults to DEFAULT_LANGUAGE
    - **since**: daily, weekly or monthly, defaults to DEFAULT_SINCE
    """
    language = language or settings.DEFAULT_LANGUAGE
    since = since or settings.DEFAULT_SINCE

    try:
        validate_since(since)
        validate_language(language)
    except ValidationError as e:
        return _error(400, f"Invalid {e.field} parameter", e.message)

    try:
        response = await fetch(language, since)
    except Exception as e:
        _get_logger().error("API error for %s/%s: %s", language, since, e, exc_info=True)
        return _error(500, "Failed to fetch trending repositories", str(e) or "Unknown error")

    return JSONResponse(
        content=response.model_dump(mode="json", by_alias=True),
        headers={"Cache-Control": f"public, max-age={settings.RESPONSE_CACHE_MAX_AGE}"},
    )


@router.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}
