"""GitHub Trending scraping: fetch, extract, normalize."""

from trendboard.scraper.extractor import extract_repositories
from trendboard.scraper.fetcher import (
    build_trending_url,
    fetch_trending,
    fetch_trending_response,
    validate_since,
)
from trendboard.scraper.normalizer import extract_stars_today, parse_number

__all__ = [
    "build_trending_url",
    "extract_repositories",
    "extract_stars_today",
    "fetch_trending",
    "fetch_trending_response",
    "parse_number",
    "validate_since",
]
