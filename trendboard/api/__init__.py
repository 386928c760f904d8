"""HTTP boundary exposing the trending scraper."""

from trendboard.api.app import create_app

__all__ = ["create_app"]
