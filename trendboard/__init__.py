"""Scrape GitHub Trending and serve it to a cross-window dashboard."""

__version__ = "0.1.0"
