"""Dashboard-side caching, fetch fan-out and derived views."""

from trendboard.dashboard.cache import CacheEntry, TrendingCache
from trendboard.dashboard.client import FetchResult, TrendingClient
from trendboard.dashboard.consistency import (
    TrendTier,
    consistency_stats,
    rank_by_consistency,
    score,
    score_languages,
)
from trendboard.dashboard.search import (
    count_repositories,
    filter_languages,
    filter_repositories,
    total_stars_today,
)
from trendboard.dashboard.state import DashboardMetrics, DashboardState, LanguageData

__all__ = [
    "CacheEntry",
    "DashboardMetrics",
    "DashboardState",
    "FetchResult",
    "LanguageData",
    "TrendTier",
    "TrendingCache",
    "TrendingClient",
    "consistency_stats",
    "count_repositories",
    "filter_languages",
    "filter_repositories",
    "rank_by_consistency",
    "score",
    "score_languages",
    "total_stars_today",
]
