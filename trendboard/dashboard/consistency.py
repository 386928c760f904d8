"""Cross-window consistency scoring.

A repository that trends today, this week and this month is a stronger
signal than one seen in a single listing. The score is the number of
windows (1-3) a repository appears in for one language, matched by its
owner/name key.
"""

from enum import IntEnum
from typing import Iterable, Mapping

from trendboard.models import Repository, TimeRange

# Entries shown per window column
COLUMN_LIMIT = 15


class TrendTier(IntEnum):
    """Display tier derived from a consistency score."""

    NORMAL = 1
    TRENDING = 2
    SUPER_TRENDING = 3


def _keys(repositories: Iterable[Repository]) -> set[str]:
    return {repo.key for repo in repositories}


def score(windows: Mapping[TimeRange | str, Iterable[Repository]]) -> dict[str, int]:
    """Count in how many time windows each repository appears.

    Args:
        windows: Repositories per window (daily, weekly, monthly). Missing
            windows count as empty.

    Returns:
        Mapping of "owner/name" to a count between 1 and 3
    """
    by_window = {getattr(window, "value", window): repos for window, repos in windows.items()}
    window_keys = [_keys(by_window.get(window.value, ())) for window in TimeRange]

    all_keys = set().union(*window_keys)
    return {key: sum(key in keys for keys in window_keys) for key in all_keys}


def score_languages(data: Mapping[str, object]) -> dict[str, dict[str, int]]:
    """Score every language of a dashboard.

    Args:
        data: Language to an object exposing daily, weekly and monthly
            repository sequences (LanguageData)

    Returns:
        Language to its consistency mapping
    """
    return {
        language: score({window: getattr(slots, window.value) for window in TimeRange})
        for language, slots in data.items()
    }


def tier_for(count: int) -> TrendTier:
    """Tier for a consistency count; anything below 2 is normal."""
    if count >= 3:
        return TrendTier.SUPER_TRENDING
    if count == 2:
        return TrendTier.TRENDING
    return TrendTier.NORMAL


def consistency_stats(scores: Mapping[str, Mapping[str, int]]) -> dict[str, int]:
    """Tally tiers across all languages."""
    stats = {"super_trending": 0, "trending": 0, "normal": 0}
    for language_scores in scores.values():
        for count in language_scores.values():
            stats[tier_for(count).name.lower()] += 1
    return stats


def rank_by_consistency(
    repositories: Iterable[Repository],
    scores: Mapping[str, int],
    limit: int | None = COLUMN_LIMIT,
) -> list[tuple[Repository, int]]:
    """Order one listing for display, most consistent first.

    Repositories without a score count as 1. Ties keep listing order.

    Args:
        repositories: One window's listing, in page order
        scores: The language's consistency mapping
        limit: Maximum entries returned, None for all

    Returns:
        (repository, count) pairs
    """
    ranked = sorted(
        ((repo, scores.get(repo.key, 1)) for repo in repositories),
        key=lambda pair: pair[1],
        reverse=True,
    )
    return ranked if limit is None else ranked[:limit]
