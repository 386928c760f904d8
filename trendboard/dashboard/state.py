"""Dashboard state for the selected languages.

Selecting languages starts one independent fetch per (language, window).
Fetches are not joined, ordered or cancelled; each one writes only its own
slot when it completes. Every fetch is tagged with the selection epoch it
was started under, and results from a superseded selection are dropped.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, Optional

from trendboard.dashboard.client import FETCH_ERROR_MESSAGE, FetchResult, TrendingClient
from trendboard.dashboard.consistency import (
    COLUMN_LIMIT,
    consistency_stats,
    rank_by_consistency,
    score_languages,
)
from trendboard.dashboard.search import count_repositories, filter_languages, total_stars_today
from trendboard.models import Repository, TimeRange
from trendboard.utils.logging_config import get_logger


def _get_logger():
    """Get logger instance lazily to avoid import-time config loading."""
    return get_logger(__name__)


def _per_window(value):
    return {window.value: value for window in TimeRange}


@dataclass
class LanguageData:
    """Listings of one language across the three windows.

    Attributes:
        daily: Repositories trending today
        weekly: Repositories trending this week
        monthly: Repositories trending this month
        loading: Per-window flag, True until that window's fetch completes
        error: Per-window error message, None when the last fetch succeeded
    """

    daily: list[Repository] = field(default_factory=list)
    weekly: list[Repository] = field(default_factory=list)
    monthly: list[Repository] = field(default_factory=list)
    loading: dict[str, bool] = field(default_factory=lambda: _per_window(True))
    error: dict[str, Optional[str]] = field(default_factory=lambda: _per_window(None))

    def windows(self) -> dict[str, list[Repository]]:
        return {window.value: getattr(self, window.value) for window in TimeRange}


@dataclass(frozen=True)
class DashboardMetrics:
    """Summary figures for the header of the dashboard.

    Attributes:
        total_filtered_repos: Repositories left after the search filter
        total_unfiltered_repos: Repositories across the whole selection
        total_stars_today: Stars gained, summed over the filtered listings
        consistency_stats: Tier counts over the unfiltered selection
    """

    total_filtered_repos: int
    total_unfiltered_repos: int
    total_stars_today: int
    consistency_stats: dict[str, int]


class DashboardState:
    """Per-(language, window) slots fed by concurrent fetches.

    Must be driven from a running asyncio event loop.
    """

    def __init__(self, client: TrendingClient):
        self.client = client
        self.languages: tuple[str, ...] = ()
        self.data: dict[str, LanguageData] = {}
        self._epoch = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def epoch(self) -> int:
        """Counter bumped on every language selection."""
        return self._epoch

    def select_languages(self, languages: Iterable[str]) -> list[asyncio.Task]:
        """Replace the selection and start fetching every slot.

        Args:
            languages: Language slugs, duplicates ignored

        Returns:
            The fetch tasks started; callers need not await them
        """
        self._epoch += 1
        self.languages = tuple(dict.fromkeys(languages))
        self.data = {language: LanguageData() for language in self.languages}

        return [
            self._spawn(language, window.value, self._epoch)
            for language in self.languages
            for window in TimeRange
        ]

    def refresh(self, language: str, since: TimeRange | str) -> asyncio.Task:
        """Re-fetch one slot of the current selection (manual retry).

        Raises:
            KeyError: If language is not currently selected
        """
        since = getattr(since, "value", since)
        slots = self.data[language]
        slots.loading[since] = True
        slots.error[since] = None
        return self._spawn(language, since, self._epoch)

    def _spawn(self, language: str, since: str, epoch: int) -> asyncio.Task:
        task = asyncio.create_task(self._load(language, since, epoch))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _load(self, language: str, since: str, epoch: int) -> bool:
        try:
            result = await self.client.get_or_fetch(language, since)
        except Exception as e:
            _get_logger().error("Unexpected error fetching %s %s: %s", language, since, e, exc_info=True)
            result = FetchResult(language, since, error=FETCH_ERROR_MESSAGE)
        return self.apply(result, epoch)

    def apply(self, result: FetchResult, epoch: int) -> bool:
        """Write a fetch result into its slot.

        Args:
            result: Completed fetch
            epoch: Selection epoch the fetch was started under

        Returns:
            False if the result belongs to a superseded selection and was dropped
        """
        if epoch != self._epoch or result.language not in self.data:
            _get_logger().debug(
                "Discarding stale result for %s %s (epoch %d, current %d)",
                result.language,
                result.since,
                epoch,
                self._epoch,
            )
            return False

        slots = self.data[result.language]
        slots.loading[result.since] = False
        if result.ok:
            setattr(slots, result.since, list(result.repositories))
            slots.error[result.since] = None
        else:
            slots.error[result.since] = result.error
        return True

    async def wait(self) -> None:
        """Wait for every fetch currently in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def consistency(self) -> dict[str, dict[str, int]]:
        """Consistency scores for every selected language."""
        return score_languages(self.data)

    def stats(self) -> dict[str, int]:
        """Tier counts across the current selection."""
        return consistency_stats(self.consistency())

    def filtered(self, term: str) -> dict[str, LanguageData]:
        """Search-filtered view of the current data."""
        return filter_languages(self.data, term)

    def ranked(
        self,
        language: str,
        since: TimeRange | str,
        term: str = "",
        limit: int | None = COLUMN_LIMIT,
    ) -> list[tuple[Repository, int]]:
        """One window column: filtered, ordered by consistency, truncated.

        Scores come from the unfiltered data, so filtering never lowers a
        repository's count.

        Raises:
            KeyError: If language is not currently selected
        """
        since = getattr(since, "value", since)
        slots = self.filtered(term)[language]
        scores = self.consistency().get(language, {})
        return rank_by_consistency(getattr(slots, since), scores, limit)

    def metrics(self, term: str = "") -> DashboardMetrics:
        """Header figures for the current selection and search term."""
        filtered = self.filtered(term)
        return DashboardMetrics(
            total_filtered_repos=count_repositories(filtered),
            total_unfiltered_repos=count_repositories(self.data),
            total_stars_today=total_stars_today(filtered),
            consistency_stats=self.stats(),
        )
