"""In-memory cache of trending results keyed by (language, time window).

Entries go stale after the TTL and are overwritten on the next fetch for
that key; nothing is purged proactively. There is no locking: the last
writer for a key wins.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from trendboard.models import Repository

DEFAULT_TTL = timedelta(minutes=15)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current UTC instant."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    """Repositories fetched for one key, with the instant they were stored."""

    data: tuple[Repository, ...]
    timestamp: datetime


class TrendingCache:
    """TTL cache with an injectable clock.

    Usage:
        cache = TrendingCache(ttl=timedelta(minutes=15))
        cache.put("python", "daily", repositories)
        entry = cache.get("python", "daily")
        if entry and cache.is_fresh(entry):
            ...
    """

    def __init__(self, ttl: timedelta = DEFAULT_TTL, clock: Clock = utc_now):
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[tuple[str, str], CacheEntry] = {}

    @staticmethod
    def key(language: str, since: str) -> tuple[str, str]:
        """Normalize a (language, window) pair so TimeRange members and strings share a key."""
        return (language, str(getattr(since, "value", since)))

    def get(self, language: str, since: str) -> Optional[CacheEntry]:
        """Return the entry for a key, fresh or stale, or None."""
        return self._entries.get(self.key(language, since))

    def put(self, language: str, since: str, data: Iterable[Repository]) -> CacheEntry:
        """Store data for a key stamped with the current instant."""
        entry = CacheEntry(data=tuple(data), timestamp=self._clock())
        self._entries[self.key(language, since)] = entry
        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        """True while less than the TTL has elapsed since the entry was stored."""
        return self._clock() - entry.timestamp < self.ttl

    def get_fresh(self, language: str, since: str) -> Optional[CacheEntry]:
        """Return the entry for a key only if it is still fresh."""
        entry = self.get(language, since)
        if entry is not None and self.is_fresh(entry):
            return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self.key(*key) in self._entries
