"""Search filtering of dashboard listings."""

from dataclasses import replace
from typing import Iterable, Mapping, TypeVar

from trendboard.models import Repository, TimeRange

T = TypeVar("T")


def matches(repository: Repository, term: str) -> bool:
    """Case-insensitive substring match on name, description or owner."""
    needle = term.lower()
    return (
        needle in repository.name.lower()
        or needle in repository.description.lower()
        or needle in repository.owner.lower()
    )


def filter_repositories(repositories: Iterable[Repository], term: str) -> list[Repository]:
    """Keep repositories matching the search term, preserving order.

    A blank term keeps everything.
    """
    if not term.strip():
        return list(repositories)
    return [repo for repo in repositories if matches(repo, term)]


def filter_languages(data: Mapping[str, T], term: str) -> dict[str, T]:
    """Apply the search filter to every window of every language.

    Args:
        data: Language to LanguageData
        term: Search term

    Returns:
        A new mapping; loading and error state are carried over unchanged
    """
    if not term.strip():
        return dict(data)

    return {
        language: replace(
            slots,
            **{
                window.value: filter_repositories(getattr(slots, window.value), term)
                for window in TimeRange
            },
        )
        for language, slots in data.items()
    }


def count_repositories(data: Mapping[str, object]) -> int:
    """Total repositories across all languages and windows."""
    return sum(
        len(getattr(slots, window.value))
        for slots in data.values()
        for window in TimeRange
    )


def total_stars_today(data: Mapping[str, object]) -> int:
    """Sum of stars gained across all languages and windows."""
    return sum(
        repo.stars_today
        for slots in data.values()
        for window in TimeRange
        for repo in getattr(slots, window.value)
    )
