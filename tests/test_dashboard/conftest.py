"""Fixtures for dashboard tests."""

from datetime import datetime, timedelta, timezone

import pytest

from trendboard.models import Repository


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_repo():
    """Factory for repositories keyed by owner/name."""

    def _make(key: str, description: str = "", **fields) -> Repository:
        owner, name = key.split("/")
        return Repository(
            owner=owner,
            name=name,
            description=description,
            url=f"https://github.com/{key}",
            **fields,
        )

    return _make
