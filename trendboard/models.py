"""Trending data records.

Python attributes are snake_case; the JSON wire format uses the camelCase
names the dashboard consumes (starsToday, builtBy, lastUpdated).
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

# GitHub shows at most five "Built by" avatars per entry
MAX_CONTRIBUTORS = 5


class TimeRange(str, Enum):
    """Period over which GitHub measures trending activity.

    Attributes:
        DAILY: Trending today
        WEEKLY: Trending this week
        MONTHLY: Trending this month
    """

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Contributor(_Record):
    """A user shown in an entry's "Built by" avatars.

    Attributes:
        username: GitHub login, without the leading "@"
        avatar: Avatar image URL with the query string removed
        url: Absolute profile URL
    """

    username: str = Field(min_length=1)
    avatar: str = Field(min_length=1)
    url: str


class Repository(_Record):
    """One entry of a trending listing.

    Attributes:
        owner: Account owning the repository
        name: Repository name
        description: Repository description, empty when absent
        url: Absolute repository URL
        language: Language tag of the entry, or the queried language
        stars: Total stargazers
        forks: Total forks
        stars_today: Stars gained within the listing's time window
        built_by: Up to five contributors, in page order
    """

    owner: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    url: str
    language: str = ""
    stars: int = Field(default=0, ge=0)
    forks: int = Field(default=0, ge=0)
    stars_today: int = Field(default=0, ge=0)
    built_by: list[Contributor] = Field(default_factory=list, max_length=MAX_CONTRIBUTORS)

    @property
    def key(self) -> str:
        """Identity key shared by the same repository across listings."""
        return f"{self.owner}/{self.name}"


class TrendingResponse(_Record):
    """Payload served by the trending endpoint."""

    repositories: list[Repository] = Field(default_factory=list)
    language: str
    since: TimeRange
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_serializer("last_updated", when_used="json")
    def serialize_datetime(self, value: datetime) -> str:
        """Serialize the timestamp as an ISO-8601 string."""
        return value.isoformat()
