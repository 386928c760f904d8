"""Languages offered by the dashboard's language selector."""

from dataclasses import dataclass
from typing import Final

from trendboard.models import TimeRange
from trendboard.scraper.fetcher import build_trending_url


@dataclass(frozen=True)
class Language:
    """A selectable language.

    Attributes:
        display_name: Label shown to users
        value: Slug used in trending URLs
    """

    display_name: str
    value: str


SUPPORTED_LANGUAGES: Final[tuple[Language, ...]] = (
    Language("JavaScript", "javascript"),
    Language("Python", "python"),
    Language("TypeScript", "typescript"),
    Language("Java", "java"),
    Language("C#", "c#"),
    Language("C++", "c++"),
    Language("C", "c"),
    Language("PHP", "php"),
    Language("Go", "go"),
    Language("Rust", "rust"),
    Language("Ruby", "ruby"),
    Language("Swift", "swift"),
    Language("Kotlin", "kotlin"),
    Language("Scala", "scala"),
    Language("Dart", "dart"),
    Language("R", "r"),
    Language("MATLAB", "matlab"),
    Language("Objective-C", "objective-c"),
    Language("Shell", "shell"),
    Language("PowerShell", "powershell"),
    Language("Perl", "perl"),
    Language("Lua", "lua"),
    Language("Haskell", "haskell"),
    Language("Clojure", "clojure"),
    Language("Elixir", "elixir"),
)

_BY_VALUE: Final = {language.value: language for language in SUPPORTED_LANGUAGES}


def get_language_info(value: str) -> Language:
    """Look up a language by slug, falling back to the slug as its name."""
    return _BY_VALUE.get(value, Language(display_name=value, value=value))


def get_trending_url(language: str, since: TimeRange | str) -> str:
    """Public GitHub Trending URL for a language column."""
    return build_trending_url(language, since)
