"""GitHub Trending HTML extraction.

Turns a trending listing page into Repository records in three steps:
parse the document, iterate the entry nodes, and read each field with a
CSS selector query. The selectors below are the only place that knows
GitHub's markup.
"""

from typing import Final
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from trendboard.errors import EntryParseError
from trendboard.models import MAX_CONTRIBUTORS, Contributor, Repository
from trendboard.scraper.normalizer import extract_stars_today, parse_number
from trendboard.utils.logging_config import get_logger, log_context

DEFAULT_BASE_URL: Final = "https://github.com"
DEFAULT_CONTRIBUTOR_LIMIT: Final = MAX_CONTRIBUTORS

ENTRY_SELECTOR: Final = "article.Box-row"
REPO_LINK_SELECTORS: Final = ("h2.h3 a", "h2 a")
DESCRIPTION_SELECTOR: Final = "p.col-9"
LANGUAGE_SELECTOR: Final = 'span[itemprop="programmingLanguage"]'
STARS_SELECTOR: Final = 'a[href*="/stargazers"]'
FORKS_SELECTOR: Final = 'a[href*="/forks"]'
STARS_TODAY_SELECTOR: Final = ".float-sm-right"
CONTRIBUTOR_SELECTOR: Final = 'a[data-hovercard-type="user"] img.avatar'


def _get_logger():
    """Get logger instance lazily to avoid import-time config loading."""
    return get_logger(__name__)


def _text(node: Tag | None) -> str:
    return node.get_text().strip() if node is not None else ""


def parse_document(html: str) -> BeautifulSoup:
    """Parse a trending page into a queryable document."""
    return BeautifulSoup(html, "html.parser")


def iter_entries(document: BeautifulSoup) -> list[Tag]:
    """Return the repository entry nodes in document order."""
    return document.select(ENTRY_SELECTOR)


def parse_repo_path(href: str) -> tuple[str, str]:
    """Split a repository link into (owner, name).

    Accepts "/owner/name" as well as absolute URLs. Missing parts come back
    as empty strings.
    """
    parts = urlparse(href.strip()).path.strip("/").split("/")
    owner = parts[0] if parts else ""
    name = parts[1] if len(parts) > 1 else ""
    return owner, name


def extract_contributors(
    entry: Tag,
    base_url: str = DEFAULT_BASE_URL,
    limit: int = DEFAULT_CONTRIBUTOR_LIMIT,
) -> list[Contributor]:
    """Read the "Built by" avatars of one entry.

    Args:
        entry: Entry node
        base_url: Origin that relative profile links are resolved against
        limit: Maximum number of contributors kept, never more than
            MAX_CONTRIBUTORS

    Returns:
        Contributors with both a username and an avatar, in page order
    """
    contributors = []
    for img in entry.select(CONTRIBUTOR_SELECTOR):
        username = (img.get("alt") or "").strip().removeprefix("@")
        avatar = (img.get("src") or "").split("?", 1)[0]
        if not username or not avatar:
            continue

        link = img.find_parent("a")
        href = (link.get("href") or "") if link is not None else ""
        contributors.append(
            Contributor(username=username, avatar=avatar, url=urljoin(base_url, href))
        )

    return contributors[:min(limit, MAX_CONTRIBUTORS)]


def extract_entry(
    entry: Tag,
    language: str,
    base_url: str = DEFAULT_BASE_URL,
    contributor_limit: int = DEFAULT_CONTRIBUTOR_LIMIT,
) -> Repository | None:
    """Extract one repository from an entry node.

    Args:
        entry: Entry node
        language: Queried language, used when the entry has no language tag
        base_url: Origin used to build absolute URLs
        contributor_limit: Maximum number of contributors kept

    Returns:
        The repository, or None when the entry has no usable owner/name
    """
    link = None
    for selector in REPO_LINK_SELECTORS:
        link = entry.select_one(selector)
        if link is not None:
            break
    href = (link.get("href") or "") if link is not None else ""
    if not href:
        return None

    owner, name = parse_repo_path(href)
    if not owner or not name:
        return None

    stars_today_text = " ".join(node.get_text() for node in entry.select(STARS_TODAY_SELECTOR))

    return Repository(
        owner=owner,
        name=name,
        description=_text(entry.select_one(DESCRIPTION_SELECTOR)),
        url=urljoin(base_url, href),
        language=_text(entry.select_one(LANGUAGE_SELECTOR)) or language,
        stars=parse_number(_text(entry.select_one(STARS_SELECTOR))),
        forks=parse_number(_text(entry.select_one(FORKS_SELECTOR))),
        stars_today=extract_stars_today(stars_today_text),
        built_by=extract_contributors(entry, base_url, contributor_limit),
    )


def extract_repositories(
    html: str,
    language: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    contributor_limit: int = DEFAULT_CONTRIBUTOR_LIMIT,
) -> list[Repository]:
    """Extract all repositories from a trending page.

    A failure inside one entry is logged and that entry dropped; the rest
    of the page is still extracted.

    Args:
        html: Trending page body
        language: Queried language, the fallback for untagged entries
        base_url: Origin used to build absolute URLs
        contributor_limit: Maximum contributors per repository

    Returns:
        Repositories in document order
    """
    entries = iter_entries(parse_document(html))
    repositories: list[Repository] = []
    skipped = 0
    failures: list[EntryParseError] = []

    for index, entry in enumerate(entries):
        try:
            repository = extract_entry(entry, language, base_url, contributor_limit)
        except Exception as e:
            error = EntryParseError(str(e), index=index, language=language)
            _get_logger().warning(
                "Error parsing repository %s",
                error,
                extra=log_context(language=language, index=index),
            )
            failures.append(error)
            continue

        if repository is None:
            skipped += 1
            continue
        repositories.append(repository)

    _get_logger().debug(
        "Extracted %d of %d entries (%d skipped, %d failed)",
        len(repositories),
        len(entries),
        skipped,
        len(failures),
        extra=log_context(
            language=language,
            found=len(entries),
            kept=len(repositories),
            skipped=skipped,
            failed=len(failures),
        ),
    )
    return repositories
