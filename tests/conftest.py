"""Shared pytest fixtures."""

import shutil
from pathlib import Path

import pytest

from trendboard.utils.config import reset_settings
from trendboard.utils.logging_config import reset_logging


@pytest.fixture(scope="session", autouse=True)
def backup_env_file():
    """Backup .env file during test session to prevent pollution."""
    env_file = Path(".env")
    backup_file = Path(".env.test_backup")

    if env_file.exists():
        shutil.copy(env_file, backup_file)
        env_file.unlink()

    yield

    if backup_file.exists():
        shutil.move(backup_file, env_file)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so each test sees its own environment."""
    reset_settings()
    yield
    reset_settings()


def make_entry(
    owner: str = "octo",
    name: str = "widget",
    description: str = "A widget",
    language: str | None = "Python",
    stars: str = "1,234",
    forks: str = "56",
    stars_today: str = "78 stars today",
    contributors: list[str] | None = None,
) -> str:
    """Render one trending entry in GitHub's markup."""
    href = f"/{owner}/{name}" if owner or name else ""
    language_html = (
        f'<span class="d-inline-block ml-0 mr-3">'
        f'<span itemprop="programmingLanguage">{language}</span></span>'
        if language
        else ""
    )
    avatars = "".join(
        f'<a class="d-inline-block" data-hovercard-type="user" '
        f'data-hovercard-url="/users/{user}/hovercard" href="/{user}">'
        f'<img class="avatar mb-1 avatar-user" src="https://avatars.githubusercontent.com/u/{i}?s=40&amp;v=4" '
        f'width="20" height="20" alt="@{user}" /></a>'
        for i, user in enumerate(contributors if contributors is not None else ["alice", "bob"])
    )
    return f"""
    <article class="Box-row">
      <div class="float-right d-flex"><a href="/login?return_to=%2F{owner}%2F{name}">Star</a></div>
      <h2 class="h3 lh-condensed">
        <a data-view-component="true" href="{href}" class="Link">
          <span class="text-normal">{owner} /</span> {name}
        </a>
      </h2>
      <p class="col-9 color-fg-muted my-1 pr-4">
        {description}
      </p>
      <div class="f6 color-fg-muted mt-2">
        {language_html}
        <a href="/{owner}/{name}/stargazers" class="Link d-inline-block mr-3">
          <svg class="octicon octicon-star"></svg>
          {stars}
        </a>
        <a href="/{owner}/{name}/forks" class="Link d-inline-block mr-3">
          <svg class="octicon octicon-repo-forked"></svg>
          {forks}
        </a>
        <span class="d-inline-block mr-3">
          Built by
          {avatars}
        </span>
        <span class="d-inline-block float-sm-right">
          <svg class="octicon octicon-star"></svg>
          {stars_today}
        </span>
      </div>
    </article>
    """


def make_page(*entries: str) -> str:
    """Wrap entries in a trending page body."""
    return f"""
    <html>
      <body>
        <div data-hpc>
          {''.join(entries)}
        </div>
      </body>
    </html>
    """


@pytest.fixture
def entry_html():
    """Factory rendering a single trending entry."""
    return make_entry


@pytest.fixture
def page_html():
    """Factory wrapping entries into a trending page."""
    return make_page
