"""Markup for repository cards, selector options and inline messages."""

import html
from typing import Sequence, Tuple

from src.application.catalog import CuratedSelection
from src.domain.repository import Repository

NOTHING_TO_DISPLAY = "No repositories to display (yet!)."
NO_MATCHES = "No repositories matched."
LANDING_FETCH_ERROR = "Unable to pull GitHub data: {reason}"
BROWSER_FETCH_ERROR = "Unable to load repositories: {reason}"


def _escape(value) -> str:
    return html.escape(str(value), quote=True)


def render_message(text: str) -> str:
    return f"<p class='muted'>{_escape(text)}</p>"


def render_project_card(repo: Repository) -> str:
    """Landing page highlight card."""
    return f"""
        <article class="project-card">
          <h3>{_escape(repo.name)}</h3>
          <p>{_escape(repo.display_description)}</p>
          <div class="project-meta">
            <span>{_escape(repo.language_label)}</span>
            <span>★ {repo.stargazers_count}</span>
          </div>
          <a class="pill pill-ghost" href="{_escape(repo.html_url)}" target="_blank" rel="noreferrer">
            View Repo ↗
          </a>
        </article>
      """


def render_curated_grid(selection: CuratedSelection) -> str:
    if selection.is_empty:
        return render_message(NOTHING_TO_DISPLAY)
    return "".join(render_project_card(repo) for repo in selection.repositories)


def render_repository_card(repo: Repository) -> str:
    """Repository browser card with tags and stats."""
    return f"""
      <article class="repo-card">
        <header>
          <h3>{_escape(repo.name)}</h3>
          <a class="pill pill-ghost" href="{_escape(repo.html_url)}" target="_blank" rel="noreferrer">↗</a>
        </header>
        <p>{_escape(repo.display_description)}</p>
        <div class="repo-tags">
          <span>{_escape(repo.language_label)}</span>
          <span>★ {repo.stargazers_count}</span>
          <span>⟳ {repo.updated_date}</span>
        </div>
        <div class="repo-stats">
          <span>Issues: {repo.open_issues}</span>
          <span>Forks: {repo.forks_count}</span>
          <span>Watchers: {repo.watchers_count}</span>
        </div>
      </article>
    """


def render_repository_grid(repos: Sequence[Repository]) -> str:
    """Rebuild the whole browser grid; an empty list renders the no-matches placeholder."""
    if not repos:
        return render_message(NO_MATCHES)
    return "".join(render_repository_card(repo) for repo in repos)


def render_language_options(options: Sequence[Tuple[str, str]]) -> str:
    return "".join(
        f'<option value="{_escape(value)}">{_escape(label)}</option>' for value, label in options
    )
