"""Pure transformations over fetched repository lists.

Curated selection for the landing page, the filter/sort pipeline of the
repository browser and the language facet. Every function returns new
sequences and leaves its input untouched; sorts are stable so records with
equal keys keep their fetch order.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from src.domain.repository import Repository
from src.domain.selection import ALL_LANGUAGES, FilterSelection, SortKey
from src.infrastructure.settings import CURATED_LIMIT

ALL_LANGUAGES_LABEL = "All languages"


@dataclass(frozen=True)
class CuratedSelection:
    """Highlight set for the landing page."""

    repositories: Tuple[Repository, ...]

    @property
    def is_empty(self) -> bool:
        return not self.repositories


def curated_selection(repos: Sequence[Repository], limit: int = CURATED_LIMIT) -> CuratedSelection:
    """
    Reduce a fetched collection to the landing page highlight set.

    Args:
        repos: Repositories in fetch order
        limit: Maximum number of highlights

    Returns:
        Up to ``limit`` non-fork repositories, most starred first
    """
    originals = [repo for repo in repos if not repo.fork]
    ranked = sorted(originals, key=lambda repo: repo.stargazers_count, reverse=True)
    return CuratedSelection(repositories=tuple(ranked[:limit]))


def filter_by_language(repos: Sequence[Repository], language: str) -> List[Repository]:
    if language == ALL_LANGUAGES:
        return list(repos)
    return [repo for repo in repos if repo.language_label == language]


def filter_by_query(repos: Sequence[Repository], query: str) -> List[Repository]:
    """Keep repositories whose name or description contains query, ignoring case."""
    needle = query.lower()
    if not needle:
        return list(repos)
    return [
        repo
        for repo in repos
        if needle in repo.name.lower() or needle in (repo.description or "").lower()
    ]


def sort_repositories(repos: Sequence[Repository], sort_key: SortKey) -> List[Repository]:
    if sort_key == SortKey.STARS:
        return sorted(repos, key=lambda repo: repo.stargazers_count, reverse=True)
    return sorted(repos, key=lambda repo: repo.updated_at, reverse=True)


def apply_selection(repos: Sequence[Repository], selection: FilterSelection) -> List[Repository]:
    """
    Run the browser pipeline: language filter, then text search, then sort.

    Args:
        repos: Repositories in fetch order
        selection: Current filter and sort selection

    Returns:
        Visible repositories in display order
    """
    visible = filter_by_language(repos, selection.language)
    visible = filter_by_query(visible, selection.query)
    return sort_repositories(visible, selection.sort_key)


def language_facets(repos: Sequence[Repository]) -> List[str]:
    """Distinct languages present in repos, sorted case-sensitively."""
    return sorted({repo.language for repo in repos if repo.language})


def language_options(repos: Sequence[Repository]) -> List[Tuple[str, str]]:
    """(value, label) pairs for the language selector, led by the "all" sentinel."""
    options = [(ALL_LANGUAGES, ALL_LANGUAGES_LABEL)]
    options.extend((language, language) for language in language_facets(repos))
    return options
