"""Page controllers for the landing page and the repository browser.

Each controller owns its page state and reacts to discrete messages: a
settled fetch or a change of one of the browser's selection inputs. Timer
ticks reach the boot loader through the scheduler. All rendering goes
through the pure functions in catalog and rendering, so output depends only
on the fetched repositories and the current selection.
"""

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from src.application.boot_sequence import BROWSER_LOADER, LANDING_LOADER, BootLoader, TerminalFeed
from src.application.catalog import apply_selection, curated_selection, language_options
from src.application.rendering import (
    BROWSER_FETCH_ERROR,
    LANDING_FETCH_ERROR,
    render_curated_grid,
    render_language_options,
    render_message,
    render_repository_grid,
)
from src.domain.repository import Repository
from src.domain.selection import ALL_LANGUAGES, FilterSelection
from src.infrastructure.github_client import GitHubRestClient, RepositoryFetchError
from src.infrastructure.page import Page
from src.infrastructure.scheduler import Scheduler
from src.infrastructure.settings import BROWSER_PAGE_SIZE, SiteSettings

logger = logging.getLogger(__name__)

SEARCH_INPUT = "searchInput"
LANGUAGE_FILTER = "languageFilter"
SORT_ORDER = "sortOrder"


@dataclass(frozen=True)
class FetchSettled:
    """The repository fetch finished, with either repositories or an error reason."""

    repositories: Tuple[Repository, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class SelectionChanged:
    """One of the browser inputs changed value."""

    element_id: str
    value: str


Message = Union[FetchSettled, SelectionChanged]


class PageController(ABC):
    """Shared lifecycle: start() at page init, stop() at page unload."""

    def __init__(
        self,
        page: Page,
        client: GitHubRestClient,
        settings: Optional[SiteSettings] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        self.page = page
        self.client = client
        self.settings = settings or SiteSettings()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()
        self.active = False

    def start(self):
        self.active = True
        self.load()

    def stop(self):
        self.active = False

    @abstractmethod
    def fetch(self) -> List[Repository]:
        """Retrieve the repositories this page shows."""

    def load(self):
        """Fetch once and deliver the outcome as a FetchSettled message."""
        try:
            repositories = self.fetch()
        except RepositoryFetchError as e:
            self.dispatch(FetchSettled(error=str(e)))
            return
        self.dispatch(FetchSettled(repositories=tuple(repositories)))

    def dispatch(self, message: Message):
        if not self.active:
            logger.debug(f"Discarding {type(message).__name__} for inactive page")
            return
        self.handle(message)

    @abstractmethod
    def handle(self, message: Message):
        """Apply one message to the page state."""


class LandingPageController(PageController):
    """Boot loader, terminal feed and the curated highlight grid."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.terminal = TerminalFeed(self.page, self.scheduler)
        self.loader = BootLoader(
            self.page,
            self.scheduler,
            LANDING_LOADER,
            rng=self.rng,
            on_finished=self.terminal.start,
        )

    def start(self):
        self.loader.start()
        super().start()

    def stop(self):
        super().stop()
        self.loader.stop()
        self.terminal.stop()

    def fetch(self) -> List[Repository]:
        return self.client.list_user_repositories(self.settings.github_user, sort="updated")

    def handle(self, message: Message):
        if not isinstance(message, FetchSettled):
            raise TypeError(f"Landing page cannot handle {type(message).__name__}")

        grid = self.page.element("projectGrid")
        if grid is None:
            return

        if message.error is not None:
            logger.warning(f"Landing page fetch failed: {message.error}")
            grid.html = render_message(LANDING_FETCH_ERROR.format(reason=message.error))
            return

        grid.html = render_curated_grid(curated_selection(message.repositories))


class RepositoryBrowserController(PageController):
    """Full repository list with language, search and sort controls."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.loader = BootLoader(self.page, self.scheduler, BROWSER_LOADER, rng=self.rng)
        self.repos: Tuple[Repository, ...] = ()
        self.available_languages: List[str] = []
        self.selection = FilterSelection()

    def start(self):
        self.selection = self._read_selection()
        self.loader.start()
        super().start()

    def stop(self):
        super().stop()
        self.loader.stop()

    def fetch(self) -> List[Repository]:
        return self.client.list_user_repositories(self.settings.github_user, per_page=BROWSER_PAGE_SIZE)

    def _read_selection(self) -> FilterSelection:
        """Selection from the current input values; missing inputs keep their defaults."""
        selection = FilterSelection()
        search = self.page.element(SEARCH_INPUT)
        if search is not None:
            selection = selection.with_query(search.value)
        language = self.page.element(LANGUAGE_FILTER)
        if language is not None:
            selection = selection.with_language(language.value)
        sort_order = self.page.element(SORT_ORDER)
        if sort_order is not None and sort_order.value:
            selection = selection.with_sort_key(sort_order.value)
        return selection

    @property
    def visible(self):
        return apply_selection(self.repos, self.selection)

    def handle(self, message: Message):
        if isinstance(message, FetchSettled):
            self._on_fetch_settled(message)
        elif isinstance(message, SelectionChanged):
            self._on_selection_changed(message)
        else:
            raise TypeError(f"Repository browser cannot handle {type(message).__name__}")

    def _on_fetch_settled(self, message: FetchSettled):
        if message.error is not None:
            logger.warning(f"Repository browser fetch failed: {message.error}")
            grid = self.page.element("repoGrid")
            if grid is not None:
                grid.html = render_message(BROWSER_FETCH_ERROR.format(reason=message.error))
            return

        self.repos = message.repositories
        self._populate_language_filter()
        self.render()

    def _populate_language_filter(self):
        options = language_options(self.repos)
        self.available_languages = [value for value, _ in options[1:]]

        # Rebuilding the options keeps a still-offered language selected, otherwise falls back to "all".
        if self.selection.language not in self.available_languages:
            self.selection = self.selection.with_language(ALL_LANGUAGES)

        selector = self.page.element(LANGUAGE_FILTER)
        if selector is None:
            return
        selector.html = render_language_options(options)
        selector.value = self.selection.language

    def _on_selection_changed(self, message: SelectionChanged):
        element = self.page.element(message.element_id)
        if element is not None:
            element.value = message.value

        if message.element_id == SEARCH_INPUT:
            self.selection = self.selection.with_query(message.value)
        elif message.element_id == LANGUAGE_FILTER:
            self.selection = self.selection.with_language(message.value)
        elif message.element_id == SORT_ORDER:
            self.selection = self.selection.with_sort_key(message.value)
        else:
            logger.debug(f"Ignoring change of unknown input {message.element_id}")
            return
        self.render()

    def render(self):
        """Rebuild the repository grid from the fetched list and current selection."""
        grid = self.page.element("repoGrid")
        if grid is None:
            return
        grid.html = render_repository_grid(self.visible)
