#!/usr/bin/env python3
"""Script to fetch repositories and write the landing and browser pages."""

import argparse
import logging
import sys
import os
from dataclasses import replace
from pathlib import Path

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.application.controllers import LandingPageController, RepositoryBrowserController
from src.infrastructure.github_client import GitHubRestClient
from src.infrastructure.page import Page, render_document
from src.infrastructure.scheduler import Scheduler
from src.infrastructure.settings import SiteSettings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

LANDING_ELEMENTS = (
    "loadingOverlay",
    "loaderProgress",
    "loaderLog",
    "loaderStatus",
    "terminalFeed",
    "projectGrid",
)

BROWSER_ELEMENTS = (
    "loadingOverlay",
    "loaderProgress",
    "languageFilter",
    "sortOrder",
    "searchInput",
    "repoGrid",
)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build the portfolio pages from a GitHub account.")
    parser.add_argument("--out-dir", default="site", help="Directory the HTML pages are written to")
    parser.add_argument("--user", help="GitHub account (overrides GITHUB_USER)")
    parser.add_argument("--query", default="", help="Initial search text for the repository browser")
    parser.add_argument("--language", default="all", help="Initial language filter")
    parser.add_argument("--sort", choices=["stars", "updated"], default="updated", help="Initial sort order")
    return parser.parse_args(argv)


def build_landing(client: GitHubRestClient, settings: SiteSettings) -> str:
    """Run the landing page until its timers settle and return the document."""
    page = Page.with_elements(LANDING_ELEMENTS)
    scheduler = Scheduler()
    controller = LandingPageController(page, client, settings, scheduler)
    controller.start()
    scheduler.run_until_idle()
    controller.stop()
    return render_document(page, f"{settings.github_user} · projects", ("terminalFeed", "projectGrid"))


def build_browser(client: GitHubRestClient, settings: SiteSettings, args) -> str:
    """Run the repository browser with the requested selection and return the document."""
    page = Page.with_elements(BROWSER_ELEMENTS)
    page.element("searchInput").value = args.query
    page.element("languageFilter").value = args.language
    page.element("sortOrder").value = args.sort

    scheduler = Scheduler()
    controller = RepositoryBrowserController(page, client, settings, scheduler)
    controller.start()
    scheduler.run_until_idle()
    controller.stop()
    return render_document(page, f"{settings.github_user} · repositories", ("languageFilter", "repoGrid"))


def main(argv=None):
    """Fetch repositories and write index.html and projects.html."""
    try:
        args = parse_args(argv)
        settings = SiteSettings.from_env()
        if args.user:
            settings = replace(settings, github_user=args.user)

        client = GitHubRestClient(api_url=settings.api_url, timeout=settings.timeout_seconds)

        out_dir = Path(args.out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        landing_path = out_dir / "index.html"
        landing_path.write_text(build_landing(client, settings), encoding="utf-8")
        logger.info(f"Wrote {landing_path}")

        browser_path = out_dir / "projects.html"
        browser_path.write_text(build_browser(client, settings, args), encoding="utf-8")
        logger.info(f"Wrote {browser_path}")
        return 0

    except Exception as e:
        logger.error(f"Site build failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
