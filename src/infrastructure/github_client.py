"""GitHub REST API client for listing a user's public repositories."""

import logging
from typing import Any, Dict, List, Optional

import requests

from src.domain.repository import Repository
from src.infrastructure.settings import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class RepositoryFetchError(Exception):
    """Raised when the repository listing cannot be retrieved or parsed."""
    pass


class GitHubRestClient:
    """Client for the GitHub REST repository listing.

    Makes a single best-effort request per call: there is no retry and no
    caching, and failures surface as RepositoryFetchError.
    """

    def __init__(self, api_url: str = DEFAULT_API_URL, timeout: int = DEFAULT_TIMEOUT_SECONDS):
        """
        Initialize GitHub REST client.

        Args:
            api_url: Base URL of the REST API
            timeout: Request timeout in seconds
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
        }

    def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        try:
            response = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {url} failed: {e}")
            raise RepositoryFetchError(f"Network error: {e}") from e

        if response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0":
            logger.warning("GitHub rate limit reached")
            raise RepositoryFetchError("GitHub rate limit reached")

        if not 200 <= response.status_code < 300:
            logger.warning(f"GitHub API responded with status {response.status_code} for {url}")
            raise RepositoryFetchError(f"GitHub API responded with status {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise RepositoryFetchError("GitHub API returned a malformed body") from e

    def list_user_repositories(
        self,
        username: str,
        per_page: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> List[Repository]:
        """
        Fetch the public repositories of a user.

        Args:
            username: GitHub account name
            per_page: Page size (the API default applies when None, max 100)
            sort: Sort hint passed to the API (e.g., "updated")

        Returns:
            Repositories in the order returned by the API (may be empty)

        Raises:
            RepositoryFetchError: On transport failure, non-success status or malformed body
        """
        url = f"{self.api_url}/users/{username}/repos"
        params: Dict[str, Any] = {}
        if per_page is not None:
            params["per_page"] = min(per_page, 100)
        if sort is not None:
            params["sort"] = sort

        data = self._get_json(url, params)
        if not isinstance(data, list):
            raise RepositoryFetchError("GitHub API returned a malformed body: expected a list")

        try:
            repositories = [Repository.from_api(record) for record in data]
        except (ValueError, TypeError) as e:
            raise RepositoryFetchError(f"GitHub API returned a malformed record: {e}") from e

        logger.info(f"Fetched {len(repositories)} repositories for {username}")
        return repositories
