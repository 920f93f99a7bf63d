"""Site settings read from environment variables."""

import os
from dataclasses import dataclass

DEFAULT_GITHUB_USER = "SaifDemos"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30

# Browser page asks for a full page of results; the landing page relies on the API default.
BROWSER_PAGE_SIZE = 100
CURATED_LIMIT = 4


@dataclass(frozen=True)
class SiteSettings:
    """Settings shared by both page controllers."""

    github_user: str = DEFAULT_GITHUB_USER
    api_url: str = DEFAULT_API_URL
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "SiteSettings":
        """
        Build settings from environment variables.

        Reads GITHUB_USER, GITHUB_API_URL and GITHUB_TIMEOUT_SECONDS, falling
        back to the defaults for anything unset.

        Raises:
            ValueError: If GITHUB_TIMEOUT_SECONDS is not a positive integer
        """
        raw_timeout = os.getenv("GITHUB_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        try:
            timeout_seconds = int(raw_timeout)
        except ValueError:
            raise ValueError(f"GITHUB_TIMEOUT_SECONDS must be an integer, got {raw_timeout!r}")
        if timeout_seconds <= 0:
            raise ValueError(f"GITHUB_TIMEOUT_SECONDS must be positive, got {timeout_seconds}")

        return cls(
            github_user=os.getenv("GITHUB_USER", DEFAULT_GITHUB_USER),
            api_url=os.getenv("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout_seconds=timeout_seconds,
        )
