"""Domain entities for GitHub repositories."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

NO_DESCRIPTION = "No description provided."
MULTI_LANGUAGE = "multi-lang"


def parse_timestamp(value: str) -> datetime:
    """
    Parse a GitHub ISO-8601 timestamp (``Z`` suffix accepted).

    Timestamps without an offset are taken as UTC so every parsed value is
    timezone-aware and comparable.

    Raises:
        ValueError: If value is not an ISO-8601 timestamp
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""

    name: str
    html_url: str
    updated_at: datetime
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues: int = 0
    watchers_count: int = 0
    fork: bool = False

    @property
    def display_description(self) -> str:
        """Description shown on cards, with a fallback for absent descriptions."""
        if self.description is None:
            return NO_DESCRIPTION
        return self.description

    @property
    def language_label(self) -> str:
        """Normalized language used for display and for the language filter."""
        if self.language is None:
            return MULTI_LANGUAGE
        return self.language

    @property
    def updated_date(self) -> str:
        """Calendar day of the last update (YYYY-MM-DD)."""
        return self.updated_at.date().isoformat()

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Repository":
        """
        Build a repository from one record of the GitHub REST listing.

        Args:
            payload: Decoded JSON object for a single repository

        Returns:
            Repository entity

        Raises:
            ValueError: If a required field is missing, empty or of the wrong type
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Repository record must be an object, got {type(payload).__name__}")

        for key in ("name", "html_url", "updated_at"):
            if key not in payload:
                raise ValueError(f"Repository record is missing field '{key}'")

        name = _require_str(payload, "name")
        if not name:
            raise ValueError("Repository record has an empty name")

        return cls(
            name=name,
            html_url=_require_str(payload, "html_url"),
            updated_at=parse_timestamp(_require_str(payload, "updated_at")),
            description=_optional_str(payload, "description"),
            language=_optional_str(payload, "language"),
            stargazers_count=_count(payload, "stargazers_count"),
            forks_count=_count(payload, "forks_count"),
            open_issues=_count(payload, "open_issues"),
            watchers_count=_count(payload, "watchers_count"),
            fork=_flag(payload, "fork"),
        )


def _require_str(payload: Dict[str, Any], key: str) -> str:
    value = payload[key]
    if not isinstance(value, str):
        raise ValueError(f"Repository field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Repository field '{key}' must be a string or null, got {type(value).__name__}")
    return value


def _count(payload: Dict[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Repository field '{key}' must be a non-negative integer, got {value!r}")
    return value


def _flag(payload: Dict[str, Any], key: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"Repository field '{key}' must be a boolean, got {value!r}")
    return value
