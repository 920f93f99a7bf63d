"""Filter and sort selection for the repository browser."""

from dataclasses import dataclass, replace
from enum import Enum

ALL_LANGUAGES = "all"


class SortKey(str, Enum):
    """Orderings offered by the sort selector."""

    STARS = "stars"
    UPDATED = "updated"

    @classmethod
    def parse(cls, value: str) -> "SortKey":
        """Map a selector value to a sort key; anything unknown sorts by recency."""
        try:
            return cls(value)
        except ValueError:
            return cls.UPDATED


@dataclass(frozen=True)
class FilterSelection:
    """Current state of the search box, language selector and sort selector."""

    query: str = ""
    language: str = ALL_LANGUAGES
    sort_key: SortKey = SortKey.UPDATED

    def with_query(self, query: str) -> "FilterSelection":
        return replace(self, query=query)

    def with_language(self, language: str) -> "FilterSelection":
        return replace(self, language=language or ALL_LANGUAGES)

    def with_sort_key(self, sort_key: str) -> "FilterSelection":
        return replace(self, sort_key=SortKey.parse(sort_key))
