from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Pattern, Tuple

from ..errors import ConfigError


class UrlRole(str, Enum):
    """Role of a URL in the crawl; doubles as the handler label of a request."""

    LISTING = "listing"
    DETAIL = "detail"
    UNCLASSIFIED = "unclassified"


def compile_patterns(patterns: Iterable[str]) -> Tuple[Pattern[str], ...]:
    """
    Compile configured URL patterns once. A bad pattern is a configuration
    error, never a per-URL failure.
    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except (re.error, TypeError) as exc:
            raise ConfigError(f"invalid URL pattern {pattern!r}: {exc}") from exc
    return tuple(compiled)


def _matches_any(url: Optional[str], patterns: Iterable[Pattern[str]]) -> bool:
    if not url:
        return False
    return any(p.search(url) for p in patterns)


def classify_listing(url: Optional[str], patterns: Iterable[Pattern[str]]) -> bool:
    return _matches_any(url, patterns)


def classify_detail(url: Optional[str], patterns: Iterable[Pattern[str]]) -> bool:
    return _matches_any(url, patterns)


@dataclass(frozen=True)
class UrlClassifier:
    """
    Both compiled pattern sets for one run. Reports membership in each set
    independently; choosing between them is the scheduler's job.
    """
    listing: Tuple[Pattern[str], ...] = ()
    detail: Tuple[Pattern[str], ...] = ()

    @classmethod
    def from_patterns(cls, listing: Iterable[str], detail: Iterable[str]) -> "UrlClassifier":
        return cls(listing=compile_patterns(listing), detail=compile_patterns(detail))

    def is_listing(self, url: Optional[str]) -> bool:
        return classify_listing(url, self.listing)

    def is_detail(self, url: Optional[str]) -> bool:
        return classify_detail(url, self.detail)

    def roles(self, url: Optional[str]) -> Tuple[UrlRole, ...]:
        """Every role the URL satisfies, or ``(UNCLASSIFIED,)``."""
        found = tuple(
            role
            for role, hit in ((UrlRole.LISTING, self.is_listing(url)), (UrlRole.DETAIL, self.is_detail(url)))
            if hit
        )
        return found or (UrlRole.UNCLASSIFIED,)
