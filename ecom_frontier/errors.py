from __future__ import annotations


class CrawlerError(Exception):
    """Base class for errors raised by the crawler."""


class ConfigError(CrawlerError, ValueError):
    """Invalid configuration, surfaced before any crawling starts."""


class FetchError(CrawlerError):
    """A page could not be fetched or rendered by the engine."""

    def __init__(self, url: str, cause: BaseException | None = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"failed to fetch {url}: {cause!r}")
