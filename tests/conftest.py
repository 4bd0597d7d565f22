from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from ecom_frontier.config import CrawlerConfig
from ecom_frontier.engines.base import CrawlEngine, CrawlRequest
from ecom_frontier.engines.page import HtmlPage
from ecom_frontier.engines.simple_engine import SimpleCrawlEngine
from ecom_frontier.errors import FetchError
from ecom_frontier.frontier.classifier import UrlRole

AJIO_LISTING = r"^https://www.ajio.com/.*/c/[0-9]+$"


class FakePage:
    """Page stand-in: links and cards are given directly."""

    def __init__(self, url: str, links: Sequence[str] = (), cards: Sequence[Any] = (),
                 resolved_url: Optional[str] = None) -> None:
        self.url = url
        self.resolved_url = resolved_url or url
        self._links = list(links)
        self._cards = list(cards)

    def outbound_links(self) -> List[str]:
        return list(self._links)

    def query_product_cards(self, selectors: Sequence[str]) -> List[Any]:
        return list(self._cards)

    def first_anchor_href(self, element: Any, selectors: Sequence[str] = ()) -> Optional[str]:
        if isinstance(element, Exception):
            raise element
        return element


class RecordingEngine(CrawlEngine):
    """Collects enqueue calls; run() is a no-op."""

    def __init__(self, config: Optional[CrawlerConfig] = None) -> None:
        self.enqueued: List[Tuple[str, UrlRole]] = []

    def enqueue(self, url: str, role: UrlRole) -> None:
        self.enqueued.append((url, role))

    async def run(self, on_page, on_failure) -> int:
        return 0

    @property
    def urls(self) -> List[str]:
        return [u for u, _ in self.enqueued]


class SiteEngine(SimpleCrawlEngine):
    """SimpleCrawlEngine serving HTML from a dict instead of the network."""

    def __init__(self, config: CrawlerConfig, site: Dict[str, str]) -> None:
        super().__init__(config)
        self.site = site
        self.fetched: List[str] = []

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def fetch(self, request: CrawlRequest) -> HtmlPage:
        self.fetched.append(request.url)
        if request.url not in self.site:
            raise FetchError(request.url, RuntimeError("HTTP 404"))
        return HtmlPage(request.url, self.site[request.url],
                        pagination_selectors=self.config.pagination_selectors)


@pytest.fixture
def make_config(tmp_path):
    def _make(**kwargs: Any) -> CrawlerConfig:
        kwargs.setdefault("start_urls", ("https://www.ajio.com/",))
        kwargs.setdefault("listing_url_patterns", (AJIO_LISTING,))
        kwargs.setdefault("output_path", str(tmp_path / "out" / "products.json"))
        return CrawlerConfig(**kwargs)
    return _make
