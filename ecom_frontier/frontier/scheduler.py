from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, Optional

from .budget import PageBudget
from .classifier import UrlClassifier, UrlRole
from .dedup import VisitedSet
from .normalizer import normalize_url
from ..config import CrawlerConfig
from ..engines.base import CrawlEngine, CrawlReport, CrawlRequest, Page
from ..extractors.base import MemorySink, RecordSink
from ..extractors.product_cards import ProductExtractor

logger = logging.getLogger(__name__)

Handler = Callable[[Page], None]


class FrontierScheduler:
    """
    Decides what the engine crawls.

    - Seeds are enqueued as listing pages.
    - Listing pages expand their links: detail-pattern links are enqueued
      for extraction, listing-pattern links (pagination included) are
      enqueued as further listings, everything else is dropped.
    - Detail pages run the product extractor and expand nothing.

    Every enqueue passes normalization, dedup and the page budget, in that
    order. Dedup and budget state belong to this instance only.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        engine: CrawlEngine,
        *,
        sink: Optional[RecordSink] = None,
        classifier: Optional[UrlClassifier] = None,
        extractor: Optional[ProductExtractor] = None,
    ) -> None:
        self.config = config
        self.engine = engine
        self.sink: RecordSink = sink if sink is not None else MemorySink()
        # Patterns compile here, before anything is enqueued.
        self.classifier = classifier or UrlClassifier.from_patterns(
            config.listing_url_patterns, config.detail_url_patterns
        )
        self.extractor = extractor or ProductExtractor(
            config.product_card_selectors, config.product_link_selectors
        )
        self.visited = VisitedSet()
        self.budget = PageBudget(config.max_pages)
        self._stats_lock = threading.Lock()
        self.pages_processed = 0
        self.pages_failed = 0

    # ---- Routing ---------------------------------------------------------

    def route(self, url: Optional[str]) -> UrlRole:
        """Pick the single role a discovered link is enqueued under."""
        if self.classifier.is_detail(url):
            return UrlRole.DETAIL
        if self.classifier.is_listing(url):
            return UrlRole.LISTING
        return UrlRole.UNCLASSIFIED

    def handler_for(self, role: UrlRole) -> Handler:
        if role is UrlRole.LISTING:
            return self.handle_listing
        if role is UrlRole.DETAIL:
            return self.handle_detail
        raise ValueError(f"no handler for role {role!r}")

    # ---- Enqueueing ------------------------------------------------------

    def try_enqueue(self, url: Optional[str], role: UrlRole) -> bool:
        """Claim, then spend budget, then hand ``url`` to the engine."""
        if not url or role is UrlRole.UNCLASSIFIED:
            return False
        if not self.visited.try_claim(url):
            return False
        if not self.budget.try_acquire():
            logger.debug("Page budget reached; dropping %s", url)
            return False
        self.engine.enqueue(url, role)
        return True

    def seed(self, urls: Iterable[str]) -> int:
        urls = list(urls)
        added = 0
        for raw in urls:
            url = normalize_url(raw, raw)
            if url is None:
                logger.warning("Skipping invalid start URL %r", raw)
                continue
            if self.try_enqueue(url, UrlRole.LISTING):
                added += 1
        logger.info("Seeded %s of %s start URLs", added, len(urls))
        return added

    # ---- Handlers --------------------------------------------------------

    def handle_listing(self, page: Page) -> None:
        base = page.resolved_url or page.url
        added = 0
        for link in page.outbound_links():
            if self.budget.exhausted:
                break
            url = normalize_url(link, base)
            if url is None:
                continue
            if self.try_enqueue(url, self.route(url)):
                added += 1
        logger.info("Listing %s: enqueued %s new links", base, added)
        if self.config.extract_listing_cards:
            self._extract(page)

    def handle_detail(self, page: Page) -> None:
        self._extract(page)

    def _extract(self, page: Page) -> None:
        records = self.extractor.extract(page)
        if records:
            self.sink.emit(records)
        logger.info("Extracted %s products from %s", len(records), page.resolved_url or page.url)

    # ---- Engine callbacks ------------------------------------------------

    def on_page(self, request: CrawlRequest, page: Page) -> None:
        with self._stats_lock:
            self.pages_processed += 1
        self.handler_for(request.role)(page)

    def on_failure(self, request: CrawlRequest, exc: BaseException) -> None:
        with self._stats_lock:
            self.pages_failed += 1
        logger.warning("Failed to process %s (%s): %s", request.url, request.role.value, exc)

    # ---- Run -------------------------------------------------------------

    async def run(self) -> CrawlReport:
        self.seed(self.config.start_urls)
        await self.engine.run(self.on_page, self.on_failure)
        return self.report()

    def report(self) -> CrawlReport:
        records = list(getattr(self.sink, "records", []))
        return CrawlReport(
            records=records,
            pages_processed=self.pages_processed,
            pages_failed=self.pages_failed,
            enqueued=self.budget.used,
        )
