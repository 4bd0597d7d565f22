from __future__ import annotations

import asyncio
import logging
from typing import Optional

from aiohttp import ClientSession

from .base import CrawlEngine, CrawlRequest, FailureCallback, Page, PageCallback
from .page import HtmlPage
from ..config import CrawlerConfig
from ..frontier.classifier import UrlRole
from ..utils.http import create_session, fetch_text

logger = logging.getLogger(__name__)


class SimpleCrawlEngine(CrawlEngine):
    """
    A pragmatic async engine.
    - Engine owns HTTP, queueing and the worker pool.
    - The frontier decides what gets enqueued, via the callbacks.
    - Concurrency capped by the number of workers.
    """

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config
        self._queue: Optional[asyncio.Queue[CrawlRequest]] = None
        self._pending: list[CrawlRequest] = []
        self._session: Optional[ClientSession] = None

    def enqueue(self, url: str, role: UrlRole) -> None:
        request = CrawlRequest(url=url, role=role)
        if self._queue is None:
            # Seeds arrive before run() creates the queue on the running loop.
            self._pending.append(request)
        else:
            self._queue.put_nowait(request)

    async def fetch(self, request: CrawlRequest) -> Page:
        assert self._session is not None, "fetch() called outside run()"
        cfg = self.config
        result = await fetch_text(
            self._session,
            request.url,
            timeout=cfg.request_timeout,
            user_agent=cfg.user_agent,
            retries=cfg.retries,
        )
        return HtmlPage(
            request.url,
            result.text,
            resolved_url=result.resolved_url,
            pagination_selectors=cfg.pagination_selectors,
        )

    async def open(self) -> None:
        self._session = create_session()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def run(self, on_page: PageCallback, on_failure: FailureCallback) -> int:
        queue: asyncio.Queue[CrawlRequest] = asyncio.Queue()
        for request in self._pending:
            queue.put_nowait(request)
        self._pending.clear()
        self._queue = queue
        processed = 0

        async def worker() -> None:
            nonlocal processed
            while True:
                request = await queue.get()
                try:
                    try:
                        page = await self.fetch(request)
                    except Exception as exc:  # broad catch to keep crawler moving
                        try:
                            on_failure(request, exc)
                        except Exception:
                            logger.exception("Failure callback failed on %s", request.url)
                        continue
                    processed += 1
                    try:
                        on_page(request, page)
                    except Exception:
                        logger.exception("Handler failed on %s", request.url)
                finally:
                    queue.task_done()

        await self.open()
        workers = [asyncio.create_task(worker()) for _ in range(self.config.max_concurrency)]
        try:
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            self._queue = None
            await self.close()
        logger.debug("Engine drained queue after %s pages", processed)
        return processed
