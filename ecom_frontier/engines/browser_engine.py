# engines/browser_engine.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

from .base import CrawlRequest, Page
from .page import HtmlPage
from .simple_engine import SimpleCrawlEngine
from ..config import CrawlerConfig
from ..errors import FetchError

logger = logging.getLogger(__name__)


def app_data_dir() -> Path:
    base = os.getenv("LOCALAPPDATA") or str(Path.home() / ".ecom-frontier")
    p = Path(base) / "ecom-frontier"
    p.mkdir(parents=True, exist_ok=True)
    return p


def configure_browsers_path() -> Path:
    path = app_data_dir() / "ms-playwright"
    os.environ.setdefault("PLAYWRIGHT_BROWSERS_PATH", str(path))
    return Path(os.environ["PLAYWRIGHT_BROWSERS_PATH"])


class BrowserCrawlEngine(SimpleCrawlEngine):
    """
    Same worker pool as SimpleCrawlEngine, but pages are rendered by headless
    Chromium so client-side listings are populated before link enumeration.
    """

    def __init__(self, config: CrawlerConfig, *, headless: bool = True) -> None:
        super().__init__(config)
        self.headless = headless
        self._playwright: Optional[Any] = None
        self._browser: Optional[Any] = None
        self._context: Optional[Any] = None

    async def open(self) -> None:
        configure_browsers_path()
        try:
            from playwright.async_api import async_playwright
        except ImportError as exc:  # pragma: no cover - optional dep
            raise RuntimeError(
                "BrowserCrawlEngine needs Playwright: pip install 'ecom-frontier[browser]' "
                "&& playwright install chromium"
            ) from exc
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        self._context = await self._browser.new_context(user_agent=self.config.user_agent)

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def fetch(self, request: CrawlRequest) -> Page:
        assert self._context is not None, "fetch() called outside run()"
        tab = await self._context.new_page()
        try:
            response = await tab.goto(
                request.url,
                wait_until="networkidle",
                timeout=self.config.request_timeout * 1000,
            )
            if response is not None and not response.ok:
                raise FetchError(request.url, RuntimeError(f"HTTP {response.status}"))
            html = await tab.content()
            resolved = tab.url
        except FetchError:
            raise
        except Exception as exc:
            raise FetchError(request.url, exc) from exc
        finally:
            await tab.close()
        return HtmlPage(
            request.url,
            html,
            resolved_url=resolved,
            pagination_selectors=self.config.pagination_selectors,
        )
