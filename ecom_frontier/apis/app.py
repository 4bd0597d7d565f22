from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

try:
    from fastapi import FastAPI, HTTPException
    from pydantic import BaseModel
except ImportError as exc:  # pragma: no cover - optional dependency
    raise RuntimeError(
        "FastAPI not installed. Install with `pip install 'ecom-frontier[api]'` "
        "or avoid using the API server."
    ) from exc

from ..config import CrawlerConfig
from ..errors import ConfigError
from ..engines.base import CrawlReport
from ..runner import build_engine, run_crawl
from ..version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(title="ecom_frontier API", version=__version__)


class CrawlRequestBody(BaseModel):
    start_urls: List[str]
    listing_url_patterns: Optional[List[str]] = None
    detail_url_patterns: Optional[List[str]] = None
    product_card_selectors: Optional[List[str]] = None
    product_link_selectors: Optional[List[str]] = None
    pagination_selectors: Optional[List[str]] = None
    max_pages: Optional[int] = None
    max_concurrency: Optional[int] = None
    engine: Optional[str] = None


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/crawl")
async def crawl(req: CrawlRequestBody) -> Dict[str, Any]:
    try:
        cfg = CrawlerConfig.from_env().with_overrides(
            start_urls=req.start_urls,
            listing_url_patterns=req.listing_url_patterns,
            detail_url_patterns=req.detail_url_patterns,
            product_card_selectors=req.product_card_selectors,
            product_link_selectors=req.product_link_selectors,
            pagination_selectors=req.pagination_selectors,
            max_pages=req.max_pages,
            max_concurrency=req.max_concurrency,
            engine=req.engine,
        )
        cfg.validate()
        engine = build_engine(cfg)
    except ConfigError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    report: CrawlReport = await run_crawl(cfg, engine)
    logger.info("API crawl of %s start URLs returned %s records", len(cfg.start_urls), len(report.records))
    return report.to_dict()
