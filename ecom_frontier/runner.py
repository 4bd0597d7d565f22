from __future__ import annotations

import logging

from .config import CrawlerConfig
from .engines.base import CrawlEngine, CrawlReport
from .frontier.scheduler import FrontierScheduler
from .utils.loader import load_symbol

logger = logging.getLogger(__name__)


def build_engine(cfg: CrawlerConfig) -> CrawlEngine:
    # Dynamic engine loading so upgrades don't require code edits.
    engine_cls = load_symbol(cfg.engine)
    return engine_cls(cfg)


async def run_crawl(cfg: CrawlerConfig, engine: CrawlEngine | None = None) -> CrawlReport:
    """Validate ``cfg``, crawl until the frontier is exhausted, return the report."""
    cfg.validate()
    logger.debug("Crawl config: %s", cfg.to_dict())
    scheduler = FrontierScheduler(cfg, engine or build_engine(cfg))
    report = await scheduler.run()
    logger.info(
        "Crawl finished: %s pages processed, %s failed, %s records",
        report.pages_processed,
        report.pages_failed,
        len(report.records),
    )
    return report
