from __future__ import annotations

import argparse
import asyncio
import logging
from typing import List

from ..config import CrawlerConfig
from ..engines.base import CrawlReport
from ..export.base import Exporter
from ..runner import build_engine, run_crawl
from ..utils.logging import setup_logging
from ..utils.loader import load_symbol

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="E-commerce product frontier crawler")
    p.add_argument("urls", nargs="*", help="Start URLs (space-separated)")
    p.add_argument("--config", type=str, help="Path to config JSON", default=None)
    p.add_argument("--max-pages", type=int, default=None, help="Page budget across listing and detail pages")
    p.add_argument("--max-concurrency", type=int, default=None, help="Max concurrency (default from config)")
    p.add_argument("--listing-pattern", action="append", default=None, dest="listing_patterns",
                   help="Regex for listing page URLs (repeatable)")
    p.add_argument("--detail-pattern", action="append", default=None, dest="detail_patterns",
                   help="Regex for product detail URLs (repeatable)")
    p.add_argument("--card-selector", action="append", default=None, dest="card_selectors",
                   help="CSS selector for product cards (repeatable)")
    p.add_argument("--engine", type=str, default=None, help="Engine dotted path (module:ClassName)")
    p.add_argument("--exporter", type=str, default=None, help="Exporter dotted path (module:ClassName)")
    p.add_argument("--output", type=str, default=None, help="Output file path")
    p.add_argument("--log-level", type=str, default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    p.add_argument("--serve", action="store_true", help="Run REST API server instead of CLI crawl")
    p.add_argument("--host", type=str, default="127.0.0.1", help="API host (when --serve)")
    p.add_argument("--port", type=int, default=8000, help="API port (when --serve)")
    return p


def _load_config(args: argparse.Namespace) -> CrawlerConfig:
    if args.config:
        cfg = CrawlerConfig.from_file(args.config)
    else:
        cfg = CrawlerConfig.from_env()

    cfg = cfg.with_overrides(
        start_urls=tuple(args.urls) or None,
        max_pages=args.max_pages,
        max_concurrency=args.max_concurrency,
        listing_url_patterns=args.listing_patterns,
        detail_url_patterns=args.detail_patterns,
        product_card_selectors=args.card_selectors,
        engine=args.engine,
        exporter=args.exporter,
        output_path=args.output,
    )
    cfg.validate()
    return cfg


def run_server(host: str, port: int) -> None:
    try:
        import uvicorn  # type: ignore
    except ImportError as exc:  # pragma: no cover - optional dep
        raise SystemExit("To run the API, install dependencies: pip install 'ecom-frontier[api]'") from exc
    uvicorn.run("ecom_frontier.apis.app:app", host=host, port=port)


def run_cli(argv: List[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.serve:
        run_server(args.host, args.port)
        return 0

    try:
        cfg = _load_config(args)
        exporter_cls = load_symbol(cfg.exporter)
        engine = build_engine(cfg)
    except (ValueError, OSError) as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    report: CrawlReport = asyncio.run(run_crawl(cfg, engine))

    exporter: Exporter = exporter_cls()
    exporter.export(report.records, cfg.output_path)

    logger.info("Pages: %s | Failed: %s | Products: %s | Output: %s",
                report.pages_processed,
                report.pages_failed,
                len(report.records),
                cfg.output_path)
    return 0
