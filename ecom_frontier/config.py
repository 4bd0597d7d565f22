from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Iterable, Optional, Tuple
from pathlib import Path
import os
import json

from .errors import ConfigError
from .version import __version__, CONFIG_SCHEMA_VERSION

DEFAULT_ENGINE = "ecom_frontier.engines.simple_engine:SimpleCrawlEngine"
DEFAULT_EXPORTER = "ecom_frontier.export.json_exporter:JSONExporter"

_SEQUENCE_FIELDS = (
    "start_urls",
    "listing_url_patterns",
    "detail_url_patterns",
    "product_card_selectors",
    "product_link_selectors",
    "pagination_selectors",
)

# Keys used by older JSON configs (camelCase) mapped to current field names.
_LEGACY_KEYS = {
    "startUrls": "start_urls",
    "productListingUrlPatterns": "listing_url_patterns",
    "listingUrlPatterns": "listing_url_patterns",
    "productUrlPatterns": "detail_url_patterns",
    "detailUrlPatterns": "detail_url_patterns",
    "productCardSelectors": "product_card_selectors",
    "productLinkSelectors": "product_link_selectors",
    "paginationSelectors": "pagination_selectors",
    "maxPages": "max_pages",
    "maxConcurrency": "max_concurrency",
}


@dataclass(frozen=True)
class CrawlerConfig:
    """
    Canonical, immutable configuration object passed throughout the system.
    Selector fields are opaque strings handed to the engine; patterns are
    regular expressions compiled once by the frontier.
    """
    schema_version: int = CONFIG_SCHEMA_VERSION
    start_urls: Tuple[str, ...] = ()
    listing_url_patterns: Tuple[str, ...] = ()
    detail_url_patterns: Tuple[str, ...] = ()
    product_card_selectors: Tuple[str, ...] = ()
    product_link_selectors: Tuple[str, ...] = ()
    pagination_selectors: Tuple[str, ...] = ()
    max_pages: int = 1000
    # Also run card extraction on listing pages (product cards live there).
    extract_listing_cards: bool = True
    max_concurrency: int = 10
    request_timeout: float = 15.0
    retries: int = 2
    user_agent: str = f"ecom_frontier/{__version__}"
    # Dotted paths for engine/exporter to allow runtime swapping without code changes.
    engine: str = DEFAULT_ENGINE
    exporter: str = DEFAULT_EXPORTER
    output_path: str = "output/products.json"

    def __post_init__(self) -> None:
        for name in _SEQUENCE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                value = [value]
            object.__setattr__(self, name, tuple(value or ()))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for name in _SEQUENCE_FIELDS:
            data[name] = list(data[name])
        return data

    def with_overrides(self, **overrides: Any) -> "CrawlerConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    # ---------- Loaders ----------

    @classmethod
    def from_env(cls) -> "CrawlerConfig":
        """
        Build config from environment variables (all optional).
        """
        def _get(name: str, default: str) -> str:
            return os.getenv(name, default)

        def _list(name: str) -> Tuple[str, ...]:
            return tuple(split_csv(_get(name, "")))

        try:
            return cls(
                start_urls=_list("CRAWLER_START_URLS"),
                listing_url_patterns=_list("CRAWLER_LISTING_PATTERNS"),
                detail_url_patterns=_list("CRAWLER_DETAIL_PATTERNS"),
                product_card_selectors=_list("CRAWLER_CARD_SELECTORS"),
                product_link_selectors=_list("CRAWLER_LINK_SELECTORS"),
                pagination_selectors=_list("CRAWLER_PAGINATION_SELECTORS"),
                max_pages=int(_get("CRAWLER_MAX_PAGES", "1000")),
                max_concurrency=int(_get("CRAWLER_MAX_CONCURRENCY", "10")),
                request_timeout=float(_get("CRAWLER_REQUEST_TIMEOUT", "15.0")),
                retries=int(_get("CRAWLER_RETRIES", "2")),
                user_agent=_get("CRAWLER_USER_AGENT", f"ecom_frontier/{__version__}"),
                engine=_get("CRAWLER_ENGINE", DEFAULT_ENGINE),
                exporter=_get("CRAWLER_EXPORTER", DEFAULT_EXPORTER),
                output_path=_get("CRAWLER_OUTPUT_PATH", "output/products.json"),
            )
        except ValueError as exc:
            raise ConfigError(f"invalid numeric CRAWLER_* variable: {exc}") from exc

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> "CrawlerConfig":
        """
        Load configuration from a JSON file. Supports schema migration and the
        camelCase keys of older configs.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CrawlerConfig":
        data = migrate_config(dict(raw))
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
        try:
            return cls(**data)
        except TypeError as exc:
            raise ConfigError(f"invalid configuration value: {exc}") from exc

    # ---------- Validation ----------

    def validate(self) -> None:
        # Local import: the frontier package imports this module.
        from .frontier.classifier import compile_patterns
        from .utils.parsing import compile_selectors

        for name in ("max_pages", "max_concurrency", "retries"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if not isinstance(self.request_timeout, (int, float)) or isinstance(self.request_timeout, bool):
            raise ConfigError(f"request_timeout must be a number, got {self.request_timeout!r}")

        if not self.start_urls:
            raise ConfigError("start_urls cannot be empty; provide at least one URL.")
        if self.max_pages < 0:
            raise ConfigError("max_pages must be >= 0")
        if self.max_concurrency <= 0:
            raise ConfigError("max_concurrency must be > 0")
        if self.retries < 0:
            raise ConfigError("retries must be >= 0")
        compile_patterns(self.listing_url_patterns)
        compile_patterns(self.detail_url_patterns)
        compile_selectors(self.product_card_selectors)
        compile_selectors(self.product_link_selectors)
        compile_selectors(self.pagination_selectors)
        # Validate output path parent exists or is creatable
        parent = Path(self.output_path).parent
        parent.mkdir(parents=True, exist_ok=True)


def migrate_config(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Migrate config dict to the latest schema version.
    Keep this pure and additive. Add migrations here as you bump schema.
    """
    for old, new in _LEGACY_KEYS.items():
        if old in raw:
            value = raw.pop(old)
            raw.setdefault(new, value)

    # Ensure a schema_version is present
    raw.setdefault("schema_version", CONFIG_SCHEMA_VERSION)
    return raw


def split_csv(value: Optional[str]) -> Iterable[str]:
    if not value:
        return ()
    return tuple(v.strip() for v in value.split(",") if v.strip())
