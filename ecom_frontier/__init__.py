"""Targeted e-commerce crawler: frontier, URL classification and product extraction."""

from .version import __version__
from .config import CrawlerConfig
from .errors import ConfigError, CrawlerError, FetchError

__all__ = ["__version__", "CrawlerConfig", "ConfigError", "CrawlerError", "FetchError"]
