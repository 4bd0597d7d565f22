import json

import pytest

from ecom_frontier.config import CrawlerConfig, migrate_config
from ecom_frontier.errors import ConfigError
from ecom_frontier.version import CONFIG_SCHEMA_VERSION


def test_defaults():
    cfg = CrawlerConfig(start_urls=["https://www.ajio.com/"])
    assert cfg.max_pages == 1000
    assert cfg.max_concurrency == 10
    assert cfg.start_urls == ("https://www.ajio.com/",)
    assert cfg.schema_version == CONFIG_SCHEMA_VERSION


def test_config_is_immutable():
    cfg = CrawlerConfig(start_urls=["https://a.com/"])
    with pytest.raises(AttributeError):
        cfg.max_pages = 5


def test_with_overrides_skips_none():
    cfg = CrawlerConfig(start_urls=["https://a.com/"], max_pages=10)
    new = cfg.with_overrides(max_pages=None, max_concurrency=3, listing_url_patterns=["/c/"])
    assert new.max_pages == 10
    assert new.max_concurrency == 3
    assert new.listing_url_patterns == ("/c/",)
    assert cfg.max_concurrency == 10


def test_from_file_accepts_camel_case_keys(tmp_path):
    path = tmp_path / "crawler.json"
    path.write_text(json.dumps({
        "startUrls": ["https://www.ajio.com/"],
        "productListingUrlPatterns": ["^https://www.ajio.com/.*/c/[0-9]+$"],
        "productUrlPatterns": ["/buy/", "/p/"],
        "productCardSelectors": [".product-base"],
        "productLinkSelectors": [".product-card a"],
        "paginationSelectors": [".pagination a"],
        "maxPages": 100,
    }), encoding="utf-8")
    cfg = CrawlerConfig.from_file(path)
    assert cfg.start_urls == ("https://www.ajio.com/",)
    assert cfg.detail_url_patterns == ("/buy/", "/p/")
    assert cfg.product_card_selectors == (".product-base",)
    assert cfg.max_pages == 100


def test_unknown_keys_rejected():
    with pytest.raises(ConfigError, match="unknown configuration keys"):
        CrawlerConfig.from_dict({"start_urls": ["https://a.com/"], "max_depth": 3})


def test_migrate_stamps_schema_version():
    assert migrate_config({})["schema_version"] == CONFIG_SCHEMA_VERSION


def test_from_env(monkeypatch):
    monkeypatch.setenv("CRAWLER_START_URLS", "https://a.com/, https://b.com/")
    monkeypatch.setenv("CRAWLER_LISTING_PATTERNS", "/c/")
    monkeypatch.setenv("CRAWLER_MAX_PAGES", "7")
    cfg = CrawlerConfig.from_env()
    assert cfg.start_urls == ("https://a.com/", "https://b.com/")
    assert cfg.listing_url_patterns == ("/c/",)
    assert cfg.max_pages == 7


def test_from_env_bad_number(monkeypatch):
    monkeypatch.setenv("CRAWLER_MAX_PAGES", "lots")
    with pytest.raises(ConfigError):
        CrawlerConfig.from_env()


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"start_urls": []}, "start_urls"),
        ({"max_pages": -1}, "max_pages"),
        ({"max_concurrency": 0}, "max_concurrency"),
        ({"listing_url_patterns": ["[oops"]}, "invalid URL pattern"),
        ({"detail_url_patterns": ["(?P<"]}, "invalid URL pattern"),
    ],
)
def test_validate_fails_fast(tmp_path, kwargs, message):
    kwargs.setdefault("start_urls", ["https://a.com/"])
    cfg = CrawlerConfig(output_path=str(tmp_path / "o.json"), **kwargs)
    with pytest.raises(ConfigError, match=message):
        cfg.validate()


def test_validate_creates_output_dir(tmp_path):
    out = tmp_path / "nested" / "dir" / "products.json"
    CrawlerConfig(start_urls=["https://a.com/"], output_path=str(out), max_pages=0).validate()
    assert out.parent.is_dir()


@pytest.mark.parametrize("field", ["pagination_selectors", "product_card_selectors", "product_link_selectors"])
def test_validate_rejects_malformed_selector(tmp_path, field):
    cfg = CrawlerConfig(start_urls=["https://a.com/"], output_path=str(tmp_path / "o.json"), **{field: ["li.item", "a["]})
    with pytest.raises(ConfigError, match=r"invalid CSS selector 'a\['"):
        cfg.validate()


def test_validate_accepts_well_formed_selectors(tmp_path):
    CrawlerConfig(
        start_urls=["https://a.com/"],
        output_path=str(tmp_path / "o.json"),
        product_card_selectors=[".product-base", "li.rilrtl-products-list__item"],
        product_link_selectors=['a[href*="/p/"]'],
        pagination_selectors=["link[rel=next]", ".pagination a"],
    ).validate()


def test_string_max_pages_is_config_error(tmp_path):
    cfg = CrawlerConfig.from_dict({"startUrls": ["https://a.com/"], "maxPages": "10", "output_path": str(tmp_path / "o.json")})
    with pytest.raises(ConfigError, match="max_pages must be an integer"):
        cfg.validate()


def test_non_list_sequence_value_is_config_error():
    with pytest.raises(ConfigError, match="invalid configuration value"):
        CrawlerConfig.from_dict({"start_urls": 5})
