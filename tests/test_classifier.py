import pytest

from ecom_frontier.errors import ConfigError
from ecom_frontier.frontier.classifier import (
    UrlClassifier,
    UrlRole,
    classify_detail,
    classify_listing,
    compile_patterns,
)

from .conftest import AJIO_LISTING


def test_listing_pattern_matches_full_url():
    patterns = compile_patterns([AJIO_LISTING])
    assert classify_listing("https://www.ajio.com/shop/sale/c/123", patterns)
    assert not classify_listing("https://www.ajio.com/shop/sale/c/123/x", patterns)


def test_unanchored_fragment_matches_anywhere():
    patterns = compile_patterns(["/buy/", "products?id="])
    assert classify_detail("https://www.myntra.com/shirts/buy/123", patterns)
    assert classify_detail("https://shop.example.com/productsid=9", patterns)
    assert not classify_detail("https://shop.example.com/cart", patterns)


def test_matching_is_case_sensitive():
    patterns = compile_patterns(["/buy/"])
    assert not classify_detail("https://x.com/BUY/1", patterns)


def test_empty_pattern_set_never_matches():
    assert not classify_listing("https://x.com/c/1", ())
    assert not classify_detail("https://x.com/p/1", compile_patterns([]))


def test_invalid_sentinel_never_matches():
    patterns = compile_patterns([".*"])
    assert not classify_listing(None, patterns)
    assert not classify_detail("", patterns)


def test_invalid_pattern_is_config_error():
    with pytest.raises(ConfigError, match="invalid URL pattern"):
        compile_patterns(["ok", "([unclosed"])


def test_url_may_satisfy_both_sets():
    classifier = UrlClassifier.from_patterns(listing=["/c/"], detail=["/p/"])
    url = "https://www.ajio.com/c/1/p/2"
    assert classifier.is_listing(url)
    assert classifier.is_detail(url)
    assert classifier.roles(url) == (UrlRole.LISTING, UrlRole.DETAIL)


def test_roles_of_unmatched_url():
    classifier = UrlClassifier.from_patterns(listing=["/c/"], detail=["/p/"])
    assert classifier.roles("https://www.ajio.com/help") == (UrlRole.UNCLASSIFIED,)
    assert classifier.roles("https://www.ajio.com/p/9") == (UrlRole.DETAIL,)
