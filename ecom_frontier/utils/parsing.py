from __future__ import annotations

from typing import List, Optional, Sequence

import soupsieve
from bs4 import BeautifulSoup, Tag

from ..errors import ConfigError


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def compile_selectors(selectors: Sequence[str]) -> None:
    """Raise ConfigError for the first selector soupsieve cannot parse."""
    for selector in selectors:
        if not isinstance(selector, str):
            raise ConfigError(f"invalid CSS selector {selector!r}: not a string")
        if not selector.strip():
            continue
        try:
            soupsieve.compile(selector)
        except soupsieve.SelectorSyntaxError as exc:
            raise ConfigError(f"invalid CSS selector {selector!r}: {exc}") from exc


def _selector_list(selectors: Sequence[str]) -> str:
    # A selector list keeps matches in document order, without duplicates.
    return ", ".join(s.strip() for s in selectors if s and s.strip())


def extract_links(soup: BeautifulSoup, extra_selectors: Sequence[str] = ()) -> List[str]:
    """
    Raw href values of every ``a[href]`` plus any element matched by
    ``extra_selectors`` (pagination controls), in document order.
    Resolution against the page URL is left to the frontier.
    """
    selector = _selector_list(("a[href]", *extra_selectors))
    out: List[str] = []
    for node in soup.select(selector):
        href = node.get("href")
        if isinstance(href, str) and href.strip():
            out.append(href)
    return out


def select_all(soup: BeautifulSoup, selectors: Sequence[str]) -> List[Tag]:
    selector = _selector_list(selectors)
    if not selector:
        return []
    return soup.select(selector)


def first_anchor_href(element: Tag, selectors: Sequence[str] = ()) -> Optional[str]:
    """
    Href of the first anchor inside ``element`` matching ``selectors``,
    falling back to any ``a[href]`` (or the element itself when it is one).
    """
    candidates = [s for s in selectors if s and s.strip()]
    for selector in (*candidates, "a[href]"):
        node = element.select_one(selector)
        if node is not None and node.get("href"):
            return node.get("href")
    if element.name == "a" and element.get("href"):
        return element.get("href")
    return None
