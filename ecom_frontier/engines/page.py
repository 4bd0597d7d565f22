from __future__ import annotations

from typing import Any, List, Optional, Sequence

from bs4 import BeautifulSoup

from ..utils.parsing import extract_links, first_anchor_href, parse_html, select_all


class HtmlPage:
    """A fetched page backed by BeautifulSoup."""

    def __init__(
        self,
        url: str,
        html: str,
        *,
        resolved_url: Optional[str] = None,
        pagination_selectors: Sequence[str] = (),
    ) -> None:
        self.url = url
        self.resolved_url = resolved_url or url
        self.html = html
        self.pagination_selectors = tuple(pagination_selectors)
        self._soup: Optional[BeautifulSoup] = None

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = parse_html(self.html)
        return self._soup

    def outbound_links(self) -> List[str]:
        return extract_links(self.soup, self.pagination_selectors)

    def query_product_cards(self, selectors: Sequence[str]) -> List[Any]:
        return select_all(self.soup, selectors)

    def first_anchor_href(self, element: Any, selectors: Sequence[str] = ()) -> Optional[str]:
        return first_anchor_href(element, selectors)
