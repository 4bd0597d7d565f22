from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Sequence

from .base import ProductRecord
from ..frontier.normalizer import normalize_url

if TYPE_CHECKING:
    from ..engines.base import Page

logger = logging.getLogger(__name__)


class ProductExtractor:
    """
    Pulls one record per product card out of a rendered page.
    A card that fails to yield a link produces a record with ``link=None``;
    it never fails the rest of the page.
    """

    def __init__(self, card_selectors: Sequence[str], link_selectors: Sequence[str] = ()) -> None:
        self.card_selectors = tuple(card_selectors)
        self.link_selectors = tuple(link_selectors)

    def extract(self, page: "Page") -> List[ProductRecord]:
        if not self.card_selectors:
            return []
        base = page.resolved_url or page.url
        records: List[ProductRecord] = []
        for card in page.query_product_cards(self.card_selectors):
            try:
                href = page.first_anchor_href(card, self.link_selectors)
                link = normalize_url(href, base) if href else None
            except Exception as exc:  # one bad card must not sink the page
                logger.debug("Card extraction failed on %s: %r", base, exc)
                link = None
            records.append(ProductRecord(link=link, source_url=base))
        return records
