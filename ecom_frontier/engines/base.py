from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol, Sequence
from abc import ABC, abstractmethod

from ..extractors.base import ProductRecord
from ..frontier.classifier import UrlRole


@dataclass(frozen=True)
class CrawlRequest:
    url: str
    role: UrlRole


class Page(Protocol):
    """
    A fetched (and possibly rendered) page as seen by the frontier.
    Engines own the DOM; the frontier only uses these primitives.
    """

    url: str
    resolved_url: str

    def outbound_links(self) -> List[str]:
        """Raw href values of the page's links, in document order."""
        ...

    def query_product_cards(self, selectors: Sequence[str]) -> Sequence[Any]:
        """Elements matching any of ``selectors``, in document order."""
        ...

    def first_anchor_href(self, element: Any, selectors: Sequence[str] = ()) -> Optional[str]:
        """Raw href of the first matching anchor inside ``element``."""
        ...


PageCallback = Callable[[CrawlRequest, Page], None]
FailureCallback = Callable[[CrawlRequest, BaseException], None]


@dataclass
class CrawlReport:
    records: List[ProductRecord] = field(default_factory=list)
    pages_processed: int = 0
    pages_failed: int = 0
    enqueued: int = 0

    def to_dict(self) -> dict:
        return {
            "pages_processed": self.pages_processed,
            "pages_failed": self.pages_failed,
            "enqueued": self.enqueued,
            "records": [r.to_dict() for r in self.records],
        }


class CrawlEngine(ABC):
    """
    Abstract engine interface. Implementations own fetching, rendering and
    the worker pool; the frontier decides what gets enqueued.
    """

    @abstractmethod
    def enqueue(self, url: str, role: UrlRole) -> None:  # pragma: no cover - interface
        ...

    @abstractmethod
    async def run(self, on_page: PageCallback, on_failure: FailureCallback) -> int:  # pragma: no cover - interface
        """Process queued requests until none remain; return pages processed."""
        ...
