from __future__ import annotations

import threading
from typing import Optional, Set


class VisitedSet:
    """
    URLs already enqueued during one crawl run. Grow-only: nothing is ever
    evicted, so a claimed URL is never scheduled again in the same run.
    """

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._lock = threading.Lock()

    def try_claim(self, url: Optional[str]) -> bool:
        """Return True if ``url`` was not seen before, and mark it seen."""
        if not url:
            return False
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
