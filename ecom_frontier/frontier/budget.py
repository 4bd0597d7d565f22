from __future__ import annotations

import threading


class PageBudget:
    """
    Caps the number of pages enqueued (and therefore fetched) in one run.
    Once saturated it stays saturated.
    """

    def __init__(self, max_pages: int) -> None:
        if max_pages < 0:
            raise ValueError("max_pages must be >= 0")
        self.max_pages = max_pages
        self._used = 0
        self._lock = threading.Lock()

    def try_acquire(self) -> bool:
        """Reserve one page slot; False once the budget is spent."""
        with self._lock:
            if self._used >= self.max_pages:
                return False
            self._used += 1
            return True

    @property
    def used(self) -> int:
        with self._lock:
            return self._used

    @property
    def remaining(self) -> int:
        with self._lock:
            return self.max_pages - self._used

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0
