from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Protocol


@dataclass(frozen=True)
class ProductRecord:
    """One product card found on a crawled page."""

    link: Optional[str]
    source_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"link": self.link}
        if self.source_url is not None:
            data["source_url"] = self.source_url
        return data


class RecordSink(Protocol):
    def emit(self, records: Iterable[ProductRecord]) -> None:
        ...


class MemorySink:
    """Collects records in emission order; safe to share across handlers."""

    def __init__(self) -> None:
        self._records: List[ProductRecord] = []
        self._lock = threading.Lock()

    def emit(self, records: Iterable[ProductRecord]) -> None:
        batch = list(records)
        with self._lock:
            self._records.extend(batch)

    @property
    def records(self) -> List[ProductRecord]:
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
