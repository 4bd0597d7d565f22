from __future__ import annotations

import csv
from typing import List
from pathlib import Path

from ..extractors.base import ProductRecord


class CSVExporter:
    """
    One row per product card; empty cells where no link was found.
    """

    _headers = ["source_url", "link"]

    def export(self, records: List[ProductRecord], path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            w = csv.writer(f)
            w.writerow(self._headers)
            for record in records:
                w.writerow([record.source_url or "", record.link or ""])
