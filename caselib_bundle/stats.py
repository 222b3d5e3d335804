"""Bundle statistics shown before export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models.document import AnnexItem

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


@dataclass(frozen=True)
class BundleStats:
    annex_count: int
    document_count: int
    empty_annex_count: int
    missing_content_count: int
    total_bytes: int

    @property
    def exportable(self) -> bool:
        return self.annex_count > self.empty_annex_count


def bundle_stats(annexes: Sequence[AnnexItem]) -> BundleStats:
    documents = [document for annex in annexes for document in annex.documents]
    return BundleStats(
        annex_count=len(annexes),
        document_count=len(documents),
        empty_annex_count=sum(1 for annex in annexes if annex.is_empty),
        missing_content_count=sum(1 for document in documents if not document.has_content),
        total_bytes=sum(document.size for document in documents),
    )


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"
