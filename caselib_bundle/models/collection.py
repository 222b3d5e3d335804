"""
Operations on the ordered annex list.

All helpers return new values. Whenever the sequence itself changes the
result is renumbered, so ``annexes[i].annex_number == i + 1`` always holds.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from .document import AnnexItem, DocumentItem, generate_auto_title, generate_id


def renumber(annexes: Sequence[AnnexItem]) -> List[AnnexItem]:
    return [
        annex if annex.annex_number == index + 1 else replace(annex, annex_number=index + 1)
        for index, annex in enumerate(annexes)
    ]


def create_document(filename: str, data: Optional[bytes] = None) -> DocumentItem:
    return DocumentItem(
        id=generate_id(),
        source_file_path=filename,
        auto_title=generate_auto_title(filename),
        file_bytes=data,
    )


def create_annex(filename: str, data: Optional[bytes] = None) -> AnnexItem:
    """New annex holding a single document; numbered once added to a list."""
    return AnnexItem(id=generate_id(), annex_number=0, documents=(create_document(filename, data),))


def add_document_to_annex(annex: AnnexItem, filename: str, data: Optional[bytes] = None) -> AnnexItem:
    return replace(annex, documents=annex.documents + (create_document(filename, data),))


def remove_document_from_annex(annex: AnnexItem, document_id: str) -> AnnexItem:
    return replace(annex, documents=tuple(doc for doc in annex.documents if doc.id != document_id))


def set_user_title(annex: AnnexItem, title: Optional[str]) -> AnnexItem:
    cleaned = title.strip() if title else ""
    return replace(annex, user_title=cleaned or None)


def append_annexes(annexes: Sequence[AnnexItem], new_annexes: Sequence[AnnexItem]) -> List[AnnexItem]:
    return renumber(list(annexes) + list(new_annexes))


def insert_annex(annexes: Sequence[AnnexItem], index: int, annex: AnnexItem) -> List[AnnexItem]:
    items = list(annexes)
    items.insert(index, annex)
    return renumber(items)


def remove_annex(annexes: Sequence[AnnexItem], annex_id: str) -> List[AnnexItem]:
    return renumber([annex for annex in annexes if annex.id != annex_id])


def reorder_annexes(annexes: Sequence[AnnexItem], from_index: int, to_index: int) -> List[AnnexItem]:
    """Move the annex at ``from_index`` to ``to_index``."""
    items = list(annexes)
    if not 0 <= from_index < len(items):
        raise IndexError(f"Annex index out of range: {from_index}")
    moved = items.pop(from_index)
    to_index = max(0, min(to_index, len(items)))
    items.insert(to_index, moved)
    return renumber(items)


def move_annex_up(annexes: Sequence[AnnexItem], annex_id: str) -> List[AnnexItem]:
    index = _index_of(annexes, annex_id)
    if index is None or index == 0:
        return list(annexes)
    return reorder_annexes(annexes, index, index - 1)


def move_annex_down(annexes: Sequence[AnnexItem], annex_id: str) -> List[AnnexItem]:
    index = _index_of(annexes, annex_id)
    if index is None or index >= len(annexes) - 1:
        return list(annexes)
    return reorder_annexes(annexes, index, index + 1)


def update_annex(annexes: Sequence[AnnexItem], annex: AnnexItem) -> List[AnnexItem]:
    """Swap in a changed annex with the same id, keeping positions."""
    return renumber([annex if item.id == annex.id else item for item in annexes])


def _index_of(annexes: Sequence[AnnexItem], annex_id: str) -> Optional[int]:
    for index, annex in enumerate(annexes):
        if annex.id == annex_id:
            return index
    return None
