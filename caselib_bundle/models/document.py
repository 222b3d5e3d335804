"""Documents, annexes and the export request handed to the assembler."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Optional, Sequence, Tuple

from .formatting import FormattingOptions, default_cover_formatting, default_opis_formatting

_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")
_SEPARATOR_PATTERN = re.compile(r"[-_]")


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


def generate_auto_title(filename: str) -> str:
    """Title derived from a filename: extension dropped, ``-``/``_`` become spaces."""
    name = PurePath(filename).name if filename else ""
    return _SEPARATOR_PATTERN.sub(" ", _EXTENSION_PATTERN.sub("", name))


@dataclass(frozen=True)
class DocumentItem:
    """One source file placed inside an annex."""

    id: str
    source_file_path: str
    auto_title: str
    file_bytes: Optional[bytes] = field(default=None, repr=False, compare=False)

    @property
    def has_content(self) -> bool:
        return bool(self.file_bytes)

    @property
    def size(self) -> int:
        return len(self.file_bytes) if self.file_bytes else 0


@dataclass(frozen=True)
class AnnexItem:
    """
    One numbered section of the bundle.

    ``annex_number`` mirrors the annex position and is only assigned by the
    collection helpers in :mod:`caselib_bundle.models.collection`.
    """

    id: str
    annex_number: int = 0
    documents: Tuple[DocumentItem, ...] = ()
    user_title: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.documents

    @property
    def display_title(self) -> str:
        return display_title(self)


def display_title(annex: AnnexItem) -> str:
    if annex.user_title and annex.user_title.strip():
        return annex.user_title.strip()
    if annex.documents and annex.documents[0].auto_title:
        return annex.documents[0].auto_title
    return f"Anexa {annex.annex_number}"


@dataclass
class ExportRequest:
    """Read-only snapshot of everything the assembler needs."""

    annexes: Sequence[AnnexItem]
    opis_formatting: FormattingOptions = field(default_factory=default_opis_formatting)
    cover_formatting: FormattingOptions = field(default_factory=default_cover_formatting)
