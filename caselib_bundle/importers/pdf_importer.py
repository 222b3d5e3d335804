"""
Import of user-supplied PDF bytes.

:func:`import_pdf` never raises for bad input; it returns either
:class:`DocumentImported` with the parsed pages or :class:`ImportFailed`
carrying a :class:`DocumentImportError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import List, Optional, Union

from pypdf import PageObject, PdfReader
from pypdf.errors import PyPdfError

from ..exceptions import DocumentImportError

logger = logging.getLogger(__name__)


@dataclass
class DocumentImported:
    filename: str
    pages: List[PageObject] = field(repr=False)

    @property
    def page_count(self) -> int:
        return len(self.pages)


@dataclass
class ImportFailed:
    filename: str
    error: DocumentImportError


ImportResult = Union[DocumentImported, ImportFailed]


def _failure(filename: str, message: str, details: Optional[str] = None) -> ImportFailed:
    return ImportFailed(filename=filename, error=DocumentImportError(message, filename=filename, details=details))


def import_pdf(data: Optional[bytes], filename: str, strict: bool = False) -> ImportResult:
    """
    Parse ``data`` as a PDF document.

    Args:
        data: Raw file bytes; ``None`` means the file could not be read
        filename: Name used in log lines and error pages
        strict: Pass pypdf's strict mode through

    Returns:
        The import result
    """
    if not data:
        logger.warning("No content captured for %s", filename)
        return _failure(filename, "File content is missing")

    if b"%PDF" not in data[:1024]:
        logger.warning("%s does not start with a PDF header", filename)
        return _failure(filename, "Not a PDF file")

    try:
        reader = PdfReader(BytesIO(data), strict=strict)
        if reader.is_encrypted:
            # Owner-password-only files open with an empty user password.
            if not reader.decrypt(""):
                return _failure(filename, "PDF is password protected")
        pages = list(reader.pages)
    except (PyPdfError, ValueError, KeyError, IndexError, TypeError, AttributeError, OSError,
            NotImplementedError) as exc:
        logger.warning("Failed to parse %s: %s", filename, exc)
        return _failure(filename, "Unreadable PDF", str(exc))

    if not pages:
        logger.warning("%s contains no pages", filename)
        return _failure(filename, "PDF has no pages")

    logger.debug("Imported %s (%d pages)", filename, len(pages))
    return DocumentImported(filename=filename, pages=pages)
