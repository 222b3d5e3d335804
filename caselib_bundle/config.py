"""Export configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .fonts.font_provider import FontProvider, default_font_provider


@dataclass
class ExportOptions:
    """
    Options for one assembler instance.

    Args:
        font_regular_path: TrueType file for body text; the bundled face if unset
        font_bold_path: TrueType file for headings; the bundled face if unset
        transliterate: Replace Romanian diacritics before drawing
        apply_stamp: Honor the cover formatting's stamp settings
        strict_pdf: Parse user documents in pypdf strict mode
    """

    font_regular_path: Optional[Path] = None
    font_bold_path: Optional[Path] = None
    transliterate: bool = True
    apply_stamp: bool = True
    strict_pdf: bool = False

    def font_provider(self) -> FontProvider:
        if self.font_regular_path is None and self.font_bold_path is None:
            return default_font_provider()
        return FontProvider(self.font_regular_path, self.font_bold_path)
