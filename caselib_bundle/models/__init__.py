"""Data model: documents, annexes, formatting and themes."""

from .document import (
    AnnexItem,
    DocumentItem,
    ExportRequest,
    display_title,
    generate_auto_title,
    generate_id,
)
from .formatting import (
    FormattingOptions,
    default_cover_formatting,
    default_opis_formatting,
)
from .theme import COLOR_THEMES, DEFAULT_THEME, ColorTheme, resolve_theme

__all__ = [
    "AnnexItem",
    "DocumentItem",
    "ExportRequest",
    "FormattingOptions",
    "ColorTheme",
    "COLOR_THEMES",
    "DEFAULT_THEME",
    "default_cover_formatting",
    "default_opis_formatting",
    "display_title",
    "generate_auto_title",
    "generate_id",
    "resolve_theme",
]
