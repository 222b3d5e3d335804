"""Base class for the synthetic page renderers."""

from __future__ import annotations

from typing import Optional

from ..engine.geometry import PageGeometry
from ..engine.line_breaker import WrappedText, wrap_text
from ..fonts.font_registry import EmbeddedFonts
from ..models.formatting import FormattingOptions
from ..models.theme import ColorTheme, resolve_theme
from ..utils.transliteration import normalize
from .render_utils import PageCanvas

LINE_LEADING = 1.2


class BaseRenderer:
    """Common functionality shared by the cover, opis, separator and error renderers."""

    def __init__(self, fonts: EmbeddedFonts, transliterate: bool = True) -> None:
        self.fonts = fonts
        self.transliterate = transliterate

    # ------------------------------------------------------------------
    # Canvas helpers
    # ------------------------------------------------------------------
    def _open_canvas(self, formatting: FormattingOptions, title: Optional[str] = None) -> PageCanvas:
        return PageCanvas(
            self.fonts,
            PageGeometry.from_formatting(formatting),
            transliterate=self.transliterate,
            title=title,
        )

    def _theme(self, formatting: FormattingOptions) -> ColorTheme:
        return resolve_theme(formatting.theme)

    def _paint_background(self, page: PageCanvas, theme: ColorTheme) -> None:
        if theme.background != "#ffffff":
            page.fill_background(theme.background)

    def wrap(self, text: str, max_width: float, size: float, bold: bool = False,
             leading: float = LINE_LEADING) -> WrappedText:
        """Word-wrap normalized ``text`` for the given face and size."""
        return wrap_text(
            normalize(text, self.transliterate),
            max_width,
            self.fonts.pick(bold),
            size,
            leading=leading,
        )
