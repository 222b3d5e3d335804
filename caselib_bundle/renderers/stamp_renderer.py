"""
Stamp overlay for content pages.

The stamp is a short boxed text drawn near one corner (or edge center) of
each page taken from a user document. Cover, opis, separator and error pages
are never stamped.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Dict, Tuple

from pypdf import PageObject, PdfReader, Transformation
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

from ..exceptions import AssetError
from ..fonts.font_registry import EmbeddedFonts
from ..models.formatting import FormattingOptions
from ..models.theme import resolve_theme
from ..utils.color_utils import with_alpha
from ..utils.transliteration import normalize

logger = logging.getLogger(__name__)

EDGE_OFFSET = 20.0
BOX_PADDING = 4.0
STAMP_OPACITY = 0.9


class StampRenderer:
    """Build and merge stamp overlays for one annex."""

    def __init__(self, fonts: EmbeddedFonts, formatting: FormattingOptions, annex_number: int,
                 transliterate: bool = True) -> None:
        self.fonts = fonts
        self.formatting = formatting
        self.annex_number = annex_number
        self.text = normalize(formatting.stamp_text.replace("{n}", str(annex_number)), transliterate)
        self.color = resolve_theme(formatting.theme).primary
        self._overlays: Dict[Tuple[float, float], PageObject] = {}

    @property
    def enabled(self) -> bool:
        return self.formatting.stamp_enabled

    def position(self, page_width: float, page_height: float) -> Tuple[float, float]:
        """Baseline origin of the stamp text for a page of the given size."""
        size = float(self.formatting.stamp_font_size)
        text_width = pdfmetrics.stringWidth(self.text, self.fonts.bold, size)
        vertical, _, horizontal = self.formatting.stamp_position.partition("-")

        if horizontal == "left":
            x = EDGE_OFFSET + BOX_PADDING
        elif horizontal == "center":
            x = (page_width - text_width) / 2.0
        else:
            x = page_width - EDGE_OFFSET - BOX_PADDING - text_width

        if vertical == "bottom":
            y = EDGE_OFFSET + BOX_PADDING
        else:
            y = page_height - EDGE_OFFSET - BOX_PADDING - size
        return x, y

    def overlay(self, page_width: float, page_height: float) -> PageObject:
        key = (round(page_width, 2), round(page_height, 2))
        if key not in self._overlays:
            self._overlays[key] = self._build_overlay(page_width, page_height)
        return self._overlays[key]

    def apply(self, page: PageObject) -> PageObject:
        """Merge the stamp onto ``page`` in place and return it."""
        if not self.enabled:
            return page
        if page.rotation:
            page.transfer_rotation_to_content()
        box = page.mediabox
        overlay = self.overlay(float(box.width), float(box.height))
        left, bottom = float(box.left), float(box.bottom)
        if left or bottom:
            page.merge_transformed_page(overlay, Transformation().translate(left, bottom))
        else:
            page.merge_page(overlay)
        return page

    def _build_overlay(self, page_width: float, page_height: float) -> PageObject:
        size = float(self.formatting.stamp_font_size)
        buffer = BytesIO()
        try:
            canvas = Canvas(buffer, pagesize=(page_width, page_height))
            color = with_alpha(self.color, STAMP_OPACITY)
            x, y = self.position(page_width, page_height)
            text_width = pdfmetrics.stringWidth(self.text, self.fonts.bold, size)

            canvas.saveState()
            canvas.setStrokeColor(color)
            canvas.setFillColor(color)
            canvas.setLineWidth(0.8)
            canvas.rect(
                x - BOX_PADDING,
                y - BOX_PADDING - size * 0.2,
                text_width + 2 * BOX_PADDING,
                size * 1.2 + 2 * BOX_PADDING,
                stroke=1,
                fill=0,
            )
            canvas.setFont(self.fonts.bold, size)
            canvas.drawString(x, y, self.text)
            canvas.restoreState()
            canvas.showPage()
            canvas.save()
        except Exception as exc:
            raise AssetError("Failed to build stamp overlay", str(exc)) from exc

        logger.debug("Built stamp overlay %.1fx%.1f for annex %d", page_width, page_height, self.annex_number)
        return PdfReader(BytesIO(buffer.getvalue())).pages[0]
