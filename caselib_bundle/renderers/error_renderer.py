"""Placeholder pages for documents and annexes that failed to render."""

from __future__ import annotations

from typing import List, Optional

from ..models.formatting import FormattingOptions
from .base_renderer import BaseRenderer
from .render_utils import PageCanvas, RenderedPages

ERROR_COLOR = "#b91c1c"
HEADING_SIZE = 20.0
BODY_SIZE = 12.0
LINE_GAP = 10.0


class ErrorPageRenderer(BaseRenderer):
    """Draw a one-page notice in place of content that could not be added."""

    def render_document_error(self, filename: str, annex_number: int, document_index: int,
                              formatting: FormattingOptions, reason: Optional[str] = None,
                              page_number: Optional[int] = None) -> RenderedPages:
        lines = [
            f"Anexa {annex_number}, documentul {document_index}",
            f"Fisierul \"{filename}\" nu a putut fi incarcat.",
        ]
        if reason:
            lines.append(f"Motiv: {reason}")
        return self._render("DOCUMENT INDISPONIBIL", lines, formatting, page_number)

    def render_annex_error(self, annex_number: int, title: str, formatting: FormattingOptions,
                           reason: Optional[str] = None, page_number: Optional[int] = None) -> RenderedPages:
        lines = [
            f"Anexa {annex_number}: {title}",
            "Anexa nu a putut fi procesata complet.",
        ]
        if reason:
            lines.append(f"Motiv: {reason}")
        return self._render(f"EROARE LA ANEXA {annex_number}", lines, formatting, page_number)

    def _render(self, heading: str, lines: List[str], formatting: FormattingOptions,
                page_number: Optional[int]) -> RenderedPages:
        page = self._open_canvas(formatting, title=heading)
        theme = self._theme(formatting)
        content = page.geometry.content

        y = content.center_y + HEADING_SIZE
        page.draw_text(heading, content.center_x, y, HEADING_SIZE, bold=True,
                       color=ERROR_COLOR, align="center")
        y -= HEADING_SIZE + LINE_GAP
        y = self._draw_block(page, lines, content.center_x, y, content.width * 0.8, theme.text)

        if formatting.show_page_numbers and page_number is not None:
            page.draw_page_number(page_number, color=theme.secondary)
        return page.finish()

    def _draw_block(self, page: PageCanvas, lines: List[str], x: float, y: float,
                    max_width: float, color: str) -> float:
        for text in lines:
            wrapped = self.wrap(text, max_width, BODY_SIZE)
            for line in wrapped.lines:
                y -= wrapped.line_height
                page.draw_text(line, x, y, BODY_SIZE, color=color, align="center")
            y -= LINE_GAP / 2.0
        return y
