"""Separator pages between documents of a multi-document annex."""

from __future__ import annotations

from typing import Optional

from ..models.formatting import FormattingOptions
from .base_renderer import BaseRenderer
from .render_utils import RenderedPages

HEADING_SIZE = 22.0
TITLE_SIZE = 14.0
COUNTER_SIZE = 12.0
BLOCK_GAP = 28.0


class SeparatorPageRenderer(BaseRenderer):
    """Announce the next document of an annex: ``ANEXA N - DOCUMENTUL K``."""

    def render(self, annex_number: int, document_index: int, document_count: int, title: str,
               formatting: FormattingOptions, page_number: Optional[int] = None) -> RenderedPages:
        page = self._open_canvas(formatting)
        theme = self._theme(formatting)
        self._paint_background(page, theme)
        content = page.geometry.content

        heading = f"ANEXA {annex_number} - DOCUMENTUL {document_index}"
        wrapped = self.wrap(title, content.width * 0.8, TITLE_SIZE)
        block_height = HEADING_SIZE + BLOCK_GAP + wrapped.height + BLOCK_GAP + COUNTER_SIZE
        top = content.center_y + block_height / 2.0

        page.draw_text(heading, content.center_x, top - HEADING_SIZE, HEADING_SIZE,
                       bold=True, color=theme.primary, align="center")

        title_top = top - HEADING_SIZE - BLOCK_GAP
        for index, line in enumerate(wrapped.lines):
            page.draw_text(line, content.center_x, title_top - TITLE_SIZE - index * wrapped.line_height,
                           TITLE_SIZE, color=theme.text, align="center")

        counter_y = title_top - wrapped.height - BLOCK_GAP - COUNTER_SIZE
        page.draw_text(f"{document_index} din {document_count}", content.center_x, counter_y,
                       COUNTER_SIZE, color=theme.secondary, align="center")

        if formatting.show_page_numbers and page_number is not None:
            page.draw_page_number(page_number, color=theme.secondary)
        return page.finish()
