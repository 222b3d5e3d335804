"""Table of contents ("opis") rendering with wrapped titles and pagination."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..engine.geometry import PageGeometry, Rect
from ..models.formatting import FormattingOptions
from ..models.theme import ColorTheme
from .base_renderer import BaseRenderer
from .render_utils import PageCanvas, RenderedPages

logger = logging.getLogger(__name__)

OPIS_TITLE = "OPIS"
HEADER_LABELS = ("Nr. crt.", "Descriere")
TITLE_SCALE = 1.5
TITLE_GAP = 30.0
MIN_ROW_HEIGHT = 25.0
CELL_PADDING_X = 8.0
CELL_PADDING_Y = 6.0
TABLE_OFFSET_RATIO = 0.05
NUMBER_COLUMN_RATIO = 0.3
TITLE_COLUMN_RATIO = 0.6


@dataclass(frozen=True)
class OpisRow:
    number: int
    title: str


@dataclass(slots=True)
class RowLayout:
    number_text: str
    lines: List[str]
    line_height: float
    height: float


@dataclass(slots=True)
class TableColumns:
    x: float
    number_width: float
    title_width: float

    @property
    def title_x(self) -> float:
        return self.x + self.number_width

    @property
    def width(self) -> float:
        return self.number_width + self.title_width

    @property
    def title_text_width(self) -> float:
        return max(self.title_width - 2 * CELL_PADDING_X, 1.0)


def row_height(line_count: int, line_height: float) -> float:
    return max(MIN_ROW_HEIGHT, line_count * line_height + 2 * CELL_PADDING_Y)


def opis_title(formatting: FormattingOptions) -> str:
    """Opis heading; an annex-number placeholder has no meaning here and is dropped."""
    title = (formatting.heading_format or "").replace("{n}", "")
    return " ".join(title.split()) or OPIS_TITLE


def split_row(layout: RowLayout, line_count: int) -> Tuple[RowLayout, RowLayout]:
    """Cut ``layout`` after ``line_count`` lines; both parts keep the annex label."""
    head, tail = layout.lines[:line_count], layout.lines[line_count:]
    return (
        RowLayout(layout.number_text, head, layout.line_height, row_height(len(head), layout.line_height)),
        RowLayout(layout.number_text, tail, layout.line_height, row_height(len(tail), layout.line_height)),
    )


def fitting_lines(layout: RowLayout, available: float) -> int:
    """Number of the row's lines that fit in ``available`` points of height."""
    if available < MIN_ROW_HEIGHT:
        return 0
    count = int((available - 2 * CELL_PADDING_Y) // layout.line_height)
    return max(0, min(count, len(layout.lines)))


class OpisRenderer(BaseRenderer):
    """
    Render the list of annexes as a two-column table.

    Titles that do not fit the description column are word-wrapped and the
    row grows to hold them. When the next row would cross the bottom margin
    a new page is started and the header row is drawn again. A row taller
    than a whole page is split between pages.
    """

    def columns(self, formatting: FormattingOptions) -> TableColumns:
        content = PageGeometry.from_formatting(formatting).content
        return TableColumns(
            x=content.x + content.width * TABLE_OFFSET_RATIO,
            number_width=content.width * NUMBER_COLUMN_RATIO,
            title_width=content.width * TITLE_COLUMN_RATIO,
        )

    def layout_row(self, row: OpisRow, formatting: FormattingOptions,
                   columns: Optional[TableColumns] = None) -> RowLayout:
        columns = columns or self.columns(formatting)
        size = float(formatting.font_size)
        wrapped = self.wrap(row.title, columns.title_text_width, size, bold=formatting.bold)
        return RowLayout(
            number_text=f"Anexa nr. {row.number}",
            lines=wrapped.lines,
            line_height=wrapped.line_height,
            height=row_height(wrapped.line_count, wrapped.line_height),
        )

    def render(self, rows: Sequence[OpisRow], formatting: FormattingOptions,
               first_page_number: int = 1) -> RenderedPages:
        title = opis_title(formatting)
        page = self._open_canvas(formatting, title=title)
        theme = self._theme(formatting)
        content = page.geometry.content
        columns = self.columns(formatting)
        size = float(formatting.font_size)
        # Room below the repeated header on a continuation page.
        capacity = content.top - MIN_ROW_HEIGHT - content.bottom

        self._paint_background(page, theme)
        title_size = size * TITLE_SCALE
        title_y = content.top - title_size
        page.draw_text(title, content.center_x, title_y, title_size, bold=True,
                       color=theme.primary, align="center")

        current_y = self._draw_header(page, columns, title_y - TITLE_GAP, size, theme)
        rows_on_page = 0

        for row in rows:
            layout = self.layout_row(row, formatting, columns)
            while layout.height > current_y - content.bottom:
                fit = fitting_lines(layout, current_y - content.bottom)
                if rows_on_page and (layout.height <= capacity or fit == 0):
                    current_y = self._continue_on_new_page(page, columns, formatting, theme, first_page_number)
                    rows_on_page = 0
                    continue
                if fit == 0:
                    break
                head, layout = split_row(layout, fit)
                logger.debug("Opis row for %s split after %d line(s)", head.number_text, fit)
                self._draw_row(page, columns, current_y, head, formatting, theme)
                current_y = self._continue_on_new_page(page, columns, formatting, theme, first_page_number)
                rows_on_page = 0
            self._draw_row(page, columns, current_y, layout, formatting, theme)
            current_y -= layout.height
            rows_on_page += 1

        self._finish_page(page, formatting, theme, first_page_number)
        rendered = page.finish()
        logger.debug("Opis rendered: %d rows on %d page(s)", len(rows), rendered.page_count)
        return rendered

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _continue_on_new_page(self, page: PageCanvas, columns: TableColumns, formatting: FormattingOptions,
                              theme: ColorTheme, first_page_number: int) -> float:
        self._finish_page(page, formatting, theme, first_page_number)
        page.new_page()
        self._paint_background(page, theme)
        return self._draw_header(page, columns, page.geometry.content.top, float(formatting.font_size), theme)

    def _draw_header(self, page: PageCanvas, columns: TableColumns, top: float,
                     size: float, theme: ColorTheme) -> float:
        height = MIN_ROW_HEIGHT
        bottom = top - height
        page.draw_rect(Rect(columns.x, bottom, columns.number_width, height),
                       fill=theme.accent, stroke=theme.secondary)
        page.draw_rect(Rect(columns.title_x, bottom, columns.title_width, height),
                       fill=theme.accent, stroke=theme.secondary)
        baseline = top - CELL_PADDING_Y - size
        page.draw_text(HEADER_LABELS[0], columns.x + columns.number_width / 2.0, baseline, size,
                       bold=True, color=theme.text, align="center")
        page.draw_text(HEADER_LABELS[1], columns.title_x + CELL_PADDING_X, baseline, size,
                       bold=True, color=theme.text)
        return bottom

    def _draw_row(self, page: PageCanvas, columns: TableColumns, top: float, layout: RowLayout,
                  formatting: FormattingOptions, theme: ColorTheme) -> None:
        size = float(formatting.font_size)
        bottom = top - layout.height
        page.draw_rect(Rect(columns.x, bottom, columns.number_width, layout.height), stroke=theme.secondary)
        page.draw_rect(Rect(columns.title_x, bottom, columns.title_width, layout.height), stroke=theme.secondary)

        first_baseline = top - CELL_PADDING_Y - size
        page.draw_text(layout.number_text, columns.x + columns.number_width / 2.0, first_baseline, size,
                       bold=formatting.bold, color=theme.text, align="center")

        if formatting.alignment == "center":
            x, align = columns.title_x + columns.title_width / 2.0, "center"
        elif formatting.alignment == "right":
            x, align = columns.title_x + columns.title_width - CELL_PADDING_X, "right"
        else:
            x, align = columns.title_x + CELL_PADDING_X, "left"

        for index, line in enumerate(layout.lines):
            page.draw_text(line, x, first_baseline - index * layout.line_height, size,
                           bold=formatting.bold, color=theme.text, align=align)

    def _finish_page(self, page: PageCanvas, formatting: FormattingOptions, theme: ColorTheme,
                     first_page_number: int) -> None:
        if formatting.show_page_numbers:
            page.draw_page_number(first_page_number + page.page_count - 1, color=theme.secondary)
