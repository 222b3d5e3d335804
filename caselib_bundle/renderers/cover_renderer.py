"""Cover page rendering: heading, wrapped title, optional logo."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..engine.geometry import PageGeometry
from ..exceptions import RenderingError
from ..models.formatting import DEFAULT_HEADING_FONT_SIZE, FormattingOptions
from .base_renderer import BaseRenderer
from .image_renderer import LogoImage, load_logo
from .render_utils import RenderedPages

logger = logging.getLogger(__name__)

TITLE_WIDTH_RATIO = 0.8
HEADING_GAP = 40.0
LOGO_GAP = 24.0
TITLE_LEADING = 1.3


@dataclass(slots=True)
class CoverLayout:
    """Resolved positions for one cover page."""

    heading: str
    heading_size: float
    heading_y: float
    column_center: float
    title_lines: List[str]
    title_size: float
    title_baselines: List[float]
    logo_box: Optional[tuple] = None


class CoverPageRenderer(BaseRenderer):
    """Render the single cover page that opens each annex."""

    def render(self, annex_number: int, title: str, formatting: FormattingOptions,
               page_number: Optional[int] = None) -> RenderedPages:
        logo = load_logo(formatting.logo_file, formatting.logo_path or "logo")
        page = self._open_canvas(formatting, title=formatting.heading_text(annex_number))
        theme = self._theme(formatting)
        self._paint_background(page, theme)

        layout = self.layout(annex_number, title, formatting, logo)

        if logo is not None and layout.logo_box is not None:
            x, y, width, height = layout.logo_box
            try:
                page.draw_image(logo, x, y, width, height)
            except RenderingError as exc:
                logger.warning("Cover of annex %d drawn without logo: %s", annex_number, exc)

        page.draw_text(
            layout.heading,
            layout.column_center,
            layout.heading_y,
            layout.heading_size,
            bold=True,
            color=theme.primary,
            align="center",
        )
        for line, baseline in zip(layout.title_lines, layout.title_baselines):
            page.draw_text(
                line,
                layout.column_center,
                baseline,
                layout.title_size,
                bold=formatting.bold,
                color=theme.text,
                align="center",
            )

        if formatting.show_page_numbers and page_number is not None:
            page.draw_page_number(page_number, color=theme.secondary)

        return page.finish()

    def layout(self, annex_number: int, title: str, formatting: FormattingOptions,
               logo: Optional[LogoImage] = None) -> CoverLayout:
        """
        Place heading, title block and logo.

        The heading and title form one block centered on the content area.
        A top or bottom logo shifts that block by half the logo height so the
        whole group stays centered; a left or right logo sits beside the
        block and narrows the title column.
        """
        geometry = PageGeometry.from_formatting(formatting)
        content = geometry.content
        heading_size = float(formatting.heading_font_size or DEFAULT_HEADING_FONT_SIZE)
        title_size = float(formatting.font_size)
        column_width = min(geometry.width * TITLE_WIDTH_RATIO, content.width)
        column_center = content.center_x

        logo_width = logo_height = 0.0
        if logo is not None:
            logo_width, logo_height = logo.fit(
                min(formatting.logo_size, content.width / 2.0),
                max_height=content.height / 3.0,
            )
            if formatting.logo_position in ("left", "right"):
                column_width = min(column_width, content.width - logo_width - LOGO_GAP)

        wrapped = self.wrap(title, column_width, title_size, bold=formatting.bold, leading=TITLE_LEADING)
        block_height = heading_size + HEADING_GAP + wrapped.height

        shift = 0.0
        if logo is not None and formatting.logo_position == "top":
            shift = -(logo_height + LOGO_GAP) / 2.0
        elif logo is not None and formatting.logo_position == "bottom":
            shift = (logo_height + LOGO_GAP) / 2.0

        block_top = content.center_y + block_height / 2.0 + shift
        block_bottom = block_top - block_height

        logo_box = None
        if logo is not None:
            row_width = logo_width + LOGO_GAP + column_width
            row_left = content.center_x - row_width / 2.0
            if formatting.logo_position == "left":
                column_center = row_left + logo_width + LOGO_GAP + column_width / 2.0
                logo_box = (row_left, content.center_y - logo_height / 2.0, logo_width, logo_height)
            elif formatting.logo_position == "right":
                column_center = row_left + column_width / 2.0
                logo_box = (row_left + column_width + LOGO_GAP, content.center_y - logo_height / 2.0,
                            logo_width, logo_height)
            elif formatting.logo_position == "bottom":
                logo_box = (content.center_x - logo_width / 2.0, block_bottom - LOGO_GAP - logo_height,
                            logo_width, logo_height)
            else:
                logo_box = (content.center_x - logo_width / 2.0, block_top + LOGO_GAP,
                            logo_width, logo_height)

        heading_y = block_top - heading_size
        title_top = block_top - heading_size - HEADING_GAP
        baselines = [
            title_top - index * wrapped.line_height - title_size
            for index in range(wrapped.line_count)
        ]

        return CoverLayout(
            heading=formatting.heading_text(annex_number),
            heading_size=heading_size,
            heading_y=heading_y,
            column_center=column_center,
            title_lines=wrapped.lines,
            title_size=title_size,
            title_baselines=baselines,
            logo_box=logo_box,
        )
