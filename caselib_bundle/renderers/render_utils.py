"""Drawing helpers shared by the page renderers."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen.canvas import Canvas

from ..engine.geometry import PageGeometry, Rect
from ..exceptions import RenderingError
from ..fonts.font_registry import EmbeddedFonts
from ..utils.color_utils import to_color
from ..utils.transliteration import normalize
from .image_renderer import LogoImage


@dataclass(frozen=True)
class RenderedPages:
    """Serialized output of one renderer call."""

    data: bytes
    page_count: int


class PageCanvas:
    """
    Narrow drawing surface over a ReportLab canvas.

    Every string goes through :func:`normalize` before it is measured or
    drawn. Coordinates are PDF points with the origin at the bottom left.
    """

    def __init__(self, fonts: EmbeddedFonts, geometry: PageGeometry,
                 transliterate: bool = True, title: Optional[str] = None) -> None:
        self.fonts = fonts
        self.geometry = geometry
        self.transliterate = transliterate
        self._buffer = BytesIO()
        self._canvas = Canvas(self._buffer, pagesize=(geometry.width, geometry.height))
        if title:
            self._canvas.setTitle(self.prepare(title))
        self.page_count = 1
        self._finished = False

    def prepare(self, text: Optional[str]) -> str:
        return normalize(text, self.transliterate)

    def text_width(self, text: str, size: float, bold: bool = False) -> float:
        return pdfmetrics.stringWidth(self.prepare(text), self.fonts.pick(bold), size)

    def draw_text(self, text: str, x: float, y: float, size: float, *, bold: bool = False,
                  color: object = "#1a1a1a", align: str = "left") -> None:
        """
        Draw one line of text with its baseline at ``y``.

        ``align`` chooses whether ``x`` is the left edge, the center or the
        right edge of the line.
        """
        prepared = self.prepare(text)
        font_name = self.fonts.pick(bold)
        self._canvas.setFont(font_name, size)
        self._canvas.setFillColor(to_color(color))
        if align == "center":
            self._canvas.drawCentredString(x, y, prepared)
        elif align == "right":
            self._canvas.drawRightString(x, y, prepared)
        else:
            self._canvas.drawString(x, y, prepared)

    def draw_rect(self, rect: Rect, *, fill: object = None, stroke: object = None,
                  line_width: float = 1.0) -> None:
        self._canvas.saveState()
        if fill is not None:
            self._canvas.setFillColor(to_color(fill))
        if stroke is not None:
            self._canvas.setStrokeColor(to_color(stroke))
            self._canvas.setLineWidth(line_width)
        self._canvas.rect(
            rect.x,
            rect.y,
            rect.width,
            rect.height,
            stroke=1 if stroke is not None else 0,
            fill=1 if fill is not None else 0,
        )
        self._canvas.restoreState()

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, *,
                  color: object = "#333333", line_width: float = 1.0) -> None:
        self._canvas.saveState()
        self._canvas.setStrokeColor(to_color(color))
        self._canvas.setLineWidth(line_width)
        self._canvas.line(x1, y1, x2, y2)
        self._canvas.restoreState()

    def draw_image(self, image: LogoImage, x: float, y: float, width: float, height: float) -> None:
        try:
            self._canvas.drawImage(image.reader, x, y, width=width, height=height, mask="auto")
        except (OSError, ValueError) as exc:
            raise RenderingError(f"Failed to draw {image.format} image", str(exc)) from exc

    def fill_background(self, color: object) -> None:
        self.draw_rect(Rect(0, 0, self.geometry.width, self.geometry.height), fill=color)

    def draw_page_number(self, number: int, color: object = "#666666", size: float = 10.0) -> None:
        y = max(self.geometry.margins.bottom - 2 * size, 15.0)
        self.draw_text(str(number), self.geometry.width / 2.0, y, size, color=color, align="center")

    def new_page(self) -> None:
        self._canvas.showPage()
        self.page_count += 1

    def finish(self) -> RenderedPages:
        if not self._finished:
            self._canvas.showPage()
            self._canvas.save()
            self._finished = True
        return RenderedPages(data=self._buffer.getvalue(), page_count=self.page_count)
