"""Geometry primitives for the generated pages."""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4

from ..utils.units import mm_to_points

PAGE_WIDTH, PAGE_HEIGHT = A4  # 595.28 x 841.89 pt


@dataclass(slots=True)
class Size:
    width: float
    height: float


@dataclass(slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0:
            self.width = abs(self.width)
        if self.height < 0:
            self.height = abs(self.height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0

    @classmethod
    def from_mm(cls, top: float, right: float, bottom: float, left: float) -> "Margins":
        return cls(
            top=mm_to_points(max(top, 0.0)),
            bottom=mm_to_points(max(bottom, 0.0)),
            left=mm_to_points(max(left, 0.0)),
            right=mm_to_points(max(right, 0.0)),
        )


@dataclass(slots=True)
class PageGeometry:
    """
    Fixed A4 page with the configured margins applied.

    The same margins drive the HTML preview, so both renderings agree on the
    printable area.
    """

    size: Size
    margins: Margins

    @classmethod
    def from_formatting(cls, formatting) -> "PageGeometry":
        margins = Margins.from_mm(
            formatting.margin_top,
            formatting.margin_right,
            formatting.margin_bottom,
            formatting.margin_left,
        )
        # Margins that would swallow the page collapse to nothing.
        if margins.left + margins.right >= PAGE_WIDTH or margins.top + margins.bottom >= PAGE_HEIGHT:
            margins = Margins()
        return cls(size=Size(PAGE_WIDTH, PAGE_HEIGHT), margins=margins)

    @property
    def width(self) -> float:
        return self.size.width

    @property
    def height(self) -> float:
        return self.size.height

    @property
    def content(self) -> Rect:
        return Rect(
            self.margins.left,
            self.margins.bottom,
            self.width - self.margins.left - self.margins.right,
            self.height - self.margins.top - self.margins.bottom,
        )
