"""Page renderers for the synthetic pages of a bundle."""

from .base_renderer import BaseRenderer
from .cover_renderer import CoverLayout, CoverPageRenderer
from .error_renderer import ErrorPageRenderer
from .image_renderer import LogoImage, load_logo
from .opis_renderer import OpisRenderer, OpisRow, RowLayout
from .render_utils import PageCanvas, RenderedPages
from .separator_renderer import SeparatorPageRenderer
from .stamp_renderer import StampRenderer

__all__ = [
    "BaseRenderer",
    "CoverLayout",
    "CoverPageRenderer",
    "ErrorPageRenderer",
    "LogoImage",
    "OpisRenderer",
    "OpisRow",
    "PageCanvas",
    "RenderedPages",
    "RowLayout",
    "SeparatorPageRenderer",
    "StampRenderer",
    "load_logo",
]
