from .geometry import PAGE_HEIGHT, PAGE_WIDTH, Margins, PageGeometry, Rect, Size
from .line_breaker import WrappedText, wrap_text, wrap_words

__all__ = [
    "PAGE_WIDTH",
    "PAGE_HEIGHT",
    "Margins",
    "PageGeometry",
    "Rect",
    "Size",
    "WrappedText",
    "wrap_text",
    "wrap_words",
]
