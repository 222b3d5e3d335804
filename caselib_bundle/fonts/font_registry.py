"""Registration of provider fonts with ReportLab."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from io import BytesIO

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from ..exceptions import FontError
from .font_provider import FontProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmbeddedFonts:
    """Names of the registered regular and bold faces."""

    regular: str
    bold: str

    def pick(self, bold: bool) -> str:
        return self.bold if bold else self.regular


def _register(prefix: str, data: bytes) -> str:
    # Registered names are global in ReportLab; key them on the glyph data so
    # two providers with different files never collide.
    name = f"{prefix}-{hashlib.sha1(data).hexdigest()[:10]}"
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    try:
        pdfmetrics.registerFont(TTFont(name, BytesIO(data)))
    except TTFError as exc:
        raise FontError(f"Failed to register font {prefix}", str(exc)) from exc
    logger.debug("Registered font %s", name)
    return name


def register_fonts(provider: FontProvider) -> EmbeddedFonts:
    """Load both faces from ``provider`` and register them for drawing."""
    regular = _register("BundleSans", provider.load_regular())
    bold = _register("BundleSans-Bold", provider.load_bold())
    return EmbeddedFonts(regular=regular, bold=bold)
