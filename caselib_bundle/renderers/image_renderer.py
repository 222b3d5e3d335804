"""Logo decoding for cover pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("PNG", "JPEG")


@dataclass(frozen=True)
class LogoImage:
    """Decoded logo ready to be embedded."""

    reader: ImageReader
    width: int
    height: int
    format: str

    @property
    def aspect_ratio(self) -> float:
        return self.height / self.width if self.width else 1.0

    def fit(self, target_width: float, max_height: Optional[float] = None) -> tuple:
        """Rendered size for ``target_width``, shrunk to respect ``max_height``."""
        width = float(target_width)
        height = width * self.aspect_ratio
        if max_height is not None and height > max_height > 0:
            width = width * max_height / height
            height = max_height
        return width, height


def load_logo(data: Optional[bytes], name: str = "logo") -> Optional[LogoImage]:
    """
    Decode logo bytes.

    Only PNG and JPEG are embedded; anything else, or bytes Pillow cannot
    identify, yields None and the cover is drawn without a logo.
    """
    if not data:
        return None
    try:
        with Image.open(BytesIO(data)) as image:
            image_format = (image.format or "").upper()
            width, height = image.size
            if image_format not in SUPPORTED_FORMATS:
                logger.info("Skipping logo %s: unsupported format %s", name, image_format or "unknown")
                return None
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        logger.warning("Skipping logo %s: %s", name, exc)
        return None

    if width <= 0 or height <= 0:
        logger.warning("Skipping logo %s: empty image", name)
        return None

    return LogoImage(reader=ImageReader(BytesIO(data)), width=width, height=height, format=image_format)
