"""
Glyph data for the generated pages.

The provider hands out the raw TrueType bytes of a regular and a bold face.
Each face is read at most once per provider; later calls return the cached
buffer.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar, Union

import reportlab

from ..exceptions import FontError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Bitstream Vera ships inside every reportlab distribution.
REPORTLAB_FONTS_DIR = Path(reportlab.__file__).resolve().parent / "fonts"
DEFAULT_REGULAR_FONT = REPORTLAB_FONTS_DIR / "Vera.ttf"
DEFAULT_BOLD_FONT = REPORTLAB_FONTS_DIR / "VeraBd.ttf"


class LoadOnce(Generic[T]):
    """Single-assignment cell filled by ``loader`` on first access."""

    def __init__(self, loader: Callable[[], T]) -> None:
        self._loader = loader
        self._value: Optional[T] = None
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self) -> T:
        if self._loaded:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._loaded:
                # A failing loader leaves the cell empty so a later call retries.
                self._value = self._loader()
                self._loaded = True
        return self._value  # type: ignore[return-value]


class FontProvider:
    """Supplies regular and bold TrueType bytes from files on disk."""

    def __init__(
        self,
        regular_path: Union[str, Path, None] = None,
        bold_path: Union[str, Path, None] = None,
    ) -> None:
        self.regular_path = Path(regular_path) if regular_path else DEFAULT_REGULAR_FONT
        self.bold_path = Path(bold_path) if bold_path else DEFAULT_BOLD_FONT
        self._regular = LoadOnce(lambda: self._read(self.regular_path))
        self._bold = LoadOnce(lambda: self._read(self.bold_path))

    def load_regular(self) -> bytes:
        return self._regular.get()

    def load_bold(self) -> bytes:
        return self._bold.get()

    def preload(self) -> bool:
        """
        Load both faces ahead of the first export.

        Failures are only logged here; the export itself will raise
        :class:`FontError` when it needs the glyphs.
        """
        try:
            self.load_regular()
            self.load_bold()
        except FontError as exc:
            logger.warning("Failed to preload PDF fonts: %s", exc)
            return False
        logger.debug("PDF fonts preloaded: %s, %s", self.regular_path.name, self.bold_path.name)
        return True

    @staticmethod
    def _read(path: Path) -> bytes:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise FontError(f"Failed to load font {path.name}", str(exc)) from exc
        if not data:
            raise FontError(f"Font file is empty: {path}")
        logger.debug("Loaded font %s (%d bytes)", path, len(data))
        return data


@lru_cache()
def default_font_provider() -> FontProvider:
    """Process-wide provider for the bundled faces."""
    return FontProvider()
