"""Color parsing helpers for theme values."""

from __future__ import annotations

import re
from typing import Optional

from reportlab.lib.colors import Color, HexColor

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")


def normalize_hex(value: object) -> Optional[str]:
    """
    Return ``value`` as a lowercase ``#rrggbb`` string, or None if it is not one.

    Only six-digit hex strings are accepted; that is what the color pickers
    produce and what the project file stores.
    """
    if not isinstance(value, str):
        return None
    match = _HEX_PATTERN.match(value.strip())
    if not match:
        return None
    return f"#{match.group(1).lower()}"


def to_color(value: object, fallback: str = "#1a1a1a") -> Color:
    """Convert a theme value to a ReportLab color, falling back on invalid input."""
    normalized = normalize_hex(value) or normalize_hex(fallback) or "#000000"
    return HexColor(normalized)


def with_alpha(value: object, alpha: float, fallback: str = "#1a1a1a") -> Color:
    base = to_color(value, fallback)
    return Color(base.red, base.green, base.blue, alpha=alpha)
