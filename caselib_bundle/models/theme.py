"""Color themes applied to cover, opis and separator pages."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..utils.color_utils import normalize_hex

THEME_FIELDS = ("primary", "secondary", "accent", "text", "background")

PRESET = "preset"
CUSTOM = "custom"

DEFAULT_COLORS: Dict[str, str] = {
    "primary": "#1a1a1a",
    "secondary": "#333333",
    "accent": "#f5f5f5",
    "text": "#1a1a1a",
    "background": "#ffffff",
}


@dataclass(frozen=True)
class ColorTheme:
    """
    A named palette of five ``#rrggbb`` colors.

    ``source`` records where the palette came from: a preset picked from
    :data:`COLOR_THEMES` or colors edited by hand.
    """

    name: str
    primary: str = DEFAULT_COLORS["primary"]
    secondary: str = DEFAULT_COLORS["secondary"]
    accent: str = DEFAULT_COLORS["accent"]
    text: str = DEFAULT_COLORS["text"]
    background: str = DEFAULT_COLORS["background"]
    source: str = PRESET

    @property
    def is_custom(self) -> bool:
        return self.source == CUSTOM

    def with_color(self, field: str, value: str) -> "ColorTheme":
        """Return a custom copy of the theme with one color changed."""
        if field not in THEME_FIELDS:
            raise ValueError(f"Unknown theme color: {field}")
        return replace(self, **{field: value}, name="Custom", source=CUSTOM)

    def to_dict(self) -> Dict[str, str]:
        data = {"name": self.name}
        data.update({field: getattr(self, field) for field in THEME_FIELDS})
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], custom: bool = False) -> "ColorTheme":
        values = {field: data[field] for field in THEME_FIELDS if isinstance(data.get(field), str)}
        return cls(name=str(data.get("name") or "Custom"), source=CUSTOM if custom else PRESET, **values)


COLOR_THEMES: Tuple[ColorTheme, ...] = (
    ColorTheme("Clasic"),
    ColorTheme("Albastru profesional", "#1e3a8a", "#3b82f6", "#dbeafe", "#1e293b", "#ffffff"),
    ColorTheme("Verde juridic", "#14532d", "#16a34a", "#dcfce7", "#1a2e05", "#ffffff"),
    ColorTheme("Bordo elegant", "#7f1d1d", "#b91c1c", "#fee2e2", "#27110f", "#ffffff"),
    ColorTheme("Gri modern", "#374151", "#6b7280", "#f3f4f6", "#111827", "#ffffff"),
    ColorTheme("Crem", "#5b4636", "#8b6f47", "#f1e7d3", "#3e2f23", "#fdf8ef"),
)

DEFAULT_THEME = COLOR_THEMES[0]


def find_preset(name: str) -> Optional[ColorTheme]:
    for theme in COLOR_THEMES:
        if theme.name == name:
            return theme
    return None


def resolve_theme(theme: Optional[ColorTheme]) -> ColorTheme:
    """
    Return a theme whose every color is a valid ``#rrggbb`` value.

    Missing or malformed fields fall back one by one to the neutral defaults;
    the name and source of the input are kept.
    """
    if theme is None:
        return DEFAULT_THEME
    resolved = {
        field: normalize_hex(getattr(theme, field, None)) or DEFAULT_COLORS[field]
        for field in THEME_FIELDS
    }
    return replace(theme, **resolved)
