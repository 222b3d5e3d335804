"""Formatting options for the table of contents and cover pages."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ProjectError
from .theme import ColorTheme, find_preset

ALIGNMENTS = ("left", "center", "right")
LOGO_POSITIONS = ("top", "bottom", "left", "right")
STAMP_POSITIONS = (
    "top-left",
    "top-center",
    "top-right",
    "bottom-left",
    "bottom-center",
    "bottom-right",
)

DEFAULT_HEADING_FORMAT = "ANEXA {n}"
DEFAULT_HEADING_FONT_SIZE = 28.0
DEFAULT_LOGO_SIZE = 120.0

# Python attribute -> project file key. ``logo_file`` and ``theme`` are
# handled separately: the former is never persisted, the latter maps onto
# ``colorTheme`` + ``useCustomColors``.
_KEYS = {
    "font_family": "fontFamily",
    "font_size": "fontSize",
    "bold": "bold",
    "alignment": "alignment",
    "margin_top": "marginTop",
    "margin_right": "marginRight",
    "margin_bottom": "marginBottom",
    "margin_left": "marginLeft",
    "show_page_numbers": "showPageNumbers",
    "heading_format": "headingFormat",
    "heading_font_size": "headingFontSize",
    "logo_path": "logoPath",
    "logo_size": "logoSize",
    "logo_position": "logoPosition",
    "add_stamp": "addStamp",
    "stamp_text": "stampText",
    "stamp_position": "stampPosition",
    "stamp_font_size": "stampFontSize",
}

_NUMBER_FIELDS = {"font_size", "margin_top", "margin_right", "margin_bottom", "margin_left",
                  "heading_font_size", "logo_size", "stamp_font_size"}
_POSITIVE_FIELDS = {"font_size", "heading_font_size", "logo_size", "stamp_font_size"}
_BOOL_FIELDS = {"bold", "show_page_numbers", "add_stamp"}
_OPTIONAL_FIELDS = {"heading_format", "heading_font_size", "logo_path"}
_CHOICES = {
    "alignment": ALIGNMENTS,
    "logo_position": LOGO_POSITIONS,
    "stamp_position": STAMP_POSITIONS,
}


def _convert(attr: str, key: str, value: Any) -> Any:
    """Coerce one project-file value to the type of ``attr``; raise ProjectError if impossible."""
    if value is None:
        if attr in _OPTIONAL_FIELDS:
            return None
        raise ProjectError(f"Formatting value '{key}' must not be null")

    if attr in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ProjectError(f"Formatting value '{key}' must be a boolean", repr(value))

    if attr in _NUMBER_FIELDS:
        if isinstance(value, bool):
            raise ProjectError(f"Formatting value '{key}' must be a number", repr(value))
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise ProjectError(f"Formatting value '{key}' must be a number", repr(value)) from exc
        if not math.isfinite(number):
            raise ProjectError(f"Formatting value '{key}' must be finite", repr(value))
        if attr in _POSITIVE_FIELDS and number <= 0:
            raise ProjectError(f"Formatting value '{key}' must be positive", repr(value))
        return number

    if not isinstance(value, str):
        raise ProjectError(f"Formatting value '{key}' must be a string", repr(value))
    choices = _CHOICES.get(attr)
    if choices is not None and value not in choices:
        raise ProjectError(f"Formatting value '{key}' must be one of {', '.join(choices)}", repr(value))
    return value


@dataclass
class FormattingOptions:
    """
    Styling for one family of generated pages.

    Margins are in millimetres; font and logo sizes are in points. The
    opis and the cover pages each get their own instance.
    """

    font_family: str = "Inter"
    font_size: float = 12.0
    bold: bool = False
    alignment: str = "left"
    margin_top: float = 20.0
    margin_right: float = 20.0
    margin_bottom: float = 20.0
    margin_left: float = 20.0
    show_page_numbers: bool = True
    heading_format: Optional[str] = None
    heading_font_size: Optional[float] = None
    logo_path: Optional[str] = None
    logo_file: Optional[bytes] = field(default=None, repr=False)
    logo_size: float = DEFAULT_LOGO_SIZE
    logo_position: str = "top"
    theme: Optional[ColorTheme] = None
    add_stamp: bool = False
    stamp_text: str = ""
    stamp_position: str = "top-right"
    stamp_font_size: float = 10.0

    def heading_text(self, annex_number: int) -> str:
        template = self.heading_format or DEFAULT_HEADING_FORMAT
        return template.replace("{n}", str(annex_number))

    @property
    def stamp_enabled(self) -> bool:
        return bool(self.add_stamp and self.stamp_text and self.stamp_text.strip())

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for attr, key in _KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        if self.theme is not None:
            data["colorTheme"] = self.theme.to_dict()
            data["useCustomColors"] = self.theme.is_custom
        return data

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]],
                  defaults: Optional["FormattingOptions"] = None) -> "FormattingOptions":
        """
        Build options from project-file keys.

        Keys missing from ``data`` keep the value from ``defaults`` (or the
        class defaults); unknown keys are ignored. Values are converted to
        the field types and :class:`ProjectError` is raised for values that
        cannot be.
        """
        base = replace(defaults) if defaults is not None else cls()
        if not data:
            return base

        known = {f.name for f in fields(cls)}
        updates: Dict[str, Any] = {}
        for attr, key in _KEYS.items():
            if key in data and attr in known:
                updates[attr] = _convert(attr, key, data[key])

        theme_data = data.get("colorTheme")
        if isinstance(theme_data, Mapping):
            custom = bool(data.get("useCustomColors"))
            preset = None if custom else find_preset(str(theme_data.get("name", "")))
            updates["theme"] = preset or ColorTheme.from_dict(theme_data, custom=custom)

        return replace(base, **updates)


def default_opis_formatting() -> FormattingOptions:
    return FormattingOptions()


def default_cover_formatting() -> FormattingOptions:
    return FormattingOptions(
        alignment="center",
        heading_format=DEFAULT_HEADING_FORMAT,
        heading_font_size=DEFAULT_HEADING_FONT_SIZE,
        font_size=16.0,
    )
