"""
Tests for formatting options, themes and color helpers.
"""

import pytest

from caselib_bundle.exceptions import ProjectError
from caselib_bundle.models.formatting import (
    FormattingOptions,
    default_cover_formatting,
    default_opis_formatting,
)
from caselib_bundle.models.theme import (
    COLOR_THEMES,
    DEFAULT_THEME,
    ColorTheme,
    find_preset,
    resolve_theme,
)
from caselib_bundle.utils.color_utils import normalize_hex, to_color, with_alpha
from caselib_bundle.utils.units import mm_to_points, points_to_mm


class TestFormattingDefaults:

    def test_opis_defaults(self):
        options = default_opis_formatting()
        assert options.alignment == "left"
        assert options.margin_top == 20.0
        assert options.show_page_numbers
        assert options.heading_format is None

    def test_cover_defaults(self):
        options = default_cover_formatting()
        assert options.alignment == "center"
        assert options.heading_text(3) == "ANEXA 3"
        assert options.heading_font_size == 28.0

    def test_heading_text_template(self):
        options = FormattingOptions(heading_format="Anexa nr. {n} la cerere")
        assert options.heading_text(12) == "Anexa nr. 12 la cerere"

    @pytest.mark.parametrize("add_stamp,text,expected", [
        (True, "Anexa {n}", True),
        (True, "   ", False),
        (False, "Anexa {n}", False),
    ])
    def test_stamp_enabled(self, add_stamp, text, expected):
        assert FormattingOptions(add_stamp=add_stamp, stamp_text=text).stamp_enabled is expected


class TestFormattingSerialization:

    def test_to_dict_uses_project_keys(self):
        data = FormattingOptions(font_size=14, show_page_numbers=False).to_dict()
        assert data["fontSize"] == 14
        assert data["showPageNumbers"] is False
        assert "logoFile" not in data
        assert "colorTheme" not in data

    def test_logo_bytes_not_persisted(self):
        data = FormattingOptions(logo_path="logo.png", logo_file=b"\x89PNG").to_dict()
        assert data["logoPath"] == "logo.png"
        assert b"\x89PNG" not in repr(data).encode()

    def test_round_trip_with_preset(self):
        preset = find_preset("Verde juridic")
        options = FormattingOptions(alignment="right", theme=preset, add_stamp=True, stamp_text="A{n}")
        restored = FormattingOptions.from_dict(options.to_dict())
        assert restored == options
        assert restored.theme is preset

    def test_round_trip_with_custom_theme(self):
        theme = DEFAULT_THEME.with_color("primary", "#123456")
        data = FormattingOptions(theme=theme).to_dict()
        assert data["useCustomColors"] is True

        restored = FormattingOptions.from_dict(data)
        assert restored.theme.is_custom
        assert restored.theme.primary == "#123456"

    def test_missing_keys_keep_defaults(self):
        restored = FormattingOptions.from_dict({"fontSize": 9}, default_cover_formatting())
        assert restored.font_size == 9
        assert restored.alignment == "center"

    def test_none_returns_defaults(self):
        assert FormattingOptions.from_dict(None) == FormattingOptions()


class TestThemes:

    def test_presets_are_valid(self):
        assert len(COLOR_THEMES) == 6
        for theme in COLOR_THEMES:
            assert resolve_theme(theme) == theme

    def test_with_color_rejects_unknown_field(self):
        with pytest.raises(ValueError):
            DEFAULT_THEME.with_color("border", "#000000")

    def test_resolve_none(self):
        assert resolve_theme(None) == DEFAULT_THEME

    def test_resolve_fills_invalid_fields(self):
        theme = ColorTheme("Broken", primary="blue", background="#FDF8EF")
        resolved = resolve_theme(theme)
        assert resolved.primary == "#1a1a1a"
        assert resolved.background == "#fdf8ef"
        assert resolved.name == "Broken"

    def test_from_dict_partial(self):
        theme = ColorTheme.from_dict({"name": "Mine", "accent": "#eeeeee"}, custom=True)
        assert theme.accent == "#eeeeee"
        assert theme.primary == "#1a1a1a"
        assert theme.is_custom


class TestColorUtils:

    @pytest.mark.parametrize("value,expected", [
        ("#ABCDEF", "#abcdef"),
        ("abcdef", "#abcdef"),
        ("#abc", None),
        ("red", None),
        (None, None),
    ])
    def test_normalize_hex(self, value, expected):
        assert normalize_hex(value) == expected

    def test_to_color_fallback(self):
        assert to_color("nonsense", "#ffffff").hexval() == "0xffffff"

    def test_with_alpha(self):
        assert with_alpha("#000000", 0.5).alpha == 0.5


class TestUnits:

    def test_mm_to_points(self):
        assert mm_to_points(25.4) == pytest.approx(72.0)

    def test_points_to_mm(self):
        assert points_to_mm(mm_to_points(20)) == pytest.approx(20)


class TestFormattingConversion:

    def test_numeric_strings_converted(self):
        options = FormattingOptions.from_dict({"marginTop": "20", "fontSize": "11.5", "logoSize": 90})
        assert options.margin_top == 20.0
        assert options.font_size == 11.5
        assert isinstance(options.logo_size, float)

    def test_boolean_values(self):
        options = FormattingOptions.from_dict({"bold": "true", "showPageNumbers": 0, "addStamp": True})
        assert options.bold is True
        assert options.show_page_numbers is False
        assert options.add_stamp is True

    def test_optional_fields_accept_null(self):
        options = FormattingOptions.from_dict({"headingFormat": None, "logoPath": None},
                                              default_cover_formatting())
        assert options.heading_format is None
        assert options.heading_text(2) == "ANEXA 2"

    @pytest.mark.parametrize("data", [
        {"marginTop": "twenty"},
        {"fontSize": 0},
        {"fontSize": True},
        {"marginLeft": None},
        {"bold": "maybe"},
        {"alignment": "justify"},
        {"stampPosition": "middle"},
        {"fontFamily": 12},
        {"logoSize": "nan"},
    ])
    def test_invalid_values_raise(self, data):
        with pytest.raises(ProjectError):
            FormattingOptions.from_dict(data)
