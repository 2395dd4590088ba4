"""
Unit tests for option resolution.
"""

import json
import logging

import pytest

from timetable_toolkit.exporter.options import (
    DEFAULT_OPTIONS,
    RenderOptions,
    load_options,
    parse_color,
    resolve_options,
)


class TestResolveOptions:
    """Tests for resolve_options."""

    def test_resolve_when_no_overrides_then_defaults(self):
        options = resolve_options()

        assert options == DEFAULT_OPTIONS
        assert options.header_font == "Amiri"
        assert options.header_font_size == 14
        assert options.content_font_size == 12
        assert options.theme_color == (41, 128, 185)

    def test_resolve_when_partial_overrides_then_other_fields_default(self):
        options = resolve_options({"header_font_size": 18})

        assert options.header_font_size == 18
        assert options.day_font_size == 12
        assert options.content_text_color == (0, 0, 0)

    def test_resolve_when_camel_case_keys_then_accepted(self):
        options = resolve_options({"headerFontSize": 16, "dayTextColor": [10, 20, 30]})

        assert options.header_font_size == 16
        assert options.day_text_color == (10, 20, 30)

    def test_resolve_when_unknown_key_then_ignored(self, caplog):
        with caplog.at_level(logging.DEBUG):
            options = resolve_options({"pageColour": "red", "content_font_size": 10})

        assert options.content_font_size == 10
        assert "pageColour" in caplog.text

    def test_resolve_when_invalid_value_then_default_kept_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            options = resolve_options({"header_font_size": -3, "theme_color": "not-a-colour"})

        assert options.header_font_size == 14
        assert options.theme_color == (41, 128, 185)
        assert "header_font_size" in caplog.text

    @pytest.mark.parametrize("value", ["nan", "inf", float("-inf"), 0])
    def test_resolve_when_size_not_finite_positive_then_default_kept(self, value, caplog):
        with caplog.at_level(logging.WARNING):
            options = resolve_options({"contentFontSize": value, "headerFontSize": value})

        assert options.content_font_size == 12
        assert options.header_font_size == 14
        assert "content_font_size" in caplog.text

    def test_resolve_when_none_value_then_default_kept(self):
        assert resolve_options({"theme_color": None}).theme_color == (41, 128, 185)

    def test_resolve_when_resolved_record_then_returned_unchanged(self):
        options = RenderOptions(header_font="Helvetica")

        assert resolve_options(options) is options

    def test_resolve_when_custom_font_then_selection_uses_it(self):
        options = resolve_options({"customHeaderFont": "/fonts/Custom.ttf"})

        assert options.font_selection("header") == "/fonts/Custom.ttf"
        assert options.font_selection("content") == "Amiri"

    def test_resolve_when_blank_custom_font_then_builtin_used(self):
        options = resolve_options({"custom_day_font": "  "})

        assert options.custom_day_font is None
        assert options.font_selection("day") == "Amiri"

    def test_resolve_when_float_size_then_kept(self):
        assert resolve_options({"day_font_size": "10.5"}).day_font_size == 10.5


class TestParseColor:
    """Tests for parse_color."""

    @pytest.mark.parametrize("value,expected", [
        ("#2980b9", (41, 128, 185)),
        ("white", (255, 255, 255)),
        ([1, 2, 3], (1, 2, 3)),
        ((0, 0, 0), (0, 0, 0)),
    ])
    def test_parse_when_valid_then_rgb(self, value, expected):
        assert parse_color(value) == expected

    @pytest.mark.parametrize("value", [[1, 2], [0, 0, 256], "nonsense"])
    def test_parse_when_invalid_then_raises(self, value):
        with pytest.raises(ValueError):
            parse_color(value)


class TestLoadOptions:
    """Tests for load_options."""

    def test_load_when_object_then_returns_dict(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"themeColor": "#000000"}), encoding="utf-8")

        assert load_options(path) == {"themeColor": "#000000"}

    def test_load_when_not_object_then_raises(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_options(path)
