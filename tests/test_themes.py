"""Tests for the built-in themes and style sheet construction."""

import pytest

from pliego.errors import ConfigError
from pliego.styles import Color, Styler
from pliego.themes import Theme, build_stylesheet, dark_stylesheet, light_stylesheet


class TestBuiltinThemes:
    def test_light_heading_sizes(self) -> None:
        sheet = light_stylesheet()
        assert [sheet.heading(level).size for level in range(1, 7)] == [24, 22, 20, 18, 16, 14]
        assert all(sheet.heading(level).style == "b" for level in range(1, 7))
        assert sheet.h1.spacing == 5

    def test_heading_level_is_clamped(self) -> None:
        sheet = light_stylesheet()
        assert sheet.heading(0) == sheet.h1
        assert sheet.heading(9) == sheet.h6

    def test_light_body(self) -> None:
        sheet = light_stylesheet()
        assert sheet.normal == Styler("Helvetica", "", 12, 2, Color(0, 0, 0), Color(255, 255, 255))
        assert sheet.blockquote.style == "i"
        assert sheet.code.font == "Courier"
        assert sheet.background == Color(255, 255, 255)

    def test_dark_background(self) -> None:
        sheet = dark_stylesheet()
        assert sheet.background == Color(27, 27, 27)
        assert sheet.h2.text_color == Color(100, 149, 237)
        assert sheet.normal.text_color == Color(169, 169, 169)

    def test_theme_parse(self) -> None:
        assert Theme.parse(" Dark ") is Theme.DARK
        assert Theme.parse(Theme.LIGHT) is Theme.LIGHT
        with pytest.raises(ConfigError):
            Theme.parse("sepia")


class TestBuildStylesheet:
    def test_font_family_skips_monospace(self) -> None:
        sheet = build_stylesheet(Theme.LIGHT, font_family="Times")
        assert sheet.normal.font == "Times"
        assert sheet.h3.font == "Times"
        assert sheet.code.font == "Courier"
        assert sheet.backtick.font == "Courier"

    def test_default_style_replaces_normal(self) -> None:
        custom = Styler(font="Times", size=11)
        sheet = build_stylesheet(Theme.LIGHT, default_style=custom)
        assert sheet.normal is custom

    def test_specific_override_beats_general(self) -> None:
        general = Styler(font="Times", size=30)
        specific = Styler(font="Courier", size=8)
        sheet = build_stylesheet(
            Theme.LIGHT, overrides={"h2": specific, "heading": general}
        )
        assert sheet.h1 == general
        assert sheet.h2 == specific
        assert sheet.h6 == general

    def test_table_override_covers_header_and_body(self) -> None:
        styler = Styler(size=9)
        sheet = build_stylesheet(Theme.DARK, overrides={"table": styler})
        assert sheet.table_header == styler
        assert sheet.table_body == styler

    def test_unknown_category_raises(self) -> None:
        with pytest.raises(ConfigError, match="footnote"):
            build_stylesheet(Theme.LIGHT, overrides={"footnote": Styler()})
