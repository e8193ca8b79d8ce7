"""Tests for RenderConfig validation and from_dict()."""

import dataclasses

import pytest

from pliego.config import DEFAULT_CONFIG, RenderConfig
from pliego.errors import ConfigError
from pliego.styles import Color, Styler
from pliego.themes import Theme


class TestRenderConfig:
    def test_defaults(self) -> None:
        config = RenderConfig()
        assert config.theme is Theme.LIGHT
        assert config.page_size == "A4"
        assert config.on_unsupported == "raise"
        assert config.image_timeout == 10.0
        assert config == DEFAULT_CONFIG

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.theme = Theme.DARK  # type: ignore[misc]

    def test_theme_string_is_accepted(self) -> None:
        assert RenderConfig(theme="dark").theme is Theme.DARK  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "options",
        [
            {"theme": "sepia"},
            {"page_size": "B5"},
            {"orientation": "diagonal"},
            {"on_unsupported": "ignore"},
            {"style_overrides": {"footnote": Styler()}},
            {"font_file": "font.ttf"},
        ],
    )
    def test_invalid_values_raise(self, options: dict) -> None:
        with pytest.raises(ConfigError):
            RenderConfig(**options)

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            RenderConfig(page_size="B5")

    def test_overrides_are_read_only(self) -> None:
        overrides = {"normal": Styler(size=10)}
        config = RenderConfig(style_overrides=overrides)
        overrides["link"] = Styler()
        assert "link" not in config.style_overrides
        with pytest.raises(TypeError):
            config.style_overrides["link"] = Styler()  # type: ignore[index]

    def test_stylesheet_applies_overrides(self) -> None:
        config = RenderConfig(theme=Theme.DARK, style_overrides={"h1": Styler(size=40)})
        sheet = config.stylesheet()
        assert sheet.h1.size == 40
        assert sheet.background == Color(27, 27, 27)


class TestRenderConfigFromDict:
    def test_basic(self) -> None:
        config = RenderConfig.from_dict({"theme": "dark", "hr_as_page_break": True})
        assert config.theme is Theme.DARK
        assert config.hr_as_page_break is True

    def test_ignores_unknown_keys(self) -> None:
        config = RenderConfig.from_dict({"footer": True, "unknown_key": "ignored"})
        assert config.footer is True

    def test_empty_gives_defaults(self) -> None:
        assert RenderConfig.from_dict({}) == RenderConfig()

    def test_default_style_mapping(self) -> None:
        config = RenderConfig.from_dict({"default_style": {"font": "Times", "text_color": "navy"}})
        assert config.default_style is not None
        assert config.default_style.font == "Times"
        assert config.default_style.size == 12
        assert config.stylesheet().normal.text_color == Color(0, 0, 128)

    def test_general_override_keeps_heading_sizes(self) -> None:
        config = RenderConfig.from_dict({"style_overrides": {"heading": {"font": "Times"}}})
        sheet = config.stylesheet()
        assert [sheet.heading(n).font for n in range(1, 7)] == ["Times"] * 6
        assert [sheet.heading(n).size for n in range(1, 7)] == [24, 22, 20, 18, 16, 14]

    def test_specific_override_wins_over_general(self) -> None:
        config = RenderConfig.from_dict(
            {
                "style_overrides": {
                    "h2": {"text_color": "red"},
                    "heading": {"text_color": "green"},
                }
            }
        )
        sheet = config.stylesheet()
        assert sheet.h1.text_color == Color(0, 128, 0)
        assert sheet.h2.text_color == Color(255, 0, 0)

    def test_override_mapping_uses_theme_defaults(self) -> None:
        config = RenderConfig.from_dict(
            {"theme": "dark", "style_overrides": {"code": {"size": 10}}}
        )
        code = config.stylesheet().code
        assert code.size == 10
        assert code.fill_color == Color(32, 35, 37)

    def test_unknown_override_category_raises(self) -> None:
        with pytest.raises(ConfigError):
            RenderConfig.from_dict({"style_overrides": {"sidebar": {"size": 3}}})
