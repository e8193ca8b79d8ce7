"""Render configuration for pliego.

RenderConfig is an immutable bundle of everything a caller may decide before
rendering starts: theme, page geometry, fonts, code highlighting, link
resolution and style overrides. One config can be shared by any number of
renderers.

Usage:
    from pliego import PdfRenderer, RenderConfig, Theme

    config = RenderConfig(theme=Theme.DARK, hr_as_page_break=True)
    with PdfRenderer(config) as renderer:
        renderer.process(source, "slides.pdf")

    # From a plain mapping (e.g. a YAML or TOML file)
    config = RenderConfig.from_dict({
        "theme": "dark",
        "style_overrides": {"heading": {"font": "Times"}},
    })

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pliego.errors import ConfigError
from pliego.styles import Styler
from pliego.themes import CATEGORY_FIELDS, STYLE_CATEGORIES, StyleSheet, Theme, build_stylesheet

PAGE_SIZES = frozenset({"a3", "a4", "a5", "letter", "legal"})
ORIENTATIONS = frozenset({"portrait", "landscape"})
UNSUPPORTED_POLICIES = frozenset({"raise", "skip"})


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        theme: Light or dark default styles
        page_size: "A3", "A4", "A5", "Letter" or "Legal"
        orientation: "portrait" or "landscape"
        font_family: Replaces the family of every non-monospace style
        font_file: TTF file registered for ``font_family`` (enables Unicode text)
        default_style: Replaces the normal body style outright
        highlight_dir: Directory of ``<language>.yaml`` highlight definitions
        hr_as_page_break: Horizontal rules start a new page (slide decks)
        base_url: Base for relative link and image destinations
        style_overrides: Category name -> Styler, applied over the theme
        boxed_code_spans: Draw code spans as filled boxes in the code style
        blockquote_fill: Draw block quote text as filled multi-line cells
        on_unsupported: "raise" or "skip" for node kinds the renderer lacks
        title: Document title (PDF metadata and footer)
        author: Document author (PDF metadata and footer)
        footer: Draw an author / title / page number footer on every page
        image_timeout: Seconds allowed for each remote image download

    """

    theme: Theme = Theme.LIGHT
    page_size: str = "A4"
    orientation: str = "portrait"
    font_family: str | None = None
    font_file: str | None = None
    default_style: Styler | None = None
    highlight_dir: str | None = None
    hr_as_page_break: bool = False
    base_url: str | None = None
    style_overrides: Mapping[str, Styler] = field(default_factory=dict)
    boxed_code_spans: bool = False
    blockquote_fill: bool = False
    on_unsupported: str = "raise"
    title: str = ""
    author: str = ""
    footer: bool = False
    image_timeout: float = 10.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "theme", Theme.parse(self.theme))
        if self.page_size.lower() not in PAGE_SIZES:
            raise ConfigError(f"Unknown page size: {self.page_size!r}")
        if self.orientation.lower() not in ORIENTATIONS:
            raise ConfigError(f"Unknown orientation: {self.orientation!r}")
        if self.on_unsupported not in UNSUPPORTED_POLICIES:
            raise ConfigError(
                f"on_unsupported must be 'raise' or 'skip', got {self.on_unsupported!r}"
            )
        unknown = set(self.style_overrides) - STYLE_CATEGORIES
        if unknown:
            raise ConfigError(f"Unknown style categories: {', '.join(sorted(unknown))}")
        if self.font_file and not self.font_family:
            raise ConfigError("font_file requires font_family")
        # Freeze the overrides so the config stays immutable.
        object.__setattr__(self, "style_overrides", MappingProxyType(dict(self.style_overrides)))

    def stylesheet(self) -> StyleSheet:
        """Build the style sheet this configuration describes."""
        return build_stylesheet(
            self.theme,
            font_family=self.font_family,
            default_style=self.default_style,
            overrides=self.style_overrides,
        )

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> RenderConfig:
        """Create RenderConfig from a dictionary.

        Useful when configuration comes from external sources (YAML, TOML,
        command-line options). Only keys that are RenderConfig fields are
        used; unknown keys are silently ignored.

        ``theme`` may be a string. ``default_style`` and each value of
        ``style_overrides`` may be a mapping of Styler fields; override
        mappings start from the theme's style for that category.

        Args:
            config_dict: Dictionary with config values. Keys should match
                RenderConfig attribute names.

        Returns:
            New RenderConfig instance with values from dict.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "theme": "dark",
            ...     "hr_as_page_break": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.theme
            <Theme.DARK: 'dark'>

        """
        valid_fields = {f for f in cls.__dataclass_fields__}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}

        theme = Theme.parse(filtered.get("theme", Theme.LIGHT))
        filtered["theme"] = theme
        defaults = build_stylesheet(theme, font_family=filtered.get("font_family"))

        default_style = filtered.get("default_style")
        if isinstance(default_style, Mapping):
            filtered["default_style"] = Styler.from_dict(dict(default_style), base=defaults.normal)

        overrides = filtered.get("style_overrides")
        if overrides:
            unknown = set(overrides) - STYLE_CATEGORIES
            if unknown:
                raise ConfigError(f"Unknown style categories: {', '.join(sorted(unknown))}")
            filtered["style_overrides"] = _resolve_overrides(overrides, defaults)
        return cls(**filtered)


def _resolve_overrides(overrides: Mapping[str, Any], defaults: StyleSheet) -> dict[str, Styler]:
    """Turn mapping overrides into Stylers based on each field's theme style.

    A mapping under a general category ("heading", "table") fans out to its
    fields so that e.g. each heading level keeps its own size. Categories are
    visited general first, so specific entries win.
    """
    resolved: dict[str, Styler] = {}
    for category, fields in CATEGORY_FIELDS.items():
        if category not in overrides:
            continue
        value = overrides[category]
        if not isinstance(value, Mapping):
            for name in fields:
                resolved.pop(name, None)
            resolved[category] = value
            continue
        for name in fields:
            resolved[name] = Styler.from_dict(dict(value), base=getattr(defaults, name))
    return resolved


DEFAULT_CONFIG = RenderConfig()

__all__ = [
    "DEFAULT_CONFIG",
    "ORIENTATIONS",
    "PAGE_SIZES",
    "RenderConfig",
]
