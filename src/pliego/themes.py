"""Built-in themes and the style sheet they produce.

A StyleSheet holds one Styler per text category plus the page background.
Themes select the defaults; configuration may then override individual
categories before rendering starts. The sheet is frozen once built.

Example:
    >>> from pliego.themes import Theme, build_stylesheet
    >>> sheet = build_stylesheet(Theme.DARK)
    >>> sheet.heading(2).size
    22

"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from pliego.errors import ConfigError
from pliego.styles import Color, Styler, lookup_color

MONOSPACE_FONTS = frozenset({"courier"})


class Theme(Enum):
    """Color theme for the rendered document."""

    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value: Theme | str) -> Theme:
        """Accept a Theme or its (case-insensitive) name."""
        if isinstance(value, Theme):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigError(f"Unknown theme: {value!r} (expected 'light' or 'dark')") from None


@dataclass(frozen=True, slots=True)
class StyleSheet:
    """Default Stylers for every text category.

    Attributes:
        normal: Body text
        link: Hyperlink text
        backtick: Code spans and unhighlighted code blocks
        code: Boxed code spans and highlighted code blocks
        blockquote: Block quote text
        h1..h6: Heading levels
        table_header: Table header cells
        table_body: Table body cells
        background: Page background color

    """

    normal: Styler
    link: Styler
    backtick: Styler
    code: Styler
    blockquote: Styler
    h1: Styler
    h2: Styler
    h3: Styler
    h4: Styler
    h5: Styler
    h6: Styler
    table_header: Styler
    table_body: Styler
    background: Color

    def heading(self, level: int) -> Styler:
        """Styler for heading ``level`` (clamped to 1-6)."""
        level = min(max(level, 1), 6)
        return getattr(self, f"h{level}")


def _headings(text: Color, fill: Color, h2_text: Color | None = None) -> dict[str, Styler]:
    sizes = {"h1": 24, "h2": 22, "h3": 20, "h4": 18, "h5": 16, "h6": 14}
    return {
        name: Styler(
            font="Helvetica",
            style="b",
            size=size,
            spacing=5,
            text_color=h2_text if (name == "h2" and h2_text) else text,
            fill_color=fill,
        )
        for name, size in sizes.items()
    }


def light_stylesheet() -> StyleSheet:
    """Black on white, grey code blocks."""
    black = lookup_color("black")
    white = lookup_color("white")
    code_text = Color(37, 27, 14)
    code_fill = Color(200, 200, 200)
    return StyleSheet(
        normal=Styler("Helvetica", "", 12, 2, black, white),
        link=Styler("Helvetica", "b", 12, 2, lookup_color("cornflowerblue"), white),
        backtick=Styler("Courier", "", 12, 2, code_text, code_fill),
        code=Styler("Courier", "", 12, 2, code_text, code_fill),
        blockquote=Styler("Helvetica", "i", 12, 2, black, white),
        table_header=Styler("Helvetica", "b", 12, 2, black, Color(180, 180, 180)),
        table_body=Styler("Helvetica", "", 12, 2, black, Color(240, 240, 240)),
        background=white,
        **_headings(black, white),
    )


def dark_stylesheet() -> StyleSheet:
    """Dark grey text on an eerie-black page."""
    black = lookup_color("black")
    gray = lookup_color("darkgray")
    code_fill = Color(32, 35, 37)
    return StyleSheet(
        normal=Styler("Helvetica", "", 12, 2, gray, black),
        link=Styler("Helvetica", "b", 12, 2, lookup_color("cornflowerblue"), black),
        backtick=Styler("Courier", "", 12, 2, lookup_color("lightgrey"), code_fill),
        code=Styler("Courier", "", 12, 2, lookup_color("lightgrey"), code_fill),
        blockquote=Styler("Helvetica", "i", 12, 2, gray, black),
        table_header=Styler("Helvetica", "b", 12, 2, gray, Color(27, 27, 27)),
        table_body=Styler("Helvetica", "", 12, 2, Color(128, 128, 128), Color(200, 200, 200)),
        background=lookup_color("eerieblack"),
        **_headings(gray, black, h2_text=lookup_color("cornflowerblue")),
    )


_THEMES = {
    Theme.LIGHT: light_stylesheet,
    Theme.DARK: dark_stylesheet,
}

# Override categories, general first. A general key fans out to several
# fields; specific keys are applied afterwards and win.
CATEGORY_FIELDS: dict[str, tuple[str, ...]] = {
    "heading": ("h1", "h2", "h3", "h4", "h5", "h6"),
    "table": ("table_header", "table_body"),
    "normal": ("normal",),
    "link": ("link",),
    "backtick": ("backtick",),
    "code": ("code",),
    "blockquote": ("blockquote",),
    "h1": ("h1",),
    "h2": ("h2",),
    "h3": ("h3",),
    "h4": ("h4",),
    "h5": ("h5",),
    "h6": ("h6",),
    "table_header": ("table_header",),
    "table_body": ("table_body",),
}

STYLE_CATEGORIES = frozenset(CATEGORY_FIELDS)


def build_stylesheet(
    theme: Theme,
    *,
    font_family: str | None = None,
    default_style: Styler | None = None,
    overrides: Mapping[str, Styler] | None = None,
) -> StyleSheet:
    """Build the style sheet for ``theme`` with caller adjustments applied.

    Order of application:
        1. Theme defaults
        2. ``font_family`` replaces the family of every non-monospace style
        3. ``default_style`` replaces the normal style
        4. ``overrides`` per category, general categories before specific ones

    Raises:
        ConfigError: If an override names an unknown category
    """
    sheet = _THEMES[theme]()
    changes: dict[str, Styler] = {}

    if font_family:
        for f in dataclasses.fields(StyleSheet):
            styler = getattr(sheet, f.name)
            if isinstance(styler, Styler) and styler.font.lower() not in MONOSPACE_FONTS:
                changes[f.name] = styler.replace(font=font_family)

    if default_style is not None:
        changes["normal"] = default_style

    if overrides:
        unknown = set(overrides) - STYLE_CATEGORIES
        if unknown:
            raise ConfigError(f"Unknown style categories: {', '.join(sorted(unknown))}")
        for category, fields in CATEGORY_FIELDS.items():
            if category in overrides:
                for name in fields:
                    changes[name] = overrides[category]

    if not changes:
        return sheet
    return dataclasses.replace(sheet, **changes)
