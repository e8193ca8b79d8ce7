"""Style contexts for pliego.

A Styler bundles everything the compositor needs to draw a run of text:
font family, style flags, size, line spacing, text color and fill color.
Stylers are frozen; every change produces a new instance, so a style taken
from one container frame can never be altered through another.

Style flags:
    The ``style`` field is a flag string over ``b`` (bold), ``i`` (italic)
    and ``u`` (underline), always kept in that order and without repeats.
    Flags are a set, not a counter: applying bold twice and removing it once
    leaves no bold.

Example:
    >>> from pliego.styles import Styler
    >>> base = Styler(font="Helvetica", size=12, spacing=2)
    >>> base.with_flag("b").with_flag("i").with_flag("b").style
    'bi'
    >>> base.with_flag("b").with_flag("b").without_flag("b").style
    ''
    >>> base.line_height
    14

"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, NamedTuple

from pliego.errors import ConfigError

STYLE_FLAGS = "biu"


class Color(NamedTuple):
    """An RGB color with 0-255 components."""

    red: int
    green: int
    blue: int


# Named colors used by the built-in themes and accepted in configuration.
NAMED_COLORS: dict[str, Color] = {
    "black": Color(0, 0, 0),
    "white": Color(255, 255, 255),
    "eerieblack": Color(27, 27, 27),
    "darkgray": Color(169, 169, 169),
    "darkgrey": Color(169, 169, 169),
    "gray": Color(128, 128, 128),
    "grey": Color(128, 128, 128),
    "lightgray": Color(211, 211, 211),
    "lightgrey": Color(211, 211, 211),
    "silver": Color(192, 192, 192),
    "cornflowerblue": Color(100, 149, 237),
    "blue": Color(0, 0, 255),
    "navy": Color(0, 0, 128),
    "red": Color(255, 0, 0),
    "green": Color(0, 128, 0),
    "orange": Color(255, 165, 0),
    "magenta": Color(255, 0, 255),
    "cyan": Color(0, 255, 255),
}


def lookup_color(name: str) -> Color:
    """Resolve a color name (case-insensitive) or a ``#rrggbb`` string.

    Raises:
        ConfigError: If the name is unknown or the hex string is malformed
    """
    key = name.strip().lower()
    if key.startswith("#") and len(key) == 7:
        try:
            return Color(int(key[1:3], 16), int(key[3:5], 16), int(key[5:7], 16))
        except ValueError:
            raise ConfigError(f"Invalid hex color: {name!r}") from None
    try:
        return NAMED_COLORS[key]
    except KeyError:
        raise ConfigError(f"Unknown color name: {name!r}") from None


def to_color(value: Color | str | tuple[int, int, int] | list[int]) -> Color:
    """Coerce a color name, hex string or RGB sequence into a Color."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return lookup_color(value)
    if len(value) != 3:
        raise ConfigError(f"Color needs three components, got {value!r}")
    return Color(*(int(c) for c in value))


def normalize_flags(flags: str) -> str:
    """Return flags in canonical order, lowercased and without repeats.

    Unknown characters are dropped.
    """
    lowered = flags.lower()
    return "".join(f for f in STYLE_FLAGS if f in lowered)


@dataclass(frozen=True, slots=True)
class Styler:
    """Immutable text style.

    Attributes:
        font: Font family name as known to the compositor
        style: Flag string over "b", "i", "u" (canonical order)
        size: Font size in points
        spacing: Extra line spacing in points
        text_color: Color of the glyphs
        fill_color: Background color used by filled cells

    """

    font: str = "Helvetica"
    style: str = ""
    size: float = 12
    spacing: float = 2
    text_color: Color = Color(0, 0, 0)
    fill_color: Color = Color(255, 255, 255)

    def __post_init__(self) -> None:
        canonical = normalize_flags(self.style)
        if canonical != self.style:
            object.__setattr__(self, "style", canonical)

    @property
    def line_height(self) -> float:
        """Height of one line of text: size plus spacing."""
        return self.size + self.spacing

    def has_flag(self, flag: str) -> bool:
        return flag in self.style

    def with_flag(self, flag: str) -> Styler:
        """Derive a style with ``flag`` present (no-op if already set)."""
        if flag in self.style:
            return self
        return dataclasses.replace(self, style=self.style + flag)

    def without_flag(self, flag: str) -> Styler:
        """Derive a style with every occurrence of ``flag`` removed."""
        if flag not in self.style:
            return self
        return dataclasses.replace(self, style=self.style.replace(flag, ""))

    def replace(self, **changes: Any) -> Styler:
        """Derive a style with other fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: Styler | None = None) -> Styler:
        """Create a Styler from a mapping, filling gaps from ``base``.

        Color fields accept names, ``#rrggbb`` strings or RGB sequences.
        Unknown keys are ignored.

        Example:
            >>> Styler.from_dict({"font": "Times", "text_color": "navy"}).text_color
            Color(red=0, green=0, blue=128)
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        changes = {k: v for k, v in data.items() if k in valid_fields}
        for key in ("text_color", "fill_color"):
            if key in changes:
                changes[key] = to_color(changes[key])
        if base is None:
            return cls(**changes)
        return dataclasses.replace(base, **changes)
