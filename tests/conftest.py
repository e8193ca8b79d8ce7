"""Shared fixtures: a compositor double that records every drawing call."""

from __future__ import annotations

from typing import Any, NamedTuple

import pytest

from pliego import ImageResolver, PdfRenderer, RenderConfig
from pliego.compositor.protocol import Margins
from pliego.styles import Color, Styler

PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89
MARGIN = 28.35


class Call(NamedTuple):
    name: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]


class RecordingCompositor:
    """PageCompositor double with a simple geometry model.

    Strings are ``0.5 * size`` points per character wide, so with the default
    12 pt body style one em ("m") is 6 points.
    """

    def __init__(self) -> None:
        self.calls: list[Call] = []
        self.left = MARGIN
        self.top = MARGIN
        self.right = MARGIN
        self.bottom = MARGIN
        self.x = MARGIN
        self.y = MARGIN
        self.style = Styler()
        self.text_color = self.style.text_color
        self.pages = 1
        self.writes: list[tuple[str, Styler]] = []
        self.finalized: str | None = None

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append(Call(name, args, kwargs))

    def named(self, name: str) -> list[Call]:
        return [c for c in self.calls if c.name == name]

    def names(self) -> list[str]:
        return [c.name for c in self.calls]

    # Text and style

    def set_style(self, styler: Styler) -> None:
        self._record("set_style", styler)
        self.style = styler
        self.text_color = styler.text_color

    def set_text_color(self, color: Color) -> None:
        self._record("set_text_color", color)
        self.text_color = color

    def write_text(self, height: float, text: str) -> None:
        self._record("write_text", height, text)
        self.writes.append((text, self.style))
        self.x += self.string_width(text)

    def write_link(self, height: float, text: str, destination: str) -> None:
        self._record("write_link", height, text, destination)
        self.writes.append((text, self.style))
        self.x += self.string_width(text)

    def string_width(self, text: str) -> float:
        return len(text) * self.style.size * 0.5

    # Cells

    def draw_cell(self, width, height, text="", *, border="", align="", fill=False) -> None:
        self._record("draw_cell", width, height, text, border=border, align=align, fill=fill)
        self.x += width

    def draw_multiline_cell(self, width, height, text, *, fill=True) -> None:
        self._record("draw_multiline_cell", width, height, text, fill=fill)
        self.x = self.left
        self.y += height * (text.count("\n") + 1)

    # Cursor

    def line_break(self, height=None) -> None:
        self._record("line_break", height)
        self.x = self.left
        self.y += height or 0

    def get_cursor(self) -> tuple[float, float]:
        return self.x, self.y

    def move_cursor(self, x=None, y=None) -> None:
        self._record("move_cursor", x, y)
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y

    # Geometry and pages

    def draw_line(self, x1, y1, x2, y2) -> None:
        self._record("draw_line", x1, y1, x2, y2)

    def set_left_margin(self, value: float) -> None:
        self._record("set_left_margin", value)
        self.left = value
        self.x = max(self.x, value)

    def get_margins(self) -> Margins:
        return Margins(self.left, self.top, self.right, self.bottom)

    def page_size(self) -> tuple[float, float]:
        return PAGE_WIDTH, PAGE_HEIGHT

    def new_page(self) -> None:
        self._record("new_page")
        self.pages += 1
        self.x, self.y = self.left, self.top

    def draw_image(self, path: str) -> None:
        self._record("draw_image", path)

    def finalize(self, path: str) -> None:
        self._record("finalize", path)
        self.finalized = path


@pytest.fixture
def compositor() -> RecordingCompositor:
    return RecordingCompositor()


@pytest.fixture
def make_renderer():
    """Build a renderer drawing on a fresh RecordingCompositor."""

    def _make(**options: Any) -> PdfRenderer:
        return PdfRenderer(
            RenderConfig(**options),
            compositor=RecordingCompositor(),
            image_resolver=ImageResolver(options.get("base_url")),
        )

    return _make


@pytest.fixture
def render(make_renderer):
    """Render markdown with config options; returns the renderer."""

    def _render(source: str, **options: Any) -> PdfRenderer:
        renderer = make_renderer(**options)
        renderer.run(source)
        return renderer

    return _render
