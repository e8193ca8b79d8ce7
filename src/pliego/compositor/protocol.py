"""PageCompositor protocol: the drawing surface the renderer talks to.

The renderer never touches a PDF library directly. Everything it draws goes
through this protocol, which keeps a cursor, a left margin and a current
font. ``FpdfCompositor`` is the built-in implementation; tests use a
recording double.

Units are PDF points throughout. Cell alignment strings follow the fpdf
convention ("L", "C", "R", optionally with "B" for bottom), border strings
are "1" (full frame) or any of "L", "R", "T", "B".

Example:
    from pliego.compositor.protocol import PageCompositor

    def stamp(page: PageCompositor, text: str) -> None:
        page.draw_cell(page.string_width(text) + 12, 14, text, border="1")

"""

from __future__ import annotations

from typing import NamedTuple, Protocol, runtime_checkable

from pliego.styles import Color, Styler


class Margins(NamedTuple):
    """Page margins in points."""

    left: float
    top: float
    right: float
    bottom: float


@runtime_checkable
class PageCompositor(Protocol):
    """Cursor-based page drawing surface."""

    # Text and style

    def set_style(self, styler: Styler) -> None:
        """Select font, flags, size, text color and fill color."""
        ...

    def set_text_color(self, color: Color) -> None: ...

    def write_text(self, height: float, text: str) -> None:
        """Write flowing text at the cursor, wrapping at the right margin."""
        ...

    def write_link(self, height: float, text: str, destination: str) -> None: ...

    def string_width(self, text: str) -> float:
        """Width of ``text`` in the current font."""
        ...

    # Cells

    def draw_cell(
        self,
        width: float,
        height: float,
        text: str = "",
        *,
        border: str = "",
        align: str = "",
        fill: bool = False,
    ) -> None:
        """Draw a single-line cell and move the cursor to its right edge."""
        ...

    def draw_multiline_cell(
        self, width: float, height: float, text: str, *, fill: bool = True
    ) -> None:
        """Draw a wrapping cell; width 0 extends it to the right margin."""
        ...

    # Cursor

    def line_break(self, height: float | None = None) -> None:
        """Move to the left margin of the next line."""
        ...

    def get_cursor(self) -> tuple[float, float]: ...

    def move_cursor(self, x: float | None = None, y: float | None = None) -> None: ...

    # Geometry and pages

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def set_left_margin(self, value: float) -> None: ...

    def get_margins(self) -> Margins: ...

    def page_size(self) -> tuple[float, float]: ...

    def new_page(self) -> None: ...

    def draw_image(self, path: str) -> None:
        """Place an image at the cursor, scaled to fit the text width.

        Raises:
            OSError: If the file is not a usable image
        """
        ...

    def finalize(self, path: str) -> None:
        """Write the finished document to ``path``."""
        ...
