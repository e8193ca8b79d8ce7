"""Table rendering with header-measured column widths.

Tables are drawn row by row as they stream past, so column widths cannot
depend on the body. The header row decides them: each header cell is as wide
as its text plus 2 em, and every body cell in that column reuses the width.

Cell text is collected in the cell's frame while the cell is open and drawn
as one cell when it closes, so a cell with several inline styles is measured
and drawn once.

Only one table can be in progress; entering a table inside a table raises
RenderError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pliego.containers import ContainerFrame, FrameKind
from pliego.errors import RenderError, TableShapeError
from pliego.events import Node
from pliego.styles import Styler

if TYPE_CHECKING:
    from pliego.rendering.protocols import RendererHost


@dataclass(slots=True)
class TableState:
    """State of the table being rendered.

    Attributes:
        column_widths: Header cell widths; a list while the header row is
            measured, a tuple once the head section ends
        fill: Whether the current row is shaded
        column: Index of the next cell in the current row

    """

    column_widths: list[float] | tuple[float, ...] = field(default_factory=list)
    fill: bool = False
    column: int = 0

    @property
    def total_width(self) -> float:
        return sum(self.column_widths)

    def add_width(self, width: float) -> None:
        if isinstance(self.column_widths, tuple):
            raise RenderError("Header cell after the table head was closed")
        self.column_widths.append(width)

    def width_for(self, column: int) -> float:
        """Cached width of ``column``.

        Raises:
            TableShapeError: If the header defined fewer columns
        """
        if column >= len(self.column_widths):
            raise TableShapeError(column, len(self.column_widths))
        return self.column_widths[column]


class TableRenderingMixin:
    """Mixin for tables.

    Required Host Attributes:
        - _styles: StyleSheet
        - _pdf: PageCompositor
        - _stack: ContainerStack
        - _table: TableState | None
        - _em: float

    Required Host Methods:
        - _cr() -> None
        - _ensure_line() -> None
        - _trace(source, message) -> None

    """

    def _table_state(self: RendererHost) -> TableState:
        if self._table is None:
            raise RenderError("Table part outside of a table")
        return self._table

    def _push_table_frame(
        self: RendererHost,
        kind: FrameKind,
        style: Styler | None = None,
        *,
        is_header: bool = False,
    ) -> None:
        top = self._stack.peek()
        self._stack.push(
            ContainerFrame(
                kind=kind,
                style=style or top.style,
                left_margin=top.left_margin,
                is_header=is_header,
            )
        )

    def _render_table(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            if self._table is not None:
                raise RenderError("Nested tables are not supported")
            self._trace("Table (entering)")
            self._ensure_line()
            self._table = TableState()
            self._push_table_frame(FrameKind.TABLE, style=self._styles.table_header)
            return

        state = self._table_state()
        self._trace("Table (leaving)", f"width {state.total_width}")
        self._ensure_line()
        self._pdf.draw_cell(state.total_width, 0, "", border="T")
        self._at_line_start = False
        self._stack.pop()
        self._cr()
        self._table = None

    def _render_table_head(self: RendererHost, node: Node, entering: bool) -> None:
        state = self._table_state()
        if entering:
            self._trace("TableHead (entering)")
            state.column_widths = []
            self._push_table_frame(FrameKind.TABLE_HEAD, style=self._styles.table_header)
        else:
            state.column_widths = tuple(state.column_widths)
            self._trace("TableHead (leaving)", f"widths {state.column_widths}")
            self._stack.pop()

    def _render_table_body(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            self._trace("TableBody (entering)")
            self._push_table_frame(FrameKind.TABLE_BODY, style=self._styles.table_body)
        else:
            self._trace("TableBody (leaving)")
            self._ensure_line()
            self._stack.pop()

    def _render_table_row(self: RendererHost, node: Node, entering: bool) -> None:
        state = self._table_state()
        if entering:
            self._trace("TableRow (entering)")
            self._ensure_line()
            state.column = 0
            self._push_table_frame(FrameKind.TABLE_ROW)
        else:
            self._stack.pop()
            self._trace("TableRow (leaving)")
            state.fill = not state.fill

    def _render_table_cell(self: RendererHost, node: Node, entering: bool) -> None:
        state = self._table_state()
        if entering:
            self._trace("TableCell (entering)")
            style = self._styles.table_header if node.is_header else self._styles.table_body
            self._push_table_frame(FrameKind.TABLE_CELL, style=style, is_header=node.is_header)
            return

        frame = self._stack.pop()
        text = "".join(frame.cell_text)
        style = frame.style
        height = style.size + style.spacing
        self._pdf.set_style(style)
        if frame.is_header:
            width = self._pdf.string_width(text) + 2 * self._em
            state.add_width(width)
            self._trace("... table header cell", f"Width={width}, height={height}")
            self._pdf.draw_cell(width, height, text, border="1", align="C", fill=True)
        else:
            width = state.width_for(state.column)
            self._trace("... table body cell", f"Width={width}, height={height}")
            self._pdf.draw_cell(width, height, text, border="LR", align="L", fill=state.fill)
        self._at_line_start = False
        state.column += 1
        self._trace("TableCell (leaving)")
