"""Inline composition: text runs, emphasis, code spans, links and images.

Emphasis and strong never push frames. They swap the top frame's Styler for
a derived one (``with_flag`` on enter, ``without_flag`` on leave), so nested
emphasis composes and repeated emphasis is idempotent:

    **bold *and italic***   ->   ""  "b"  "bi"  "b"  ""

Text destination depends on where the text sits:

    inside a table cell        -> buffered in the cell frame
    top frame is a LINK        -> clickable run to the frame's destination
    block quote, fill enabled  -> filled multi-line cell
    anywhere else              -> flowing text in the top frame's style

Images inside a table cell contribute their alt text to the cell; they are
not drawn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pliego.containers import ContainerFrame, FrameKind
from pliego.events import Node
from pliego.utils.urls import resolve_destination

if TYPE_CHECKING:
    from pliego.rendering.protocols import RendererHost


class InlineRenderingMixin:
    """Mixin for inline nodes.

    Required Host Attributes:
        - _config: RenderConfig
        - _styles: StyleSheet
        - _pdf: PageCompositor
        - _stack: ContainerStack
        - _images: ImageResolver
        - _table: TableState | None
        - _em: float
        - _at_line_start: bool

    Required Host Methods:
        - _cr() -> None
        - _write(style, text) -> None
        - _trace(source, message) -> None
        - _diagnose(kind, message) -> None

    """

    def _open_cell(self: RendererHost) -> ContainerFrame | None:
        """The table cell text is currently collected in, if any."""
        if self._table is None:
            return None
        return self._stack.find(FrameKind.TABLE_CELL)

    def _render_emph(self: RendererHost, node: Node, entering: bool) -> None:
        frame = self._stack.peek()
        if entering:
            self._trace("Emph (entering)")
            frame.style = frame.style.with_flag("i")
        else:
            self._trace("Emph (leaving)")
            frame.style = frame.style.without_flag("i")

    def _render_strong(self: RendererHost, node: Node, entering: bool) -> None:
        frame = self._stack.peek()
        if entering:
            self._trace("Strong (entering)")
            frame.style = frame.style.with_flag("b")
        else:
            self._trace("Strong (leaving)")
            frame.style = frame.style.without_flag("b")

    def _render_del(self: RendererHost, node: Node, entering: bool) -> None:
        self._trace("Del (entering)" if entering else "Del (leaving)", "not handled")

    def _render_html_span(self: RendererHost, node: Node) -> None:
        self._trace("HTMLSpan", node.literal)

    def _render_text(self: RendererHost, node: Node) -> None:
        text = node.literal
        if not text:
            return
        if not self._config.blockquote_fill:
            text = text.replace("\n", " ")
        self._trace("Text", text)
        self._emit_text(text)

    def _emit_text(self: RendererHost, text: str) -> None:
        cell = self._open_cell()
        if cell is not None:
            cell.cell_text.append(text)
            return

        frame = self._stack.peek()
        style = frame.style
        match frame.kind:
            case FrameKind.LINK:
                self._pdf.set_style(style)
                self._pdf.write_link(style.line_height, text, frame.destination or "")
                self._at_line_start = False
            case FrameKind.BLOCK_QUOTE if self._config.blockquote_fill:
                self._trace("Text BlockQuote", text)
                self._pdf.set_style(style)
                self._pdf.draw_multiline_cell(0, style.line_height, text, fill=True)
                self._at_line_start = True
            case _:
                self._write(style, text)

    def _render_soft_break(self: RendererHost, node: Node) -> None:
        self._trace("Softbreak")
        if self._stack.peek().kind is FrameKind.BLOCK_QUOTE and self._config.blockquote_fill:
            # the previous filled cell already ended the line
            return
        self._emit_text(" ")

    def _render_hard_break(self: RendererHost, node: Node) -> None:
        self._trace("Hardbreak")
        cell = self._open_cell()
        if cell is not None:
            cell.cell_text.append(" ")
            return
        self._cr()

    def _render_code_span(self: RendererHost, node: Node) -> None:
        self._trace("Code", node.literal)
        cell = self._open_cell()
        if cell is not None:
            cell.cell_text.append(node.literal)
            return

        if self._config.boxed_code_spans:
            style = self._styles.code
            self._pdf.set_style(style)
            width = self._pdf.string_width(node.literal) + self._em
            self._pdf.draw_cell(width, style.size, node.literal, align="C", fill=True)
            self._at_line_start = False
        else:
            self._write(self._styles.backtick, node.literal)

    def _render_link(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            destination = resolve_destination(node.destination, self._config.base_url)
            self._trace("Link (entering)", f"Destination[{destination}] Title[{node.title}]")
            self._stack.push(
                ContainerFrame(
                    kind=FrameKind.LINK,
                    style=self._styles.link,
                    left_margin=self._stack.peek().left_margin,
                    destination=destination,
                )
            )
        else:
            self._trace("Link (leaving)")
            self._stack.pop()

    def _render_image(self: RendererHost, node: Node) -> None:
        self._trace("Image (entering)", f"Destination[{node.destination}] Title[{node.title}]")
        cell = self._open_cell()
        if cell is not None:
            cell.cell_text.append(node.literal)
            return
        self._cr()
        path = self._images.resolve(node.destination)
        if path is None:
            self._diagnose("image", f"Skipped image {node.destination!r}: not found")
            return
        try:
            self._pdf.draw_image(path)
        except OSError as e:
            self._diagnose("image", f"Skipped image {node.destination!r}: {e}")
            return
        self._at_line_start = True
