"""Block layout for the PDF renderer.

Handles paragraphs, headings, block quotes, horizontal rules and raw HTML
blocks. Lists, tables and code blocks have their own mixins.

Line breaks:
    ``_cr()`` always starts a new line; ``_ensure_line()`` only does when the
    cursor is not already at the start of one. Paragraph spacing inside list
    items depends on which paragraph of the item is being drawn.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pliego.containers import ContainerFrame, FrameKind
from pliego.events import Node, NodeKind

if TYPE_CHECKING:
    from pliego.rendering.protocols import RendererHost


class BlockRenderingMixin:
    """Mixin for block-level nodes.

    Required Host Attributes:
        - _config: RenderConfig
        - _styles: StyleSheet
        - _pdf: PageCompositor
        - _stack: ContainerStack
        - _indent: float
        - _at_line_start: bool

    Required Host Methods:
        - _cr() -> None
        - _trace(source, message) -> None

    """

    def _render_paragraph(self: RendererHost, node: Node, entering: bool) -> None:
        in_item = node.parent is NodeKind.ITEM
        if entering:
            self._trace("Paragraph (entering)", f"margins={tuple(self._pdf.get_margins())}")
            if in_item and self._stack.peek().first_paragraph:
                self._trace("First paragraph within a list item", "no break")
                return
            self._cr()
            return

        self._trace("Paragraph (leaving)")
        if in_item:
            item = self._stack.peek()
            if item.first_paragraph:
                item.first_paragraph = False
                return
        self._cr()

    def _render_heading(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            self._cr()
            style = self._styles.heading(node.level)
            self._trace(f"Heading ({node.level}, entering)")
            self._stack.push(
                ContainerFrame(
                    kind=FrameKind.HEADING,
                    style=style,
                    left_margin=self._stack.peek().left_margin,
                )
            )
        else:
            self._trace(f"Heading ({node.level}, leaving)")
            self._cr()
            self._stack.pop()

    def _render_block_quote(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            outer = self._pdf.get_margins().left
            margin = outer + self._indent
            self._trace("BlockQuote (entering)", f"left margin {margin}")
            self._stack.push(
                ContainerFrame(
                    kind=FrameKind.BLOCK_QUOTE,
                    style=self._styles.blockquote,
                    left_margin=margin,
                    outer_margin=outer,
                )
            )
            self._pdf.set_left_margin(margin)
        else:
            frame = self._stack.pop()
            restored = frame.outer_margin
            self._trace("BlockQuote (leaving)", f"left margin {restored}")
            self._pdf.set_left_margin(restored)
            self._cr()

    def _render_horizontal_rule(self: RendererHost, node: Node) -> None:
        if self._config.hr_as_page_break:
            self._trace("HorizontalRule", "new page")
            self._pdf.new_page()
            self._at_line_start = True
            return

        self._trace("HorizontalRule")
        self._cr()
        margins = self._pdf.get_margins()
        width, _ = self._pdf.page_size()
        _, y = self._pdf.get_cursor()
        self._pdf.draw_line(margins.left, y, width - margins.right, y)
        self._cr()

    def _render_html_block(self: RendererHost, node: Node) -> None:
        self._trace("HTMLBlock", node.literal)
        self._cr()
        style = self._styles.backtick
        self._pdf.set_style(style)
        self._pdf.draw_multiline_cell(0, style.line_height, node.literal.rstrip("\n"), fill=True)
        self._at_line_start = True
        self._cr()
