"""List rendering: numbering, bullets and indentation.

Every list pushes a LIST frame whose ``item_number`` counts the items drawn
so far, so numbering starts at 1 for each list and sibling or nested lists
never share a counter. The source start number of an ordered list is not
used.

Layout of an item:
    | list margin | 3 em marker cell (right aligned) | 1 em gap | text ...

Item text (and anything nested in the item) is drawn with the compositor's
left margin at ``list margin + 4 em``; the margin goes back to the list
margin when the item closes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pliego.containers import ContainerFrame, FrameKind, ListKind
from pliego.events import Node, NodeKind

if TYPE_CHECKING:
    from pliego.rendering.protocols import RendererHost

BULLET = "•"


def list_kind_for(node: Node) -> ListKind:
    """ListKind of a LIST node."""
    if node.definition:
        return ListKind.DEFINITION
    if node.ordered:
        return ListKind.ORDERED
    return ListKind.UNORDERED


def marker_for(kind: ListKind, number: int) -> str:
    """Marker text drawn before an item."""
    match kind:
        case ListKind.UNORDERED:
            return BULLET
        case ListKind.ORDERED:
            return f"{number}."
        case _:
            return ""


class ListRenderingMixin:
    """Mixin for lists and list items.

    Required Host Attributes:
        - _styles: StyleSheet
        - _pdf: PageCompositor
        - _stack: ContainerStack
        - _em: float
        - _indent: float
        - _at_line_start: bool

    Required Host Methods:
        - _cr() -> None
        - _ensure_line() -> None
        - _trace(source, message) -> None

    """

    def _render_list(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            kind = list_kind_for(node)
            if node.parent is NodeKind.ITEM:
                self._ensure_line()
            outer = self._pdf.get_margins().left
            margin = outer + self._indent
            self._trace(f"{kind} List (entering)", f"left margin {margin}")
            self._stack.push(
                ContainerFrame(
                    kind=FrameKind.LIST,
                    style=self._styles.normal,
                    left_margin=margin,
                    list_kind=kind,
                    item_number=0,
                    outer_margin=outer,
                )
            )
            self._pdf.set_left_margin(margin)
            return

        frame = self._stack.pop()
        restored = frame.outer_margin
        self._trace(f"{frame.list_kind} List (leaving)", f"left margin {restored}")
        self._pdf.set_left_margin(restored)
        if self._stack.depth() == 1:
            self._cr()

    def _render_item(self: RendererHost, node: Node, entering: bool) -> None:
        if entering:
            parent = self._stack.peek()
            number = parent.item_number + 1
            self._trace(f"{parent.list_kind} Item (entering) #{number}")
            self._ensure_line()
            frame = ContainerFrame(
                kind=FrameKind.LIST_ITEM,
                style=self._styles.normal,
                left_margin=parent.left_margin,
                list_kind=parent.list_kind,
                item_number=number,
                first_paragraph=True,
            )
            self._stack.push(frame)

            marker = marker_for(frame.list_kind, number)
            if marker:
                style = self._styles.normal
                self._pdf.set_style(style)
                self._pdf.draw_cell(3 * self._em, style.line_height, marker, align="RB")

            text_margin = frame.left_margin + 4 * self._em
            self._pdf.set_left_margin(text_margin)
            self._pdf.move_cursor(x=text_margin)
            self._at_line_start = True
            return

        frame = self._stack.peek()
        self._trace(f"{frame.list_kind} Item (leaving)")
        self._pdf.set_left_margin(frame.left_margin)
        self._stack.parent().item_number += 1
        self._stack.pop()
