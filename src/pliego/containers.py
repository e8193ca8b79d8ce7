"""Container Stack for the PDF renderer.

The renderer walks the document depth-first and keeps one frame per open
container (heading, block quote, list, list item, link, table part). The
stack provides:

1. The active text style - the top frame's Styler is what text is drawn with
2. Geometry - each frame remembers the left margin in force when it opened
3. List state - kind, item counter and "first paragraph" tracking
4. Link targets - text inside a LINK frame is written as a clickable run

Emphasis and strong do not push frames; they replace the top frame's style
with a derived Styler (see ``Styler.with_flag``) and restore it on exit.

Usage:
    stack = ContainerStack(root_style, left_margin=72.0)  # DOCUMENT frame

    stack.push(ContainerFrame(
        kind=FrameKind.LIST,
        style=sheet.normal,
        left_margin=stack.peek().left_margin + indent,
        list_kind=ListKind.ORDERED,
    ))

    stack.parent().item_number += 1   # from inside an item frame
    frame = stack.pop()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from pliego.errors import StackUnderflowError
from pliego.styles import Styler


class FrameKind(Enum):
    """Kinds of container frames."""

    DOCUMENT = auto()  # Root frame, never popped
    HEADING = auto()
    BLOCK_QUOTE = auto()
    LIST = auto()
    LIST_ITEM = auto()
    LINK = auto()
    TABLE = auto()
    TABLE_HEAD = auto()
    TABLE_BODY = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()


class ListKind(Enum):
    """List flavor carried by LIST and LIST_ITEM frames."""

    NONE = "Not a List"
    UNORDERED = "Unordered"
    ORDERED = "Ordered"
    DEFINITION = "Definition"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class ContainerFrame:
    """A frame on the container stack representing an open container.

    Attributes:
        kind: The type of container
        style: Styler in force inside the container (replaced, never mutated)
        left_margin: Left margin when the container opened
        list_kind: For lists and items, the list flavor
        item_number: For lists, items seen so far; for items, their ordinal
        first_paragraph: For items, whether no paragraph has finished yet
        is_header: For table cells, whether the cell is in the header row
        destination: For links, the resolved target URL
        cell_text: For table cells, text collected until the cell closes
        outer_margin: For lists and block quotes, the compositor left margin in
            force before the container opened (restored when it closes)

    """

    kind: FrameKind
    style: Styler
    left_margin: float
    list_kind: ListKind = ListKind.NONE
    item_number: int = 0
    first_paragraph: bool = False
    is_header: bool = False
    destination: str | None = None
    cell_text: list[str] = field(default_factory=list)
    outer_margin: float = 0.0


class ContainerStack:
    """Manages the stack of open containers during rendering.

    Invariant: the stack always holds the DOCUMENT frame at index 0; every
    push on entering a container is matched by one pop on leaving it.

    Usage:
        stack = ContainerStack(style, left_margin)  # DOCUMENT frame
        stack.push(frame)
        stack.peek()      # innermost frame
        stack.parent()    # frame below the innermost
        stack.pop()

    """

    __slots__ = ("_stack", "pushes", "pops")

    def __init__(self, style: Styler, left_margin: float) -> None:
        """Initialize with the DOCUMENT frame.

        Args:
            style: Body style of the document
            left_margin: Page left margin
        """
        self._stack: list[ContainerFrame] = [
            ContainerFrame(kind=FrameKind.DOCUMENT, style=style, left_margin=left_margin)
        ]
        self.pushes = 0
        self.pops = 0

    def push(self, frame: ContainerFrame) -> None:
        """Push a new container onto the stack."""
        self._stack.append(frame)
        self.pushes += 1

    def pop(self) -> ContainerFrame:
        """Pop the innermost container.

        Returns:
            The popped container frame

        Raises:
            StackUnderflowError: If attempting to pop the document frame
        """
        if len(self._stack) <= 1:
            raise StackUnderflowError("Cannot pop document frame")
        self.pops += 1
        return self._stack.pop()

    def peek(self) -> ContainerFrame:
        """Get the innermost container."""
        return self._stack[-1]

    def parent(self) -> ContainerFrame:
        """Get the container directly below the innermost one.

        Raises:
            StackUnderflowError: If only the document frame is open
        """
        if len(self._stack) < 2:
            raise StackUnderflowError("Document frame has no parent")
        return self._stack[-2]

    def root(self) -> ContainerFrame:
        """Get the DOCUMENT frame."""
        return self._stack[0]

    def depth(self) -> int:
        """Number of open frames, the document frame included."""
        return len(self._stack)

    def find(self, kind: FrameKind) -> ContainerFrame | None:
        """Innermost open frame of ``kind``, or None."""
        for frame in reversed(self._stack):
            if frame.kind is kind:
                return frame
        return None

    def __len__(self) -> int:
        return len(self._stack)

    def __iter__(self):
        return iter(self._stack)
