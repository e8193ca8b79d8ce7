"""Exception classes and diagnostics for pliego.

Provides standardized exceptions for error handling throughout pliego, and the
Diagnostic record used for recoverable degradations (a code block rendered
without highlighting, an image that could not be found, a skipped node).
"""

from __future__ import annotations

from dataclasses import dataclass


class PliegoError(Exception):
    """Base exception for all pliego errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(PliegoError, ValueError):
    """Invalid render configuration.

    Raised for unknown themes, page sizes, orientations, style override
    categories or color names.
    """

    pass


class RenderError(PliegoError):
    """Error during PDF rendering.

    Raised when the renderer reaches an inconsistent internal state, such as
    an unbalanced container stack at the end of a document or a table opened
    inside another table.
    """

    pass


class UnsupportedNodeError(RenderError):
    """The parser produced a node kind the renderer does not handle.

    Usually means the markdown parser was configured with a plugin whose
    tokens pliego does not know about.
    """

    def __init__(self, token_type: str, entering: bool = True) -> None:
        """Initialize unsupported node error.

        Args:
            token_type: Parser token type (e.g., "footnote_ref")
            entering: Whether the event was the opening side of the node
        """
        self.token_type = token_type
        self.entering = entering
        super().__init__(f"Unsupported node type '{token_type}'")


class StackUnderflowError(RenderError):
    """Attempt to pop the document frame or read a missing parent frame."""

    pass


class TableShapeError(RenderError, IndexError):
    """A table body row has more cells than the header row.

    Column widths are fixed by the header, so an extra body cell has no width
    to be drawn with.
    """

    def __init__(self, column: int, columns: int) -> None:
        """Initialize table shape error.

        Args:
            column: Zero-based index of the offending body cell
            columns: Number of columns recorded by the header row
        """
        self.column = column
        self.columns = columns
        super().__init__(
            f"Table body cell {column + 1} has no matching header column "
            f"(header defines {columns})"
        )


class HighlightError(PliegoError):
    """A highlight definition exists but cannot be used.

    Covers unreadable or malformed YAML and unknown Pygments lexers. The
    renderer catches it, records a diagnostic and draws the block plain.
    """

    pass


class OutputError(PliegoError):
    """The compositor failed to write the finished document."""

    pass


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A recoverable problem recorded while rendering.

    Attributes:
        kind: Category ("highlight", "image", "unsupported")
        message: Human-readable description
    """

    kind: str
    message: str

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"
