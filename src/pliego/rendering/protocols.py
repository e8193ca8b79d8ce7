"""Protocols defining the renderer mixin contracts.

Each rendering mixin documents "Required Host Attributes/Methods" in its
docstring; this module turns those requirements into a type-checkable
Protocol that ``PdfRenderer`` satisfies.

Usage:
    Mixin methods that call across mixin boundaries can annotate ``self``
    as the protocol they require::

        def _render_list(self: RendererHost, node: Node, entering: bool) -> None:
            self._ensure_line()   # type-checked via RendererHost
            ...

Thread Safety:
    Protocols are purely structural, with no runtime overhead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pliego.compositor.protocol import PageCompositor
from pliego.config import RenderConfig
from pliego.containers import ContainerStack
from pliego.errors import Diagnostic
from pliego.images import ImageResolver
from pliego.styles import Styler
from pliego.themes import StyleSheet

if TYPE_CHECKING:
    from pliego.highlighting import Highlighter
    from pliego.rendering.tables import TableState


@runtime_checkable
class RendererHost(Protocol):
    """Contract between the rendering mixins and the renderer driver.

    Provided by: PdfRenderer
    Required by: every rendering mixin
    """

    _config: RenderConfig
    _styles: StyleSheet
    _pdf: PageCompositor
    _stack: ContainerStack
    _images: ImageResolver
    _table: TableState | None
    _highlighters: dict[str, Highlighter | None]
    _at_line_start: bool
    _em: float
    _indent: float
    diagnostics: list[Diagnostic]

    def _cr(self) -> None: ...
    def _ensure_line(self) -> None: ...
    def _write(self, style: Styler, text: str) -> None: ...
    def _trace(self, source: str, message: str = "") -> None: ...
    def _diagnose(self, kind: str, message: str) -> None: ...
