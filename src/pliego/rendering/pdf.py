"""Markdown to PDF renderer.

Walks the parser's event stream depth-first and draws each node through a
PageCompositor, keeping layout state in a ContainerStack.

Architecture:
The renderer uses a mixin-based design for separation of concerns:
- `BlockRenderingMixin`: Paragraphs, headings, block quotes, rules, HTML
- `ListRenderingMixin`: Lists, items, numbering and bullets
- `TableRenderingMixin`: Tables with header-measured column widths
- `InlineRenderingMixin`: Text, emphasis, code spans, links, images
- `CodeBlockMixin`: Plain and highlighted code blocks

Tracing:
Every node visit is logged at DEBUG on the ``pliego.rendering.pdf`` logger
as ``"<dashes>[<source>] <message>"``, one dash per open container. ``pliego.trace_to_file`` writes them to a
file.

Thread Safety:
All mutable state (container stack, table state, diagnostics, highlighter
cache, downloaded images) belongs to one renderer instance. Use one renderer
per document and thread.
"""

from __future__ import annotations

import logging
from os import PathLike

from markdown_it import MarkdownIt

from pliego.compositor.pdf import FpdfCompositor
from pliego.compositor.protocol import PageCompositor
from pliego.config import DEFAULT_CONFIG, RenderConfig
from pliego.containers import ContainerStack
from pliego.errors import Diagnostic, OutputError, RenderError, UnsupportedNodeError
from pliego.events import Node, NodeKind, build_parser, iter_events
from pliego.highlighting import Highlighter
from pliego.images import ImageResolver
from pliego.rendering.blocks import BlockRenderingMixin
from pliego.rendering.code import CodeBlockMixin
from pliego.rendering.inline import InlineRenderingMixin
from pliego.rendering.lists import ListRenderingMixin
from pliego.rendering.tables import TableRenderingMixin, TableState
from pliego.styles import Styler
from pliego.utils.logger import get_logger
from pliego.utils.text import normalize_source

logger = get_logger(__name__)


class PdfRenderer(
    BlockRenderingMixin,
    ListRenderingMixin,
    TableRenderingMixin,
    InlineRenderingMixin,
    CodeBlockMixin,
):
    """Render Markdown to PDF.

    Usage:
        >>> with PdfRenderer(RenderConfig(theme="dark")) as renderer:
        ...     renderer.process("# Hello **World**", "hello.pdf")
        >>> renderer.diagnostics
        []

    Collaborators can be replaced: pass ``compositor`` to draw somewhere
    other than fpdf2, ``parser`` for a differently configured MarkdownIt,
    ``image_resolver`` to control how image destinations become files.

    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        compositor: PageCompositor | None = None,
        parser: MarkdownIt | None = None,
        image_resolver: ImageResolver | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            config: Render configuration (defaults to DEFAULT_CONFIG)
            compositor: Drawing surface (defaults to an FpdfCompositor)
            parser: Markdown parser (defaults to ``build_parser()``)
            image_resolver: Image lookup; one is created (and closed by
                ``close()``) when not given
        """
        self._config = config or DEFAULT_CONFIG
        self._styles = self._config.stylesheet()
        self._pdf: PageCompositor = compositor if compositor is not None else FpdfCompositor(
            self._config, self._styles.background
        )
        self._parser = parser or build_parser()
        self._owns_images = image_resolver is None
        self._images = (
            image_resolver
            if image_resolver is not None
            else ImageResolver(self._config.base_url, timeout=self._config.image_timeout)
        )

        self._pdf.set_style(self._styles.normal)
        self._em = self._pdf.string_width("m")
        self._indent = 3 * self._em
        self._stack = ContainerStack(self._styles.normal, self._pdf.get_margins().left)
        self._table: TableState | None = None
        self._highlighters: dict[str, Highlighter | None] = {}
        self._at_line_start = True
        self.diagnostics: list[Diagnostic] = []

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def stack(self) -> ContainerStack:
        """The container stack (DOCUMENT frame only, between documents)."""
        return self._stack

    @property
    def compositor(self) -> PageCompositor:
        return self._pdf

    # Shared helpers used by the mixins

    def _trace(self, source: str, message: str = "") -> None:
        if logger.isEnabledFor(logging.DEBUG):
            dashes = "-" * (self._stack.depth() - 1)
            logger.debug("%s[%s] %s", dashes, source, message)

    def _diagnose(self, kind: str, message: str) -> None:
        logger.warning("%s", message)
        self.diagnostics.append(Diagnostic(kind, message))

    def _cr(self) -> None:
        height = self._stack.peek().style.line_height
        self._trace("cr()", f"LH={height}")
        self._pdf.line_break(height)
        self._at_line_start = True

    def _ensure_line(self) -> None:
        if not self._at_line_start:
            self._cr()

    def _write(self, style: Styler, text: str) -> None:
        self._pdf.set_style(style)
        self._pdf.write_text(style.line_height, text)
        self._at_line_start = False

    # Traversal

    def run(self, source: str | bytes) -> None:
        """Render ``source`` onto the compositor without writing a file.

        Raises:
            UnsupportedNodeError: If the parser produced a node kind the
                renderer cannot draw and ``on_unsupported`` is "raise"
            TableShapeError: If a table body row has more cells than its header
            RenderError: If the container stack is unbalanced afterwards
        """
        text = normalize_source(source)
        tokens = self._parser.parse(text)
        for node, entering in iter_events(tokens):
            self._dispatch(node, entering)

        if self._stack.depth() != 1 or self._stack.pushes != self._stack.pops:
            raise RenderError(
                f"Unbalanced container stack: depth {self._stack.depth()}, "
                f"{self._stack.pushes} pushes, {self._stack.pops} pops"
            )

    def process(self, source: str | bytes, output: str | PathLike[str]) -> None:
        """Render ``source`` and write the PDF to ``output``.

        Raises:
            OutputError: If the compositor cannot write the document
        """
        self.run(source)
        try:
            self._pdf.finalize(str(output))
        except Exception as e:
            raise OutputError(f"Cannot write {output}: {e}") from e
        logger.info("Wrote %s", output)

    def _dispatch(self, node: Node, entering: bool) -> None:
        match node.kind:
            case NodeKind.DOCUMENT:
                self._trace("Document", "Not handled")
            case NodeKind.PARAGRAPH:
                self._render_paragraph(node, entering)
            case NodeKind.HEADING:
                self._render_heading(node, entering)
            case NodeKind.BLOCK_QUOTE:
                self._render_block_quote(node, entering)
            case NodeKind.HORIZONTAL_RULE:
                self._render_horizontal_rule(node)
            case NodeKind.HTML_BLOCK:
                self._render_html_block(node)
            case NodeKind.CODE_BLOCK:
                self._render_code_block(node)
            case NodeKind.LIST:
                self._render_list(node, entering)
            case NodeKind.ITEM:
                self._render_item(node, entering)
            case NodeKind.TABLE:
                self._render_table(node, entering)
            case NodeKind.TABLE_HEAD:
                self._render_table_head(node, entering)
            case NodeKind.TABLE_BODY:
                self._render_table_body(node, entering)
            case NodeKind.TABLE_ROW:
                self._render_table_row(node, entering)
            case NodeKind.TABLE_CELL:
                self._render_table_cell(node, entering)
            case NodeKind.TEXT:
                self._render_text(node)
            case NodeKind.SOFT_BREAK:
                self._render_soft_break(node)
            case NodeKind.HARD_BREAK:
                self._render_hard_break(node)
            case NodeKind.CODE:
                self._render_code_span(node)
            case NodeKind.EMPH:
                self._render_emph(node, entering)
            case NodeKind.STRONG:
                self._render_strong(node, entering)
            case NodeKind.DEL:
                self._render_del(node, entering)
            case NodeKind.LINK:
                self._render_link(node, entering)
            case NodeKind.IMAGE:
                self._render_image(node)
            case NodeKind.HTML_SPAN:
                self._render_html_span(node)
            case NodeKind.UNSUPPORTED:
                self._render_unsupported(node, entering)

    def _render_unsupported(self, node: Node, entering: bool) -> None:
        if self._config.on_unsupported == "raise":
            raise UnsupportedNodeError(node.token_type, entering)
        self._trace("Unsupported", f"{node.token_type} skipped")
        if entering:
            self._diagnose("unsupported", f"Skipped unsupported node '{node.token_type}'")

    # Resources

    def close(self) -> None:
        """Release downloaded images (only when the resolver is our own)."""
        if self._owns_images:
            self._images.close()

    def __enter__(self) -> PdfRenderer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
