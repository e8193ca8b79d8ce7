"""
Pliego: Markdown to PDF for Python

Renders CommonMark (plus tables, strikethrough and definition lists) straight
to PDF pages with fpdf2. Light and dark themes, per-category style overrides,
syntax-highlighted code blocks and local or remote images.

Quick Start:
    >>> from pliego import render_pdf
    >>> render_pdf("# Hello, World!", "hello.pdf")
    []

    >>> # Or keep a renderer around for diagnostics and tracing
    >>> from pliego import PdfRenderer, RenderConfig, Theme
    >>> config = RenderConfig(theme=Theme.DARK, hr_as_page_break=True)
    >>> with PdfRenderer(config) as renderer:
    ...     renderer.process(open("slides.md").read(), "slides.pdf")

Tracing:
    >>> from pliego import stop_trace, trace_to_file
    >>> handler = trace_to_file("trace.log")
    >>> render_pdf("# Traced", "traced.pdf")
    []
    >>> stop_trace(handler)
"""

from os import PathLike

from pliego.compositor import FpdfCompositor, Margins, PageCompositor
from pliego.config import DEFAULT_CONFIG, RenderConfig
from pliego.containers import ContainerFrame, ContainerStack, FrameKind, ListKind
from pliego.errors import (
    ConfigError,
    Diagnostic,
    HighlightError,
    OutputError,
    PliegoError,
    RenderError,
    StackUnderflowError,
    TableShapeError,
    UnsupportedNodeError,
)
from pliego.events import Node, NodeKind, build_parser, iter_events, parse_events
from pliego.highlighting import Highlighter, SyntaxDefinition, color_for_group
from pliego.images import ImageResolver
from pliego.rendering import PdfRenderer
from pliego.styles import Color, Styler, lookup_color
from pliego.themes import StyleSheet, Theme, build_stylesheet
from pliego.utils.logger import stop_trace, trace_to_file

__version__ = "0.1.0"


def render_pdf(
    source: str | bytes,
    output: str | PathLike[str],
    *,
    config: RenderConfig | None = None,
) -> list[Diagnostic]:
    """Render Markdown source to a PDF file.

    Args:
        source: Markdown text (str, or UTF-8 bytes)
        output: Path of the PDF to write
        config: Render configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Diagnostics recorded while rendering (empty when nothing degraded)

    Raises:
        PliegoError: On configuration, rendering or output failures

    Example:
        >>> render_pdf(b"*hi*", "hi.pdf", config=RenderConfig(theme="dark"))
        []
    """
    with PdfRenderer(config) as renderer:
        renderer.process(source, output)
        return list(renderer.diagnostics)


__all__ = [
    "DEFAULT_CONFIG",
    "Color",
    "ConfigError",
    "ContainerFrame",
    "ContainerStack",
    "Diagnostic",
    "FpdfCompositor",
    "FrameKind",
    "HighlightError",
    "Highlighter",
    "ImageResolver",
    "ListKind",
    "Margins",
    "Node",
    "NodeKind",
    "OutputError",
    "PageCompositor",
    "PdfRenderer",
    "PliegoError",
    "RenderConfig",
    "RenderError",
    "StackUnderflowError",
    "StyleSheet",
    "Styler",
    "SyntaxDefinition",
    "TableShapeError",
    "Theme",
    "UnsupportedNodeError",
    "__version__",
    "build_parser",
    "build_stylesheet",
    "color_for_group",
    "iter_events",
    "lookup_color",
    "parse_events",
    "render_pdf",
    "stop_trace",
    "trace_to_file",
]
