"""Code block rendering, plain or highlighted.

A block is highlighted only when its language has a definition file in
``RenderConfig.highlight_dir``. Highlighted blocks are written one character
at a time so each character can carry its own color; plain blocks are a
single filled multi-line cell in the backtick style.

Highlighters are built once per language and cached on the renderer. A
language whose definition is unusable is cached as None, so the diagnostic
is recorded once per renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pliego.errors import HighlightError
from pliego.events import Node
from pliego.highlighting import Highlighter, SyntaxDefinition, color_for_group, find_definition

if TYPE_CHECKING:
    from pliego.rendering.protocols import RendererHost


def block_language(node: Node) -> str:
    """Language of a code block: first word of the info string.

    An ``html`` block that opens with a script tag is highlighted as
    javascript.
    """
    words = node.info.split()
    language = words[0] if words else ""
    if language == "html" and node.literal.startswith("<script"):
        return "javascript"
    return language


class CodeBlockMixin:
    """Mixin for fenced and indented code blocks.

    Required Host Attributes:
        - _config: RenderConfig
        - _styles: StyleSheet
        - _pdf: PageCompositor
        - _highlighters: dict[str, Highlighter | None]
        - _at_line_start: bool

    Required Host Methods:
        - _cr() -> None
        - _trace(source, message) -> None
        - _diagnose(kind, message) -> None

    """

    def _render_code_block(self: RendererHost, node: Node) -> None:
        self._trace("Codeblock", node.literal)
        language = block_language(node)
        highlighter = self._highlighter_for(language)
        if highlighter is None:
            self._render_plain_code(node.literal)
            return
        self._render_highlighted_code(node.literal, highlighter)

    def _highlighter_for(self: RendererHost, language: str) -> Highlighter | None:
        if language in self._highlighters:
            return self._highlighters[language]
        path = find_definition(self._config.highlight_dir, language)
        if path is None:
            return None
        try:
            highlighter: Highlighter | None = Highlighter(SyntaxDefinition.load(path))
        except HighlightError as e:
            self._diagnose("highlight", f"{language}: {e}; rendering without highlighting")
            highlighter = None
        self._highlighters[language] = highlighter
        return highlighter

    def _render_plain_code(self: RendererHost, code: str) -> None:
        self._cr()
        style = self._styles.backtick
        self._pdf.set_style(style)
        self._pdf.draw_multiline_cell(0, style.line_height, code.removesuffix("\n"), fill=True)
        self._at_line_start = True

    def _render_highlighted_code(self: RendererHost, code: str, highlighter: Highlighter) -> None:
        matches = highlighter.highlight_string(code)
        style = self._styles.code
        plain = self._styles.normal.text_color
        self._cr()
        self._pdf.set_style(style)
        for line_number, line in enumerate(code.removesuffix("\n").split("\n")):
            groups = matches.get(line_number, {})
            for column, char in enumerate(line):
                group = groups.get(column)
                color = color_for_group(group) if group else None
                self._pdf.set_text_color(color or plain)
                self._pdf.write_text(style.line_height, char)
                self._at_line_start = False
            self._pdf.line_break(style.line_height)
            self._at_line_start = True
