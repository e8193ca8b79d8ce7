"""PDF rendering subsystem for pliego.

Provides the PdfRenderer and the mixins it is composed of:
- blocks: Paragraphs, headings, block quotes, rules, HTML blocks
- lists: List numbering and bullets
- tables: Header-measured tables
- inline: Text runs, emphasis, code spans, links, images
- code: Plain and highlighted code blocks

"""

from pliego.rendering.blocks import BlockRenderingMixin
from pliego.rendering.code import CodeBlockMixin
from pliego.rendering.inline import InlineRenderingMixin
from pliego.rendering.lists import ListRenderingMixin
from pliego.rendering.pdf import PdfRenderer
from pliego.rendering.tables import TableRenderingMixin, TableState

__all__ = [
    "BlockRenderingMixin",
    "CodeBlockMixin",
    "InlineRenderingMixin",
    "ListRenderingMixin",
    "PdfRenderer",
    "TableRenderingMixin",
    "TableState",
]
