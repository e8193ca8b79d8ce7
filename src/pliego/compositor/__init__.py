"""Page compositors.

A compositor owns the page: cursor, margins, fonts and the output file.

Available Compositors:
- FpdfCompositor: Draws with fpdf2 and writes a PDF file

"""

from pliego.compositor.pdf import FpdfCompositor
from pliego.compositor.protocol import Margins, PageCompositor

__all__ = ["FpdfCompositor", "Margins", "PageCompositor"]
