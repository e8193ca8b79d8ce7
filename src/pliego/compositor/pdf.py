"""fpdf2 implementation of the PageCompositor protocol.

Thin adapter over ``fpdf.FPDF`` working in points. Besides forwarding calls
it takes care of the page decorations (background color, optional footer),
font registration and text encoding.

Text encoding:
    fpdf2's core fonts (Helvetica, Courier, Times) only cover latin-1. Text
    drawn in a core font is transliterated with ``to_latin1`` first. A TTF
    registered through ``RenderConfig.font_file`` is a Unicode font, so text
    drawn in that family is passed through unchanged.

Thread Safety:
    One compositor per renderer. FPDF objects are not shareable.
"""

from __future__ import annotations

from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException
from PIL import Image

from pliego.compositor.protocol import Margins
from pliego.config import RenderConfig
from pliego.errors import ConfigError
from pliego.styles import Color, Styler
from pliego.utils.logger import get_logger
from pliego.utils.text import to_latin1

logger = get_logger(__name__)

_WHITE = Color(255, 255, 255)
_FOOTER_COLOR = Color(128, 128, 128)
_DEFAULT_DPI = 72.0
_FOOTER_OFFSET = -42.5  # 1.5 cm above the bottom edge


class _PliegoFPDF(FPDF):
    """FPDF with a painted page background and the author/title/page footer."""

    def __init__(self, *args, page_color: Color, footer_font: str, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.page_color = page_color
        self.footer_font = footer_font
        self.show_footer = False
        self.footer_author = ""
        self.footer_title = ""
        self.footer_text = to_latin1

    def header(self) -> None:
        if self.page_color != _WHITE:
            self.set_fill_color(*self.page_color)
            self.rect(0, 0, self.w, self.h, style="F")

    def footer(self) -> None:
        if not self.show_footer:
            return
        self.set_fill_color(*self.page_color)
        self.set_y(_FOOTER_OFFSET)
        self.set_font(self.footer_font, "I", 8)
        self.set_text_color(*_FOOTER_COLOR)
        self.set_x(4)
        self.cell(0, 10, self.footer_text(self.footer_author), fill=True)
        self.set_x(self.w / 2 - self.get_string_width(self.footer_text(self.footer_title)) / 2)
        self.cell(0, 10, self.footer_text(self.footer_title), fill=True)
        self.set_x(-40)
        self.cell(0, 10, f"Page {self.page_no()}", fill=True)


class FpdfCompositor:
    """Draw on PDF pages with fpdf2.

    The first page is added on construction, so the cursor is valid
    immediately.

    Usage:
        >>> compositor = FpdfCompositor(RenderConfig(), background=Color(255, 255, 255))
        >>> compositor.set_style(Styler())
        >>> compositor.write_text(14, "Hello")
        >>> compositor.finalize("hello.pdf")

    """

    __slots__ = ("_pdf", "_unicode_families", "_family")

    def __init__(self, config: RenderConfig, background: Color = _WHITE) -> None:
        orientation = "L" if config.orientation.lower() == "landscape" else "P"
        self._pdf = _PliegoFPDF(
            orientation=orientation,
            unit="pt",
            format=config.page_size.lower(),
            page_color=background,
            footer_font=config.font_family if config.font_file else "Helvetica",
        )
        self._unicode_families: set[str] = set()
        self._family = "helvetica"

        if config.font_file:
            self._register_font(config.font_family or "", config.font_file)
            self._pdf.footer_text = str

        if config.title:
            self._pdf.set_title(config.title)
        if config.author:
            self._pdf.set_author(config.author)
        self._pdf.set_creator("pliego")
        self._pdf.show_footer = config.footer
        self._pdf.footer_author = config.author
        self._pdf.footer_title = config.title

        self._pdf.set_auto_page_break(auto=True, margin=self._pdf.b_margin)
        self._pdf.add_page()

    def _register_font(self, family: str, font_file: str) -> None:
        path = Path(font_file)
        if not path.is_file():
            raise ConfigError(f"Font file not found: {font_file}")
        # One file serves every style so bold/italic runs do not fail.
        for style in ("", "B", "I", "BI"):
            self._pdf.add_font(family, style=style, fname=str(path))
        self._unicode_families.add(family.lower())
        logger.debug("Registered font %s from %s", family, path)

    def _encode(self, text: str) -> str:
        if self._family in self._unicode_families:
            return text
        return to_latin1(text)

    # Text and style

    def set_style(self, styler: Styler) -> None:
        self._family = styler.font.lower()
        self._pdf.set_font(styler.font, styler.style.upper(), styler.size)
        self._pdf.set_text_color(*styler.text_color)
        self._pdf.set_fill_color(*styler.fill_color)

    def set_text_color(self, color: Color) -> None:
        self._pdf.set_text_color(*color)

    def write_text(self, height: float, text: str) -> None:
        self._pdf.write(height, self._encode(text))

    def write_link(self, height: float, text: str, destination: str) -> None:
        self._pdf.write(height, self._encode(text), link=destination)

    def string_width(self, text: str) -> float:
        return self._pdf.get_string_width(self._encode(text))

    # Cells

    def draw_cell(
        self,
        width: float,
        height: float,
        text: str = "",
        *,
        border: str = "",
        align: str = "",
        fill: bool = False,
    ) -> None:
        # fpdf2 has no vertical component in cell alignment.
        horizontal = next((c for c in align.upper() if c in "LCR"), "L")
        self._pdf.cell(
            width,
            height,
            self._encode(text),
            border=border or 0,
            align=horizontal,
            fill=fill,
            new_x=XPos.RIGHT,
            new_y=YPos.TOP,
        )

    def draw_multiline_cell(
        self, width: float, height: float, text: str, *, fill: bool = True
    ) -> None:
        self._pdf.multi_cell(
            width,
            height,
            self._encode(text),
            fill=fill,
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )

    # Cursor

    def line_break(self, height: float | None = None) -> None:
        self._pdf.ln(height)

    def get_cursor(self) -> tuple[float, float]:
        return self._pdf.get_x(), self._pdf.get_y()

    def move_cursor(self, x: float | None = None, y: float | None = None) -> None:
        if x is not None and y is not None:
            self._pdf.set_xy(x, y)
        elif y is not None:
            self._pdf.set_y(y)
        elif x is not None:
            self._pdf.set_x(x)

    # Geometry and pages

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._pdf.line(x1, y1, x2, y2)

    def set_left_margin(self, value: float) -> None:
        self._pdf.set_left_margin(value)

    def get_margins(self) -> Margins:
        pdf = self._pdf
        return Margins(pdf.l_margin, pdf.t_margin, pdf.r_margin, pdf.b_margin)

    def page_size(self) -> tuple[float, float]:
        return self._pdf.w, self._pdf.h

    def new_page(self) -> None:
        self._pdf.add_page()

    def draw_image(self, path: str) -> None:
        pdf = self._pdf
        available = pdf.w - pdf.l_margin - pdf.r_margin
        width = 0.0
        # SVG and other formats Pillow cannot open keep their natural size.
        try:
            with Image.open(path) as img:
                dpi = img.info.get("dpi")
                dpi_value = float(dpi[0]) if isinstance(dpi, tuple) and dpi[0] else _DEFAULT_DPI
                width = min(img.size[0] * 72 / dpi_value, available)
        except OSError:
            logger.debug("Pillow cannot read %s; using natural size", path)
        try:
            pdf.image(path, w=width)
        except (FPDFException, ValueError) as e:
            raise OSError(f"Cannot place image {path}: {e}") from e
        pdf.set_x(pdf.l_margin)

    def finalize(self, path: str) -> None:
        self._pdf.output(str(path))

    @property
    def pdf(self) -> FPDF:
        """The underlying FPDF document."""
        return self._pdf
