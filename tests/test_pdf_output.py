"""End-to-end rendering through fpdf2."""

from pathlib import Path

import pytest
from PIL import Image

from pliego import (
    ConfigError,
    FpdfCompositor,
    PageCompositor,
    PdfRenderer,
    RenderConfig,
    Theme,
    render_pdf,
)

from conftest import RecordingCompositor

SAMPLE = """\
# Pliego

A paragraph with **bold**, *italic*, `code` and a [link](https://example.org).
Typographic text: “quoted” — dashes …

> A block quote
> > nested

1. one
2. two
   - bullet • inside

Term
: Definition

| Name | Value |
|------|-------|
| a    | 1     |
| b    | 2     |

```python
def f():
    return 1
```

---

<div>raw html</div>
"""


@pytest.fixture
def highlight_dir(tmp_path: Path) -> Path:
    syntax = tmp_path / "syntax"
    syntax.mkdir()
    (syntax / "python.yaml").write_text("filetype: python\n", encoding="utf-8")
    return syntax


def read_pdf(path: Path) -> bytes:
    data = path.read_bytes()
    assert data.startswith(b"%PDF")
    return data


class TestRenderPdf:
    def test_light(self, tmp_path: Path) -> None:
        output = tmp_path / "light.pdf"
        assert render_pdf(SAMPLE, output) == []
        read_pdf(output)

    def test_dark_with_footer(self, tmp_path: Path, highlight_dir: Path) -> None:
        output = tmp_path / "dark.pdf"
        config = RenderConfig(
            theme=Theme.DARK,
            highlight_dir=str(highlight_dir),
            footer=True,
            title="Sample",
            author="Tester",
        )
        assert render_pdf(SAMPLE, output, config=config) == []
        read_pdf(output)

    def test_options(self, tmp_path: Path) -> None:
        output = tmp_path / "options.pdf"
        config = RenderConfig(
            page_size="Letter",
            orientation="landscape",
            boxed_code_spans=True,
            blockquote_fill=True,
            hr_as_page_break=True,
        )
        render_pdf(SAMPLE.encode("utf-8"), output, config=config)
        read_pdf(output)

    def test_missing_image_reported(self, tmp_path: Path) -> None:
        diagnostics = render_pdf("![alt](nowhere.png)", tmp_path / "out.pdf")
        assert [d.kind for d in diagnostics] == ["image"]


class TestFpdfCompositor:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(FpdfCompositor(RenderConfig()), PageCompositor)
        assert isinstance(RecordingCompositor(), PageCompositor)

    def test_page_breaks(self) -> None:
        with PdfRenderer(RenderConfig(hr_as_page_break=True)) as renderer:
            renderer.run("a\n\n---\n\nb\n\n---\n\nc")
            assert renderer.compositor.pdf.page_no() == 3

    def test_landscape(self) -> None:
        width, height = FpdfCompositor(RenderConfig(orientation="landscape")).page_size()
        assert width > height

    def test_margins(self) -> None:
        margins = FpdfCompositor(RenderConfig()).get_margins()
        assert margins.left == pytest.approx(28.35, abs=0.01)

    def test_missing_font_file(self, tmp_path: Path) -> None:
        config = RenderConfig(font_family="Body", font_file=str(tmp_path / "none.ttf"))
        with pytest.raises(ConfigError, match="Font file not found"):
            FpdfCompositor(config)

    def test_image(self, tmp_path: Path) -> None:
        image = tmp_path / "red.png"
        Image.new("RGB", (20, 10), "red").save(image)
        with PdfRenderer() as renderer:
            renderer.run(f"![red]({image})")
            assert renderer.diagnostics == []
            _, y = renderer.compositor.get_cursor()
            assert y > 28.35

    def test_unreadable_image(self, tmp_path: Path) -> None:
        image = tmp_path / "broken.png"
        image.write_bytes(b"not an image")
        with PdfRenderer() as renderer:
            renderer.run(f"![broken]({image})")
            assert [d.kind for d in renderer.diagnostics] == ["image"]
