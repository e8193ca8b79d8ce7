"""Tests for PdfRenderer traversal, policies, tracing and output."""

import logging

import pytest
from markdown_it.token import Token
from mdit_py_plugins.footnote import footnote_plugin

from pliego import ImageResolver, PdfRenderer, RenderConfig
from pliego.errors import OutputError, RenderError, UnsupportedNodeError
from pliego.events import build_parser

from conftest import RecordingCompositor

FOOTNOTE = "Text[^1]\n\n[^1]: note\n"


def footnote_renderer(**options) -> PdfRenderer:
    return PdfRenderer(
        RenderConfig(**options),
        compositor=RecordingCompositor(),
        parser=build_parser().use(footnote_plugin),
        image_resolver=ImageResolver(),
    )


class OpenOnlyParser:
    """Parser double that leaves a block quote open."""

    def parse(self, text: str) -> list[Token]:
        return [Token("blockquote_open", "blockquote", 1)]


class FailingCompositor(RecordingCompositor):
    def finalize(self, path: str) -> None:
        raise OSError("disk full")


class TestUnsupportedNodes:
    def test_raise_policy(self) -> None:
        with pytest.raises(UnsupportedNodeError) as excinfo:
            footnote_renderer().run(FOOTNOTE)
        assert excinfo.value.token_type == "footnote_ref"
        assert "footnote_ref" in str(excinfo.value)

    def test_skip_policy(self) -> None:
        renderer = footnote_renderer(on_unsupported="skip")
        renderer.run(FOOTNOTE)
        writes = [text for text, _ in renderer.compositor.writes]
        assert writes == ["Text", "note"]
        assert {d.kind for d in renderer.diagnostics} == {"unsupported"}
        assert "footnote_ref" in renderer.diagnostics[0].message
        assert renderer.stack.depth() == 1

    def test_skip_records_each_node_once(self) -> None:
        renderer = footnote_renderer(on_unsupported="skip")
        renderer.run(FOOTNOTE)
        messages = [d.message for d in renderer.diagnostics]
        assert len(messages) == len(set(messages))


class TestStackBalance:
    def test_balanced_after_run(self, render) -> None:
        renderer = render("# H\n\n> - a\n>   1. b\n\n| x |\n|---|\n| y |\n")
        assert renderer.stack.depth() == 1
        assert renderer.stack.pushes == renderer.stack.pops
        assert renderer.stack.pushes > 0

    def test_unbalanced_stream(self) -> None:
        renderer = PdfRenderer(
            compositor=RecordingCompositor(),
            parser=OpenOnlyParser(),
            image_resolver=ImageResolver(),
        )
        with pytest.raises(RenderError, match="Unbalanced"):
            renderer.run("ignored")


class TestTracing:
    def test_trace_lines(self, render, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="pliego")
        render("# T")
        messages = [r.getMessage() for r in caplog.records if r.name == "pliego.rendering.pdf"]
        assert "[Document] Not handled" in messages
        assert "[Heading (1, entering)] " in messages
        assert "-[Heading (1, leaving)] " in messages
        assert "-[Text] T" in messages

    def test_silent_above_debug(self, render, caplog) -> None:
        caplog.set_level(logging.INFO, logger="pliego")
        render("# T")
        assert [r for r in caplog.records if r.name.startswith("pliego")] == []


class TestProcess:
    def test_finalize(self, make_renderer, tmp_path) -> None:
        renderer = make_renderer()
        renderer.process("hello", tmp_path / "out.pdf")
        assert renderer.compositor.finalized == str(tmp_path / "out.pdf")

    def test_output_error(self, tmp_path) -> None:
        renderer = PdfRenderer(compositor=FailingCompositor(), image_resolver=ImageResolver())
        with pytest.raises(OutputError, match="disk full") as excinfo:
            renderer.process("hello", tmp_path / "out.pdf")
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_defaults(self) -> None:
        renderer = PdfRenderer(compositor=RecordingCompositor())
        assert renderer.config == RenderConfig()
        assert renderer.diagnostics == []

    def test_context_manager_closes_own_resolver(self) -> None:
        with PdfRenderer(compositor=RecordingCompositor()) as renderer:
            renderer.run("text")
        assert renderer._images.temp_dir is None
