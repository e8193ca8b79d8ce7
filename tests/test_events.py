"""Tests for the markdown-it-py event stream adapter."""

from markdown_it.token import Token

from pliego.events import NodeKind, build_parser, iter_events, parse_events


def kinds(source: str) -> list[tuple[str, bool]]:
    return [(node.kind.name, entering) for node, entering in parse_events(source)]


class TestEventShape:
    def test_document_brackets_stream(self) -> None:
        events = kinds("")
        assert events == [("DOCUMENT", True), ("DOCUMENT", False)]

    def test_heading(self) -> None:
        events = list(parse_events("## Title"))
        assert [(n.kind, e) for n, e in events] == [
            (NodeKind.DOCUMENT, True),
            (NodeKind.HEADING, True),
            (NodeKind.TEXT, True),
            (NodeKind.HEADING, False),
            (NodeKind.DOCUMENT, False),
        ]
        assert events[1][0].level == 2
        assert events[2][0].literal == "Title"
        assert events[2][0].parent is NodeKind.HEADING

    def test_leave_carries_enter_node(self) -> None:
        events = list(parse_events("> quote"))
        enter = next(n for n, e in events if n.kind is NodeKind.BLOCK_QUOTE and e)
        leave = next(n for n, e in events if n.kind is NodeKind.BLOCK_QUOTE and not e)
        assert enter is leave

    def test_inline_children_are_replayed(self) -> None:
        assert kinds("a *b* `c`")[1:-1] == [
            ("PARAGRAPH", True),
            ("TEXT", True),
            ("EMPH", True),
            ("TEXT", True),
            ("EMPH", False),
            ("TEXT", True),
            ("CODE", True),
            ("PARAGRAPH", False),
        ]

    def test_breaks(self) -> None:
        assert ("SOFT_BREAK", True) in kinds("a\nb")
        assert ("HARD_BREAK", True) in kinds("a  \nb")


class TestLists:
    def test_bullet_list(self) -> None:
        events = list(parse_events("- a\n- b"))
        lists = [n for n, e in events if n.kind is NodeKind.LIST and e]
        items = [n for n, e in events if n.kind is NodeKind.ITEM and e]
        assert len(lists) == 1 and not lists[0].ordered
        assert len(items) == 2 and not any(item.ordered for item in items)

    def test_ordered_items(self) -> None:
        events = list(parse_events("3. a\n4. b"))
        assert all(n.ordered for n, e in events if n.kind in (NodeKind.LIST, NodeKind.ITEM))

    def test_paragraph_parent_is_item(self) -> None:
        events = list(parse_events("- a"))
        paragraph = next(n for n, e in events if n.kind is NodeKind.PARAGRAPH)
        assert paragraph.parent is NodeKind.ITEM

    def test_nested_bullet_in_ordered_is_unordered(self) -> None:
        events = list(parse_events("1. a\n   - b"))
        items = [n for n, e in events if n.kind is NodeKind.ITEM and e]
        assert [item.ordered for item in items] == [True, False]

    def test_definition_list(self) -> None:
        events = list(parse_events("Term\n: Definition\n"))
        containers = [(n.kind, n.definition) for n, e in events if e and n.kind in (NodeKind.LIST, NodeKind.ITEM)]
        assert containers == [
            (NodeKind.LIST, True),
            (NodeKind.ITEM, True),
            (NodeKind.ITEM, True),
        ]


class TestLeaves:
    def test_fenced_code(self) -> None:
        node = next(n for n, _ in parse_events("```python extra\nprint(1)\n```\n") if n.kind is NodeKind.CODE_BLOCK)
        assert node.info == "python extra"
        assert node.literal == "print(1)\n"

    def test_indented_code(self) -> None:
        node = next(n for n, _ in parse_events("    code\n") if n.kind is NodeKind.CODE_BLOCK)
        assert node.info == ""
        assert node.literal == "code\n"

    def test_image_alt_is_not_replayed(self) -> None:
        events = list(parse_events('![alt *x*](a.png "T")'))
        assert [n.kind.name for n, _ in events] == [
            "DOCUMENT",
            "PARAGRAPH",
            "IMAGE",
            "PARAGRAPH",
            "DOCUMENT",
        ]
        image = events[2][0]
        assert (image.destination, image.title) == ("a.png", "T")

    def test_link(self) -> None:
        link = next(n for n, _ in parse_events('[x](http://a.b "t")') if n.kind is NodeKind.LINK)
        assert (link.destination, link.title) == ("http://a.b", "t")
        assert link.parent is NodeKind.PARAGRAPH

    def test_html_and_rules(self) -> None:
        events = kinds("<div>\nhi\n</div>\n\n---\n\na <b>x</b>\n")
        assert ("HTML_BLOCK", True) in events
        assert ("HORIZONTAL_RULE", True) in events
        assert ("HTML_SPAN", True) in events

    def test_strikethrough(self) -> None:
        assert ("DEL", True) in kinds("~~gone~~")

    def test_table_cells(self) -> None:
        events = list(parse_events("| A | B |\n|---|---|\n| 1 | 2 |\n"))
        cells = [n for n, e in events if n.kind is NodeKind.TABLE_CELL and e]
        assert [c.is_header for c in cells] == [True, True, False, False]
        names = [n.kind.name for n, e in events if e]
        assert names.index("TABLE_HEAD") < names.index("TABLE_BODY")


class TestUnsupported:
    def test_unknown_leaf_token(self) -> None:
        token = Token(type="footnote_ref", tag="", nesting=0)
        events = list(iter_events([token]))
        node = events[1][0]
        assert node.kind is NodeKind.UNSUPPORTED
        assert node.token_type == "footnote_ref"

    def test_unknown_container_tokens(self) -> None:
        tokens = [
            Token(type="aside_open", tag="aside", nesting=1),
            Token(type="aside_close", tag="aside", nesting=-1),
        ]
        events = list(iter_events(tokens))
        assert [(n.kind, e) for n, e in events[1:3]] == [
            (NodeKind.UNSUPPORTED, True),
            (NodeKind.UNSUPPORTED, False),
        ]

    def test_build_parser_is_fresh(self) -> None:
        assert build_parser() is not build_parser()
