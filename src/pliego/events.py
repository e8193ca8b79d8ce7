"""Parser adapter: markdown-it-py tokens as a depth-first event stream.

markdown-it-py produces a flat token list where containers are bracketed by
``*_open``/``*_close`` tokens and inline content hangs off ``inline`` tokens
as children. The renderer wants a tree walk instead: every container visited
twice (entering, leaving) and every leaf once. ``iter_events`` replays the
token list in that shape.

Event shape:
    ``(node, entering)`` where ``node`` is a frozen Node. The leaving event of
    a container carries the same Node object as its entering event.

Closed mapping:
    Token types outside ``_CONTAINER_KINDS`` and ``_LEAF_KINDS`` produce
    ``NodeKind.UNSUPPORTED`` nodes; the renderer decides whether that is an
    error.

Example:
    >>> from pliego.events import build_parser, iter_events
    >>> tokens = build_parser().parse("# Title")
    >>> [(n.kind.name, e) for n, e in iter_events(tokens)][1:4]
    [('HEADING', True), ('TEXT', True), ('HEADING', False)]

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.deflist import deflist_plugin


class NodeKind(Enum):
    """Node kinds the renderer dispatches on."""

    DOCUMENT = auto()
    PARAGRAPH = auto()
    HEADING = auto()
    BLOCK_QUOTE = auto()
    HORIZONTAL_RULE = auto()
    HTML_BLOCK = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    ITEM = auto()
    TABLE = auto()
    TABLE_HEAD = auto()
    TABLE_BODY = auto()
    TABLE_ROW = auto()
    TABLE_CELL = auto()
    TEXT = auto()
    SOFT_BREAK = auto()
    HARD_BREAK = auto()
    CODE = auto()
    EMPH = auto()
    STRONG = auto()
    DEL = auto()
    LINK = auto()
    IMAGE = auto()
    HTML_SPAN = auto()
    UNSUPPORTED = auto()


@dataclass(frozen=True, slots=True)
class Node:
    """One document node as seen by the renderer.

    Attributes:
        kind: What the node is
        token_type: markdown-it token type that produced it
        parent: Kind of the enclosing node (DOCUMENT at the top level)
        level: Heading level (0 otherwise)
        ordered: Ordered list or item
        definition: Definition list, term or description
        destination: Link or image target, unresolved
        title: Link or image title
        is_header: Table cell in the header row
        literal: Text, code or raw HTML content of leaf nodes
        info: Code fence info string

    """

    kind: NodeKind
    token_type: str
    parent: NodeKind = NodeKind.DOCUMENT
    level: int = 0
    ordered: bool = False
    definition: bool = False
    destination: str = ""
    title: str = ""
    is_header: bool = False
    literal: str = ""
    info: str = ""


Event = tuple[Node, bool]

_DOCUMENT = Node(kind=NodeKind.DOCUMENT, token_type="document", parent=NodeKind.DOCUMENT)

# Container token base names (without _open/_close).
_CONTAINER_KINDS: dict[str, NodeKind] = {
    "paragraph": NodeKind.PARAGRAPH,
    "heading": NodeKind.HEADING,
    "blockquote": NodeKind.BLOCK_QUOTE,
    "bullet_list": NodeKind.LIST,
    "ordered_list": NodeKind.LIST,
    "dl": NodeKind.LIST,
    "list_item": NodeKind.ITEM,
    "dt": NodeKind.ITEM,
    "dd": NodeKind.ITEM,
    "table": NodeKind.TABLE,
    "thead": NodeKind.TABLE_HEAD,
    "tbody": NodeKind.TABLE_BODY,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_CELL,
    "td": NodeKind.TABLE_CELL,
    "em": NodeKind.EMPH,
    "strong": NodeKind.STRONG,
    "s": NodeKind.DEL,
    "link": NodeKind.LINK,
}

_LEAF_KINDS: dict[str, NodeKind] = {
    "text": NodeKind.TEXT,
    "softbreak": NodeKind.SOFT_BREAK,
    "hardbreak": NodeKind.HARD_BREAK,
    "code_inline": NodeKind.CODE,
    "html_inline": NodeKind.HTML_SPAN,
    "image": NodeKind.IMAGE,
    "hr": NodeKind.HORIZONTAL_RULE,
    "html_block": NodeKind.HTML_BLOCK,
    "code_block": NodeKind.CODE_BLOCK,
    "fence": NodeKind.CODE_BLOCK,
}

_DEFINITION_TOKENS = frozenset({"dl", "dt", "dd"})


def build_parser() -> MarkdownIt:
    """CommonMark parser with raw HTML, tables, strikethrough and definition lists."""
    return (
        MarkdownIt("commonmark", {"html": True})
        .enable(["table", "strikethrough"])
        .use(deflist_plugin)
    )


def _base_type(token_type: str) -> str:
    for suffix in ("_open", "_close"):
        if token_type.endswith(suffix):
            return token_type[: -len(suffix)]
    return token_type


def _container_node(token: Token, base: str, parent: NodeKind, list_ordered: bool) -> Node:
    kind = _CONTAINER_KINDS.get(base, NodeKind.UNSUPPORTED)
    match kind:
        case NodeKind.HEADING:
            level = int(token.tag[1:]) if token.tag[1:].isdigit() else 1
            return Node(kind, token.type, parent, level=level)
        case NodeKind.LIST:
            return Node(
                kind,
                token.type,
                parent,
                ordered=base == "ordered_list",
                definition=base in _DEFINITION_TOKENS,
            )
        case NodeKind.ITEM:
            return Node(
                kind,
                token.type,
                parent,
                ordered=list_ordered and base == "list_item",
                definition=base in _DEFINITION_TOKENS,
            )
        case NodeKind.TABLE_CELL:
            return Node(kind, token.type, parent, is_header=base == "th")
        case NodeKind.LINK:
            return Node(
                kind,
                token.type,
                parent,
                destination=str(token.attrGet("href") or ""),
                title=str(token.attrGet("title") or ""),
            )
        case _:
            return Node(kind, token.type, parent)


def _leaf_node(token: Token, parent: NodeKind) -> Node:
    kind = _LEAF_KINDS.get(token.type, NodeKind.UNSUPPORTED)
    match kind:
        case NodeKind.IMAGE:
            return Node(
                kind,
                token.type,
                parent,
                destination=str(token.attrGet("src") or ""),
                title=str(token.attrGet("title") or ""),
                literal=token.content,
            )
        case NodeKind.CODE_BLOCK:
            return Node(kind, token.type, parent, literal=token.content, info=token.info.strip())
        case _:
            return Node(kind, token.type, parent, literal=token.content)


def iter_events(tokens: Sequence[Token]) -> Iterator[Event]:
    """Replay a markdown-it token list as ``(node, entering)`` events.

    The stream opens and closes with a DOCUMENT node. ``inline`` tokens are
    transparent: their children are replayed in place. Image alt text
    (the image token's children) is not replayed.
    """
    # Open containers: (node, ordered flag inherited by list items)
    open_nodes: list[tuple[Node, bool]] = [(_DOCUMENT, False)]
    yield _DOCUMENT, True

    def walk(stream: Sequence[Token]) -> Iterator[Event]:
        for token in stream:
            if token.type == "inline":
                yield from walk(token.children or ())
                continue
            parent, ordered = open_nodes[-1]
            if token.nesting == 1:
                base = _base_type(token.type)
                node = _container_node(token, base, parent.kind, ordered)
                if base in ("bullet_list", "ordered_list", "dl"):
                    ordered = base == "ordered_list"
                open_nodes.append((node, ordered))
                yield node, True
            elif token.nesting == -1:
                if len(open_nodes) > 1:
                    node, _ = open_nodes.pop()
                else:
                    node = Node(NodeKind.UNSUPPORTED, token.type, NodeKind.DOCUMENT)
                yield node, False
            else:
                yield _leaf_node(token, parent.kind), True

    yield from walk(tokens)
    yield _DOCUMENT, False


def parse_events(source: str, parser: MarkdownIt | None = None) -> Iterator[Event]:
    """Parse ``source`` and return its event stream."""
    md = parser or build_parser()
    return iter_events(md.parse(source))


__all__ = [
    "Event",
    "Node",
    "NodeKind",
    "build_parser",
    "iter_events",
    "parse_events",
]
