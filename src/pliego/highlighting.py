"""Syntax highlighting for code blocks.

Code blocks are colored per character. A language is highlighted only when
``<highlight_dir>/<language>.yaml`` exists; the file names the Pygments lexer
and may remap token types onto color groups. Everything else renders plain.

Definition file:
    filetype: python          # Pygments lexer alias, defaults to the file stem
    rules:                    # token type -> color group
      Name.Builtin: special

Color groups:
    Groups are the names used by micro-editor style syntax files
    ("statement", "constant.string", "comment", ...). ``color_for_group``
    maps them onto the fixed palette used for code blocks. Tokens whose
    group has no color, and text no rule covers, use the normal text color.

Usage:
    definition = SyntaxDefinition.load(find_definition("syntax", "python"))
    matches = Highlighter(definition).highlight_string(code)
    matches[0][4]   # group of line 0, column 4
    'statement'

Thread Safety:
    Highlighter instances hold a Pygments lexer and no per-call state.
    ``highlight_string`` is safe to call from multiple threads.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from pliego.errors import HighlightError
from pliego.styles import Color

# Pygments token type (without the "Token." prefix) -> color group.
DEFAULT_RULES: Mapping[str, str] = MappingProxyType(
    {
        "Keyword": "statement",
        "Keyword.Constant": "constant.bool",
        "Keyword.Namespace": "preproc",
        "Keyword.Type": "type",
        "Name.Builtin": "identifier",
        "Name.Builtin.Pseudo": "constant",
        "Name.Class": "type",
        "Name.Decorator": "preproc",
        "Name.Exception": "type",
        "Name.Function": "identifier",
        "Name.Tag": "symbol.tag.extended",
        "Name.Variable": "identifier.var",
        "Literal.String": "constant.string",
        "Literal.String.Escape": "constant.specialChar",
        "Literal.Number": "constant.number",
        "Operator": "symbol.operator",
        "Operator.Word": "statement",
        "Punctuation": "symbol.brackets",
        "Comment": "comment",
        "Comment.Preproc": "preproc",
        "Generic.Deleted": "red",
        "Generic.Inserted": "green",
        "Generic.Heading": "special",
    }
)

_GREEN = Color(42, 170, 138)
_BLUE = Color(137, 207, 240)
_RED = Color(255, 80, 80)
_CYAN = Color(0, 136, 163)
_MAGENTA = Color(255, 0, 255)
_YELLOW = Color(255, 165, 0)
_HIGH_GREEN = Color(82, 204, 0)

PALETTE: Mapping[str, Color] = MappingProxyType(
    {
        "statement": _GREEN,
        "green": _GREEN,
        "identifier": _BLUE,
        "blue": _BLUE,
        "preproc": _RED,
        "special": _RED,
        "type.keyword": _RED,
        "red": _RED,
        "constant": _CYAN,
        "constant.number": _CYAN,
        "constant.bool": _CYAN,
        "symbol.brackets": _CYAN,
        "identifier.var": _CYAN,
        "cyan": _CYAN,
        "constant.specialChar": _MAGENTA,
        "constant.string.url": _MAGENTA,
        "constant.string": _MAGENTA,
        "magenta": _MAGENTA,
        "type": _YELLOW,
        "symbol.operator": _YELLOW,
        "symbol.tag.extended": _YELLOW,
        "yellow": _YELLOW,
        "comment": _HIGH_GREEN,
        "high.green": _HIGH_GREEN,
    }
)


def color_for_group(group: str) -> Color | None:
    """Palette color for ``group``; None means the normal text color."""
    return PALETTE.get(group)


def find_definition(highlight_dir: str | Path | None, language: str) -> Path | None:
    """Locate ``<highlight_dir>/<language>.yaml``.

    Returns None when the language is empty, the directory is unset or
    missing, or there is no definition for the language.
    """
    if not language or not highlight_dir:
        return None
    base = Path(highlight_dir)
    if not base.is_dir():
        return None
    candidate = base / f"{language}.yaml"
    return candidate if candidate.is_file() else None


def _token_key(name: str) -> str:
    return name.removeprefix("Token.").removeprefix("Token")


@dataclass(frozen=True, slots=True)
class SyntaxDefinition:
    """A parsed highlight definition file.

    Attributes:
        filetype: Pygments lexer alias
        rules: Token type (e.g. "Name.Builtin") -> color group

    """

    filetype: str
    rules: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, *, default_filetype: str) -> SyntaxDefinition:
        """Build a definition from parsed YAML.

        Raises:
            HighlightError: If the structure is not a mapping of the
                expected shape
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise HighlightError(f"Definition must be a mapping, got {type(data).__name__}")
        filetype = data.get("filetype") or default_filetype
        rules = data.get("rules") or {}
        if not isinstance(filetype, str):
            raise HighlightError("'filetype' must be a string")
        if not isinstance(rules, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in rules.items()
        ):
            raise HighlightError("'rules' must map token types to group names")
        normalized = {_token_key(k): v for k, v in rules.items()}
        return cls(filetype=filetype, rules=MappingProxyType(normalized))

    @classmethod
    def load(cls, path: str | Path) -> SyntaxDefinition:
        """Read a definition file.

        Raises:
            HighlightError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise HighlightError(f"Cannot read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise HighlightError(f"Invalid YAML in {path}: {e}") from e
        return cls.from_dict(data, default_filetype=path.stem)


class Highlighter:
    """Map code positions to color groups with a Pygments lexer.

    Usage:
        >>> h = Highlighter(SyntaxDefinition(filetype="python"))
        >>> h.highlight_string("x = 1")[0][4]
        'constant.number'

    """

    __slots__ = ("definition", "_lexer", "_groups")

    def __init__(self, definition: SyntaxDefinition) -> None:
        """Create the lexer for ``definition.filetype``.

        Raises:
            HighlightError: If Pygments has no lexer for the filetype
        """
        self.definition = definition
        try:
            self._lexer: Lexer = get_lexer_by_name(
                definition.filetype, stripnl=False, ensurenl=False
            )
        except ClassNotFound:
            raise HighlightError(f"No Pygments lexer for '{definition.filetype}'") from None
        self._groups: dict[_TokenType, str | None] = {}

    def group_for(self, ttype: _TokenType) -> str | None:
        """Color group for a token type, walking up its parents.

        Definition rules are searched first, then ``DEFAULT_RULES``.
        """
        if ttype in self._groups:
            return self._groups[ttype]
        group = self._walk(ttype, self.definition.rules) or self._walk(ttype, DEFAULT_RULES)
        self._groups[ttype] = group
        return group

    @staticmethod
    def _walk(ttype: _TokenType | None, rules: Mapping[str, str]) -> str | None:
        while ttype is not None:
            key = _token_key(str(ttype))
            if key in rules:
                return rules[key]
            ttype = ttype.parent
        return None

    def highlight_string(self, code: str) -> dict[int, dict[int, str]]:
        """Return ``{line: {column: group}}`` for every mapped character.

        Lines and columns are zero-based character indices into ``code``.
        Newlines and unmapped characters are absent.
        """
        line_starts = [0]
        line_starts.extend(i + 1 for i, ch in enumerate(code) if ch == "\n")

        matches: dict[int, dict[int, str]] = {}
        for index, ttype, value in self._lexer.get_tokens_unprocessed(code):
            group = self.group_for(ttype)
            if group is None:
                continue
            for offset, ch in enumerate(value, start=index):
                if ch == "\n":
                    continue
                line = bisect_right(line_starts, offset) - 1
                matches.setdefault(line, {})[offset - line_starts[line]] = group
        return matches


__all__ = [
    "DEFAULT_RULES",
    "PALETTE",
    "Highlighter",
    "SyntaxDefinition",
    "color_for_group",
    "find_definition",
]
