"""Text helpers shared by the compositor and the renderer.

Example:
    >>> from pliego.utils.text import to_latin1
    >>> to_latin1("\\u201cquoted\\u201d \\u2022 item")
    '"quoted" \xb7 item'
"""

from __future__ import annotations

# Core PDF fonts only cover latin-1; these keep the common typographic
# characters readable instead of turning them into "?".
_LATIN1_REPLACEMENTS = {
    "\u00a0": " ",
    "\u2007": " ",
    "\u2009": " ",
    "\u200b": "",
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2013": "-",
    "\u2014": "--",
    "\u2015": "--",
    "\u2212": "-",
    "\u2026": "...",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2022": "\u00b7",
    "\u2190": "<-",
    "\u2192": "->",
    "\u21d0": "<=",
    "\u21d2": "=>",
}

_TRANSLATION = str.maketrans(_LATIN1_REPLACEMENTS)


def to_latin1(text: str) -> str:
    """Transliterate text so it can be drawn with a core (latin-1) font.

    Known typographic characters are replaced by close equivalents; anything
    else outside latin-1 becomes ``?``.
    """
    if text.isascii():
        return text
    cleaned = text.translate(_TRANSLATION)
    return cleaned.encode("latin-1", "replace").decode("latin-1")


def normalize_source(source: str | bytes) -> str:
    """Decode bytes as UTF-8 and convert CRLF line endings to LF."""
    if isinstance(source, bytes):
        source = source.decode("utf-8")
    return source.replace("\r\n", "\n")
