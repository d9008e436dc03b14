"""Token kinds and the helpers that split raw words around operator characters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
    """Kind of a lexical element, stored as the character that tags it."""

    VOID = "0"
    CMD = "c"
    BUILTIN = "b"
    PIPE = "|"
    INFILE = "i"
    OUTFILE = "o"
    APPEND_FILE = "O"
    DOUBLE_QUOTED = '"'
    SINGLE_QUOTED = "'"
    VARIABLE = "$"
    REDIR_IN = "<"
    REDIR_OUT = ">"
    HEREDOC = "h"
    REDIR_APPEND = "a"
    EOF_EXPAND = "E"
    EOF_LITERAL = "e"
    BACKSLASH = "\\"
    SEMICOLON = ";"
    AND = "&"
    LPAREN = "("
    RPAREN = ")"


@dataclass
class Element:
    """One word of the input line together with its kind."""

    data: str
    type: TokenType = TokenType.VOID


_DOUBLE_TYPES = {
    "<": TokenType.HEREDOC,
    ">": TokenType.REDIR_APPEND,
    "&": TokenType.AND,
}


def _check_char(char: str) -> None:
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")


def split_on_char(text: str, char: str) -> list[str]:
    """Split text into runs without char and single-char pieces of char."""
    _check_char(char)
    return [piece for piece in re.split(f"({re.escape(char)})", text) if piece]


def split_on_double(text: str, char: str) -> list[str]:
    """Split text around doubled operators.

    Every occurrence of char yields a doubled operator piece and consumes
    two characters of the input.
    """
    _check_char(char)
    pieces: list[str] = []
    doubled = char * 2
    pos = 0
    while pos < len(text):
        found = text.find(char, pos)
        if found == -1:
            pieces.append(text[pos:])
            break
        if found > pos:
            pieces.append(text[pos:found])
        pieces.append(doubled)
        pos = found + 2
    return pieces


def _replace_at(
    elements: list[Element], index: int, new: list[Element]
) -> list[Element]:
    if not 0 <= index < len(elements):
        raise IndexError(f"element index {index} out of range")
    before = [Element(e.data, e.type) for e in elements[:index]]
    after = [Element(e.data, e.type) for e in elements[index + 1:]]
    return before + new + after


def expand_element(
    elements: list[Element], index: int, char: str
) -> list[Element]:
    """Return a new list where the element at index is split around char.

    Pieces holding char are tagged with char's kind, the rest as VOID.
    """
    _check_char(char)
    kind = TokenType(char)
    if not 0 <= index < len(elements):
        raise IndexError(f"element index {index} out of range")
    pieces = split_on_char(elements[index].data, char)
    new = [
        Element(piece, kind if char in piece else TokenType.VOID)
        for piece in pieces
    ]
    return _replace_at(elements, index, new)


def expand_double(
    elements: list[Element], index: int, char: str
) -> list[Element]:
    """Return a new list where the element at index is split around a doubled char.

    Doubled pieces become HEREDOC for '<', REDIR_APPEND for '>' and AND
    for '&'; the rest are VOID.
    """
    _check_char(char)
    if char not in _DOUBLE_TYPES:
        raise ValueError(f"no doubled operator for {char!r}")
    kind = _DOUBLE_TYPES[char]
    if not 0 <= index < len(elements):
        raise IndexError(f"element index {index} out of range")
    pieces = split_on_double(elements[index].data, char)
    new = [
        Element(piece, kind if char in piece else TokenType.VOID)
        for piece in pieces
    ]
    return _replace_at(elements, index, new)