"""Turning an input line into tagged elements and checking their syntax."""

from __future__ import annotations

from .quoting import (
    QUOTED_SPACE,
    UnclosedQuotesError,
    classify_quoted,
    pad_special_chars,
    protect_quoted_spaces,
    quote_type,
)
from .tokens import Element, TokenType, expand_double, expand_element

_SPECIAL_SET = "|;\\()"
_STANDARD_SET = "|<>ha"
_UNSUPPORTED_SET = ";\\&()"

SYNTAX_EXIT_CODE = 258


class ShellSyntaxError(Exception):
    """The input line cannot be run; exit_code is the status it leaves."""

    def __init__(self, message: str, exit_code: int = SYNTAX_EXIT_CODE):
        super().__init__(message)
        self.exit_code = exit_code


def split_input(line: str) -> list[Element]:
    """Split a raw line into elements on spaces outside quotes.

    Elements holding closed quotes are tagged by their first quote kind.
    Raises ShellSyntaxError when a quote is left open.
    """
    prepared = protect_quoted_spaces(pad_special_chars(line))
    words = [word for word in prepared.split(" ") if word]
    elements = [Element(word.replace(QUOTED_SPACE, " ")) for word in words]
    for element in elements:
        if quote_type(element.data) is not None:
            try:
                classify_quoted(element)
            except UnclosedQuotesError as exc:
                raise ShellSyntaxError(str(exc), exit_code=1) from exc
    return elements


def _token_special_chars(elements: list[Element]) -> list[Element]:
    for char in _SPECIAL_SET:
        index = 0
        while index < len(elements):
            element = elements[index]
            if element.type == TokenType.VOID and char in element.data:
                if len(element.data) > 1:
                    elements = expand_element(elements, index, char)
                else:
                    element.type = TokenType(char)
            index += 1
    return elements


def _is_doubled(text: str, pos: int) -> bool:
    char = text[pos]
    return text[pos + 1:pos + 2] == char and text[pos + 2:pos + 3] != char


def _token_and(elements: list[Element]) -> list[Element]:
    index = 0
    while index < len(elements):
        element = elements[index]
        pos = element.data.find("&")
        if element.type == TokenType.VOID and pos >= 0 and _is_doubled(element.data, pos):
            elements = expand_double(elements, index, "&")
        index += 1
    return elements


def _first_redirection(text: str) -> int:
    return next((pos for pos, char in enumerate(text) if char in "<>"), -1)


def _token_redirections(elements: list[Element]) -> list[Element]:
    index = 0
    while index < len(elements):
        element = elements[index]
        pos = _first_redirection(element.data)
        if element.type == TokenType.VOID and pos >= 0:
            char = element.data[pos]
            if _is_doubled(element.data, pos):
                elements = expand_double(elements, index, char)
            elif len(element.data) > 1:
                elements = expand_element(elements, index, char)
            else:
                element.type = TokenType(char)
        index += 1
    return elements


_WORD_TYPES = (TokenType.VOID, TokenType.SINGLE_QUOTED, TokenType.DOUBLE_QUOTED)


def _token_files(elements: list[Element]) -> None:
    for current, following in zip(elements, elements[1:]):
        kind, next_kind = current.type, following.type
        if kind == TokenType.REDIR_IN and next_kind in _WORD_TYPES:
            following.type = TokenType.INFILE
        elif kind == TokenType.HEREDOC:
            if next_kind in (TokenType.VOID, TokenType.DOUBLE_QUOTED):
                following.type = TokenType.EOF_EXPAND
            elif next_kind == TokenType.SINGLE_QUOTED:
                following.type = TokenType.EOF_LITERAL
        elif kind == TokenType.REDIR_OUT and next_kind in _WORD_TYPES:
            following.type = TokenType.OUTFILE
        elif kind == TokenType.REDIR_APPEND and next_kind in _WORD_TYPES:
            following.type = TokenType.APPEND_FILE


def _unexpected(elements: list[Element], index: int) -> ShellSyntaxError:
    if index + 1 < len(elements):
        token = elements[index + 1].data
    else:
        token = "newline"
    return ShellSyntaxError(f"syntax error near unexpected token `{token}'")


def _check_standard(elements: list[Element]) -> None:
    for char in _STANDARD_SET:
        for index, element in enumerate(elements):
            if element.type != char:
                continue
            has_next = index + 1 < len(elements)
            if has_next and elements[index + 1].type == char:
                raise _unexpected(elements, index)
            if not has_next:
                raise _unexpected(elements, index)
            if char != "|" and elements[index + 1].type in _STANDARD_SET:
                raise _unexpected(elements, index)


def _check_unsupported(elements: list[Element]) -> None:
    for char in _UNSUPPORTED_SET:
        if any(element.type == char for element in elements):
            raise ShellSyntaxError(f"syntax error, not supported token `{char}'")


def _check_heredoc_delimiters(elements: list[Element]) -> None:
    heredocs = sum(1 for e in elements if e.type == TokenType.HEREDOC)
    delimiters = sum(
        1
        for e in elements
        if e.type in (TokenType.EOF_EXPAND, TokenType.EOF_LITERAL)
    )
    if heredocs != delimiters:
        raise _unexpected(elements, len(elements))


def check_syntax(elements: list[Element]) -> None:
    """Raise ShellSyntaxError when the tagged elements do not form a valid line."""
    _check_standard(elements)
    _check_unsupported(elements)
    _check_heredoc_delimiters(elements)


def tokenize(line: str) -> list[Element]:
    """Split and tag a line, then check its syntax."""
    elements = split_input(line)
    elements = _token_special_chars(elements)
    elements = _token_and(elements)
    elements = _token_redirections(elements)
    _token_files(elements)
    check_syntax(elements)
    return elements