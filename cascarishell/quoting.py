"""Quote handling for raw input lines and single words."""

from __future__ import annotations

from .tokens import Element, TokenType

QUOTED_SPACE = "\x01"
"""Stand-in for a space inside quotes while a line is split on spaces."""

_SPECIAL = frozenset("|<>")
_REDIRS = frozenset("<>")


class UnclosedQuotesError(ValueError):
    """A word holds a quote that is never closed."""

    def __init__(self, message: str = "syntax error: unclosed quotes"):
        super().__init__(message)


def is_quote(char: str) -> bool:
    """Whether char is a single or double quote."""
    return char in ("'", '"')


def _is_space(char: str) -> bool:
    return char == " " or "\t" <= char <= "\r"


def in_quotes(text: str, pos: int) -> bool:
    """Whether position pos lies inside quotes.

    Any quote character toggles the state, and an opening quote counts as
    inside while a closing one does not.
    """
    inside = False
    for index, char in enumerate(text):
        if is_quote(char):
            inside = not inside
        if index == pos and inside:
            return True
    return False


def _pad_right(text: str) -> str:
    pos = 0
    while pos < len(text):
        char = text[pos]
        if (
            char in _SPECIAL
            and pos + 1 < len(text)
            and not _is_space(text[pos + 1])
            and text[pos + 1] not in _REDIRS
            and not in_quotes(text, pos)
        ):
            text = f"{text[:pos + 1]} {text[pos + 1:]}"
        pos += 1
    return text


def _pad_left(text: str) -> str:
    pos = 0
    while pos < len(text):
        char = text[pos]
        if (
            char in _SPECIAL
            and pos > 0
            and not _is_space(text[pos - 1])
            and text[pos - 1] not in _REDIRS
            and not in_quotes(text, pos)
        ):
            text = f"{text[:pos]} {text[pos:]}"
        pos += 1
    return text


def pad_special_chars(text: str) -> str:
    """Put spaces around unquoted '|', '<' and '>' characters.

    Doubled redirections stay together.
    """
    return _pad_left(_pad_right(text))


def protect_quoted_spaces(text: str) -> str:
    """Replace spaces inside quotes with QUOTED_SPACE."""
    result: list[str] = []
    open_quote: str | None = None
    for char in text:
        if open_quote is None:
            if is_quote(char):
                open_quote = char
        elif char == open_quote:
            open_quote = None
        elif char == " ":
            char = QUOTED_SPACE
        result.append(char)
    return "".join(result)


def count_quotes(text: str) -> int:
    """Count quotes that open or close a quoted run.

    Quotes of the other kind inside a run are not counted; an odd result
    means the last run is never closed.
    """
    count = 0
    pos = 0
    while pos < len(text):
        char = text[pos]
        if is_quote(char):
            count += 1
            closing = text.find(char, pos + 1)
            if closing == -1:
                break
            count += 1
            pos = closing + 1
        else:
            pos += 1
    return count


def closed_quotes(text: str) -> bool:
    """Whether the first kind of quote in text occurs an even number of times."""
    kind = quote_type(text)
    if kind is None:
        return True
    return text.count(kind) % 2 == 0


def quote_type(text: str) -> str | None:
    """The first quote character in text, or None."""
    return next((char for char in text if is_quote(char)), None)


def classify_quoted(element: Element) -> Element:
    """Tag an element by its first quote kind.

    Raises UnclosedQuotesError when a quote is left open.
    """
    if count_quotes(element.data) % 2 != 0:
        raise UnclosedQuotesError()
    kind = quote_type(element.data)
    if kind is not None and closed_quotes(element.data):
        element.type = TokenType(kind)
    return element


def strip_quotes(text: str) -> str:
    """Remove the quotes that delimit quoted runs, keeping what they hold."""
    result: list[str] = []
    open_quote: str | None = None
    for char in text:
        if open_quote is None and is_quote(char):
            open_quote = char
        elif open_quote is not None and char == open_quote:
            open_quote = None
        else:
            result.append(char)
    return "".join(result)