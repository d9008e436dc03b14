"""Variable expansion and quote removal on command tokens."""

from __future__ import annotations

from .env import Environment, is_assignment, is_valid_identifier
from .quoting import is_quote, strip_quotes
from .tokens import Element, TokenType

_EXPANDABLE = (TokenType.VOID, TokenType.DOUBLE_QUOTED, TokenType.SINGLE_QUOTED)


def _is_space(char: str) -> bool:
    return char == " " or "\t" <= char <= "\r"


def _is_name_part(char: str) -> bool:
    return char not in " \n$" and not is_quote(char)


def dollar_word(text: str, start: int) -> str:
    """The word after a '$': up to the next '$', space or quote."""
    end = start
    while end < len(text) and text[end] != "$" and not _is_space(text[end]) \
            and not is_quote(text[end]):
        end += 1
    return text[start:end]


def remove_variable(text: str) -> str:
    """Remove the first '$' and the name that follows it.

    Raises ValueError when text holds no '$'.
    """
    start = text.index("$")
    end = start + 1
    while end < len(text) and _is_name_part(text[end]):
        end += 1
    return text[:start] + text[end:]


def _replace_exit_code(text: str, exit_code: int) -> str:
    start = text.index("$")
    return text[:start] + str(exit_code) + text[start + 2:]


def expand(content: str, env: Environment, exit_code: int) -> str:
    """Expand $NAME and $? outside single quotes.

    Unknown valid names are removed; anything else after '$' is kept.
    After each change the scan starts again from the beginning.
    """
    pos = 0
    quote: str | None = None
    while pos < len(content):
        char = content[pos]
        if quote is None and is_quote(char):
            quote = char
        elif quote is not None and char == quote:
            quote = None
        if char == "$" and quote != "'":
            name = dollar_word(content, pos + 1) if pos + 1 < len(content) else None
            value = env.get(name) if name is not None else None
            restart = True
            if value is not None:
                content = content[:pos] + value + content[pos + 1 + len(name):]
            elif name is not None and (is_valid_identifier(name) or is_assignment(name)):
                content = remove_variable(content)
            elif content[pos + 1:pos + 2] == "?":
                content = _replace_exit_code(content, exit_code)
            else:
                restart = False
            quote = None
            if restart:
                pos = 0
                continue
        pos += 1
    return content


def expand_tokens(
    tokens: list[Element], env: Environment, exit_code: int
) -> list[Element]:
    """Expand variables in word tokens that hold a '$'."""
    result = []
    for token in tokens:
        data = token.data
        if token.type in _EXPANDABLE and "$" in data:
            data = expand(data, env, exit_code)
        result.append(Element(data, token.type))
    return result


def strip_token_quotes(tokens: list[Element]) -> list[Element]:
    """Remove delimiting quotes from every token."""
    return [Element(strip_quotes(token.data), token.type) for token in tokens]