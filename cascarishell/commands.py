"""Commands built from tagged elements, and locating the programs they run."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass, field

from .env import Environment
from .tokens import Element, TokenType

BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})

_WORD_TYPES = (TokenType.VOID, TokenType.SINGLE_QUOTED, TokenType.DOUBLE_QUOTED)
_HEREDOC_TYPES = (TokenType.HEREDOC, TokenType.EOF_EXPAND, TokenType.EOF_LITERAL)


class CommandNotFound(Exception):
    """A program cannot be run; exit_code is the status the shell reports."""

    def __init__(self, name: str, reason: str, exit_code: int = 127):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason
        self.exit_code = exit_code


@dataclass
class Command:
    """The tokens of one stage of a pipeline."""

    tokens: list[Element] = field(default_factory=list)

    def argv(self) -> list[str]:
        """The words of the command: its name followed by its arguments."""
        return [token.data for token in self.tokens if token.type in _WORD_TYPES]

    def is_heredoc_only(self) -> bool:
        """Whether the command holds nothing but heredocs and their delimiters."""
        return all(token.type in _HEREDOC_TYPES for token in self.tokens)

    def command_line(self) -> str:
        """The words of the command joined by single spaces."""
        return " ".join(self.argv())

    @property
    def builtin(self) -> bool:
        """Whether the command names one of the shell's builtins."""
        words = self.argv()
        return bool(words) and is_builtin(words[0])


def split_commands(elements: list[Element]) -> list[Command]:
    """Split tagged elements into commands at every pipe."""
    if not elements:
        return []
    commands = [Command()]
    for element in elements:
        if element.type == TokenType.PIPE:
            commands.append(Command())
        else:
            commands[-1].tokens.append(Element(element.data, element.type))
    return commands


def is_builtin(name: str | None) -> bool:
    """Whether name is one of the shell's builtins."""
    return name is not None and name in BUILTINS


def _check_explicit(name: str) -> str:
    if os.path.isdir(name):
        raise CommandNotFound(name, "is a directory", 126)
    try:
        os.stat(name)
    except OSError as exc:
        raise CommandNotFound(name, exc.strerror or os.strerror(errno.ENOENT), 127) from exc
    if not os.access(name, os.X_OK):
        raise CommandNotFound(name, os.strerror(errno.EACCES), 126)
    return name


def search_path(name: str, env: Environment) -> str:
    """Return the file to execute for name.

    Names holding '/' are checked as given; others are looked up in PATH.
    Raises CommandNotFound when nothing can be run.
    """
    if "/" in name:
        return _check_explicit(name)
    path = env.get("PATH")
    if path is None:
        raise CommandNotFound(name, os.strerror(errno.ENOENT))
    for directory in filter(None, path.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK | os.X_OK):
            return candidate
    raise CommandNotFound(name, "command not found")