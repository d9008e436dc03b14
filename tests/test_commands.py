import os
import stat

import pytest

from cascarishell.commands import (
    Command,
    CommandNotFound,
    is_builtin,
    search_path,
    split_commands,
)
from cascarishell.env import Environment
from cascarishell.lexer import tokenize
from cascarishell.tokens import Element, TokenType


def test_split_commands_on_pipes():
    commands = split_commands(tokenize("ls -l | wc"))
    assert [c.argv() for c in commands] == [["ls", "-l"], ["wc"]]


def test_split_commands_empty():
    assert split_commands([]) == []


def test_redirections_not_in_argv():
    (command,) = split_commands(tokenize("cat < in.txt > out.txt"))
    assert command.argv() == ["cat"]
    assert command.command_line() == "cat"


def test_command_line_joins_words():
    (command,) = split_commands(tokenize("echo hi there"))
    assert command.command_line() == "echo hi there"


def test_heredoc_only():
    (command,) = split_commands(tokenize("<< EOF"))
    assert command.is_heredoc_only() is True
    (other,) = split_commands(tokenize("cat << EOF"))
    assert other.is_heredoc_only() is False


def test_builtin_property():
    assert Command([Element("cd"), Element("x")]).builtin is True
    assert Command([Element("ls")]).builtin is False
    assert Command([Element("f", TokenType.OUTFILE)]).builtin is False


@pytest.mark.parametrize("name", ["echo", "cd", "pwd", "export", "unset", "env", "exit"])
def test_is_builtin(name):
    assert is_builtin(name) is True


def test_is_builtin_rejects_others():
    assert is_builtin("ls") is False
    assert is_builtin(None) is False


def _make_exec(path):
    path.write_text("#!/bin/sh\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


def test_search_path_finds_program(tmp_path):
    _make_exec(tmp_path / "tool")
    env = Environment({"PATH": f"/nonexistent:{tmp_path}"})
    assert search_path("tool", env) == f"{tmp_path}/tool"


def test_search_path_not_found(tmp_path):
    env = Environment({"PATH": str(tmp_path)})
    with pytest.raises(CommandNotFound) as info:
        search_path("missing", env)
    assert info.value.exit_code == 127
    assert str(info.value) == "missing: command not found"


def test_search_path_without_path():
    with pytest.raises(CommandNotFound) as info:
        search_path("ls", Environment({}))
    assert info.value.exit_code == 127
    assert info.value.reason == os.strerror(2)


def test_explicit_directory(tmp_path):
    with pytest.raises(CommandNotFound) as info:
        search_path(str(tmp_path), Environment({}))
    assert info.value.exit_code == 126
    assert info.value.reason == "is a directory"


def test_explicit_missing(tmp_path):
    with pytest.raises(CommandNotFound) as info:
        search_path(str(tmp_path / "nope"), Environment({}))
    assert info.value.exit_code == 127


def test_explicit_not_executable(tmp_path):
    target = tmp_path / "plain"
    target.write_text("data")
    target.chmod(0o644)
    with pytest.raises(CommandNotFound) as info:
        search_path(str(target), Environment({}))
    assert info.value.exit_code == 126


def test_explicit_executable(tmp_path):
    target = _make_exec(tmp_path / "run")
    assert search_path(str(target), Environment({})) == str(target)