"""The shell's builtin commands: echo, cd, pwd, env, export, unset and exit."""

from __future__ import annotations

import os
from typing import TextIO

from .env import Environment, is_assignment, is_valid_identifier

_PREFIX = "cascaribash"


class ShellExit(Exception):
    """The shell is asked to terminate with the given status."""

    def __init__(self, code: int):
        super().__init__(code)
        self.code = code


def echo(argv: list[str], out: TextIO) -> int:
    """Print the arguments separated by spaces; leading -n drops the newline."""
    args = argv[1:]
    newline = True
    while args and args[0] == "-n":
        newline = False
        args = args[1:]
    out.write(" ".join(args))
    if newline:
        out.write("\n")
    return 0


def pwd(out: TextIO, err: TextIO) -> int:
    """Print the working directory."""
    try:
        current = os.getcwd()
    except OSError:
        err.write(f"{_PREFIX}: pwd error\n")
        out.write("\n")
        return 1
    out.write(f"{current}\n")
    return 0


def _getcwd() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def _chdir(path: str, err: TextIO) -> int:
    try:
        os.chdir(path)
    except OSError:
        err.write(f"{_PREFIX}: cd error\n")
        return 1
    return 0


def _dir_home(env: Environment, err: TextIO) -> int:
    home = env.get("HOME")
    if home is None:
        err.write(f"{_PREFIX}: cd: HOME not set\n")
        return 1
    return _chdir(home, err)


def _dir_back(current: str, err: TextIO) -> int:
    cut = current.rfind("/")
    return _chdir("/" if cut <= 0 else current[:cut], err)


def _update_pwd(env: Environment, old: str) -> None:
    current = _getcwd()
    if current == old:
        return
    if env.has("OLDPWD"):
        env.overwrite("OLDPWD", old)
    if env.has("PWD"):
        env.overwrite("PWD", current)


def cd(argv: list[str], env: Environment, err: TextIO) -> int:
    """Change directory and keep PWD and OLDPWD up to date."""
    current = _getcwd()
    target = argv[1] if len(argv) > 1 else None
    if target is None or target == "~":
        code = _dir_home(env, err)
    elif target in (".", "./"):
        return 0
    elif target in ("..", "../"):
        code = _dir_back(current, err)
    else:
        try:
            with os.scandir(target):
                pass
        except OSError as exc:
            err.write(f"{_PREFIX}: cd: {target}: {exc.strerror}\n")
            return 1
        code = _chdir(target, err)
    _update_pwd(env, current)
    return code


def env_builtin(argv: list[str], env: Environment, out: TextIO, err: TextIO) -> int:
    """Print the environment; arguments other than 'env' are errors."""
    if len(argv) == 2 and argv[1] == "-":
        return 0
    rest = argv
    while rest and rest[0] == "env":
        rest = rest[1:]
    if rest:
        first = rest[0]
        if first.startswith("-") and len(first) > 1:
            err.write(f"{_PREFIX}: env: illegal option -- {first[1]}\n")
            return 1
        err.write(f"{_PREFIX}: env: {argv[1]}: No such file or directory\n")
        return 127
    for entry in env.entries():
        out.write(f"{entry}\n")
    return 0


def export(argv: list[str], env: Environment, out: TextIO, err: TextIO) -> int:
    """Export variables, or list them when given no arguments."""
    code = 0
    if len(argv) == 1:
        for line in env.export_lines():
            out.write(f"{line}\n")
    for arg in argv[1:]:
        if not is_valid_identifier(arg):
            err.write(f"{_PREFIX}: export: `{arg}': not a valid identifier\n")
            code = 1
            continue
        if is_assignment(arg):
            if env.replace(arg):
                continue
            env.add(arg)
        else:
            env.add_export_only(arg)
        code = 0
    return code


def unset(argv: list[str], env: Environment, err: TextIO) -> int:
    """Remove variables from the environment and the export list."""
    code = 0
    for arg in argv[1:]:
        if not is_valid_identifier(arg):
            err.write(f"{_PREFIX}: unset: `{arg}': not valid identifier\n")
            code = 1
            continue
        env.unset(arg)
        code = 0
    return code


def _is_numeric(text: str) -> bool:
    body = text[1:] if text[:1] in ("+", "-") else text
    return all("0" <= char <= "9" for char in body)


def _atoi(text: str) -> int:
    sign = -1 if text.startswith("-") else 1
    digits = text.lstrip("+-")
    return sign * int(digits) if digits else 0


def exit_builtin(argv: list[str], out: TextIO, err: TextIO) -> int:
    """Raise ShellExit with the requested status.

    Returns 1 without exiting when given too many arguments.
    """
    if len(argv) == 1:
        out.write("exit\n")
        raise ShellExit(0)
    arg = argv[1]
    if not _is_numeric(arg):
        err.write(f"{_PREFIX}: exit: {arg}: numeric argument required\n")
        raise ShellExit(255)
    if len(argv) == 2:
        out.write("exit\n")
        raise ShellExit(_atoi(arg) & 0xFF)
    err.write(f"exit\n{_PREFIX}: exit: too many arguments\n")
    return 1


def run_builtin(argv: list[str], env: Environment, out: TextIO, err: TextIO) -> int:
    """Run the builtin named by argv[0] and return its status."""
    name = argv[0] if argv else None
    if name == "echo":
        return echo(argv, out)
    if name == "cd":
        return cd(argv, env, err)
    if name == "pwd":
        return pwd(out, err)
    if name == "export":
        return export(argv, env, out, err)
    if name == "unset":
        return unset(argv, env, err)
    if name == "env":
        return env_builtin(argv, env, out, err)
    if name == "exit":
        return exit_builtin(argv, out, err)
    raise ValueError(f"not a builtin: {name!r}")