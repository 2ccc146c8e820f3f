"""Commands the shell runs itself."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Sequence
from typing import TextIO

from minish.environment import ShellState
from minish.errors import print_error

BUILTIN_NAMES = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ATOI_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class ShellExit(Exception):
    """Raised by ``exit``; *code* is the process exit status (0-255)."""

    def __init__(self, code: int) -> None:
        super().__init__(f"exit {code}")
        self.code = code


def _out(stream: TextIO | None) -> TextIO:
    return sys.stdout if stream is None else stream


def _atoi(text: str) -> int:
    match = _ATOI_RE.match(text)
    return int(match.group(1)) if match else 0


def is_builtin(name: str | None) -> bool:
    """Return True if *name* is a command the shell runs itself."""
    return name in BUILTIN_NAMES


def is_valid_identifier(name: str | None) -> bool:
    """Return True if *name* is a valid variable name."""
    return bool(name) and _IDENTIFIER_RE.fullmatch(name) is not None


def echo(args: Sequence[str], stdout: TextIO | None = None) -> int:
    """Print the arguments; a first argument of exactly ``-n`` drops the newline."""
    out = _out(stdout)
    words = list(args[1:])
    newline = True
    if words and words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    out.flush()
    return 0


def cd(args: Sequence[str], state: ShellState) -> int:
    """Change directory to the argument, or to HOME without one."""
    if len(args) > 1:
        path = args[1]
    else:
        path = state.env.get("HOME")
        if path is None:
            print_error("cd", "HOME not set")
            return 1
    try:
        os.chdir(path)
    except OSError as exc:
        print_error("cd", exc.strerror or str(exc))
        return 1
    return 0


def pwd(stdout: TextIO | None = None) -> int:
    """Print the current directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        print_error("pwd", exc.strerror or str(exc))
        return 1
    out = _out(stdout)
    out.write(cwd + "\n")
    out.flush()
    return 0


def env(state: ShellState, stdout: TextIO | None = None) -> int:
    """Print every variable as ``KEY=VALUE``."""
    out = _out(stdout)
    for line in state.env.to_strings():
        out.write(line + "\n")
    out.flush()
    return 0


def export(args: Sequence[str], state: ShellState, stdout: TextIO | None = None) -> int:
    """Set variables from ``KEY=VALUE`` (or ``KEY``) arguments.

    Without arguments it lists the variables. It stops at the first
    invalid name, keeping those set before it.
    """
    if len(args) < 2:
        return env(state, stdout)
    for arg in args[1:]:
        key, _, value = arg.partition("=")
        if not is_valid_identifier(key):
            print_error("export", "not a valid identifier")
            return 1
        state.env.set(key, value)
    return 0


def unset(args: Sequence[str], state: ShellState) -> int:
    """Remove the named variables, stopping at the first invalid name."""
    for name in args[1:]:
        if not is_valid_identifier(name):
            print_error("unset", "not a valid identifier")
            return 1
        state.env.unset(name)
    return 0


def exit_shell(args: Sequence[str], state: ShellState, stdout: TextIO | None = None) -> int:
    """Print ``exit`` and raise ShellExit.

    The status is the numeric prefix of the argument (0 if there is
    none), or the last exit status without an argument. With more
    than one argument nothing happens and 1 is returned.
    """
    code = state.exit_code
    if len(args) > 1:
        code = _atoi(args[1])
        if len(args) > 2:
            print_error("exit", "too many arguments")
            return 1
    out = _out(stdout)
    out.write("exit\n")
    out.flush()
    raise ShellExit(code & 0xFF)


def run_builtin(args: Sequence[str], state: ShellState, stdout: TextIO | None = None) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    if not args:
        return 1
    name = args[0]
    if name == "echo":
        return echo(args, stdout)
    if name == "cd":
        return cd(args, state)
    if name == "pwd":
        return pwd(stdout)
    if name == "export":
        return export(args, state, stdout)
    if name == "unset":
        return unset(args, state)
    if name == "env":
        return env(state, stdout)
    if name == "exit":
        return exit_shell(args, state, stdout)
    return 1