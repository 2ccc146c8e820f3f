"""Error reporting in the shell's message format."""

from __future__ import annotations

import sys
from typing import TextIO

PROMPT_NAME = "minishell"


def format_error(cmd: str | None, msg: str) -> str:
    """Return an error line such as ``minishell: cd: HOME not set``."""
    if cmd is not None:
        return f"{PROMPT_NAME}: {cmd}: {msg}"
    return f"{PROMPT_NAME}: {msg}"


def print_error(cmd: str | None, msg: str, stream: TextIO | None = None) -> None:
    """Write a formatted error line to *stream* (standard error by default)."""
    target = sys.stderr if stream is None else stream
    target.write(format_error(cmd, msg) + "\n")
    target.flush()


class ShellError(Exception):
    """An error tied to a command, reported in the shell's message format."""

    def __init__(self, cmd: str | None, message: str) -> None:
        super().__init__(format_error(cmd, message))
        self.cmd = cmd
        self.message = message