"""The interactive read-and-run loop of the shell."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import Optional

from minish.builtins import ShellExit
from minish.environment import Environment, ShellState
from minish.errors import print_error
from minish.executor import execute
from minish.expansion import expand_variables
from minish.parser import Command, ParseError, parse
from minish.tokens import TokenizeError, tokenize

PROMPT = "minishell$ "
INTERRUPTED_STATUS = 130

LineReader = Callable[[str], Optional[str]]


def _prompt_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


class Shell:
    """A shell session: its variables and the status of the last command."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        source = os.environ if environ is None else environ
        self.state = ShellState(Environment(source))

    @property
    def exit_code(self) -> int:
        return self.state.exit_code

    def process_input(self, line: str) -> int:
        """Run one input line and return the resulting exit status.

        A line that cannot be tokenized is ignored. Variables are expanded
        in the words of a simple command, not in pipelines. The ``exit``
        builtin raises ShellExit.
        """
        if not line:
            return self.state.exit_code
        try:
            node = parse(tokenize(line))
        except TokenizeError:
            return self.state.exit_code
        except ParseError as exc:
            print_error(None, str(exc))
            return self.state.exit_code
        if node is None:
            return self.state.exit_code
        if isinstance(node, Command):
            node.args = [expand_variables(arg, self.state) for arg in node.args]
        self.state.exit_code = execute(node, self.state)
        return self.state.exit_code

    def run(self, read_line: LineReader | None = None) -> int:
        """Read and run lines until end of input or ``exit``.

        *read_line* is called with the prompt and returns None at end of
        input. Returns the status the shell should exit with.
        """
        reader = _prompt_line if read_line is None else read_line
        while True:
            try:
                line = reader(PROMPT)
            except KeyboardInterrupt:
                sys.stdout.write("\n")
                sys.stdout.flush()
                self.state.exit_code = INTERRUPTED_STATUS
                continue
            if line is None:
                sys.stdout.write("exit\n")
                sys.stdout.flush()
                return self.state.exit_code
            try:
                self.process_input(line)
            except ShellExit as exc:
                return exc.code
            except KeyboardInterrupt:
                sys.stdout.write("\n")
                self.state.exit_code = INTERRUPTED_STATUS


def _install_signal_handlers() -> None:
    # A handled (not ignored) SIGQUIT is reset to default in started programs.
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, lambda signum, frame: None)


def main(argv: Sequence[str] | None = None) -> int:
    """Start an interactive shell; return its exit status."""
    try:
        import readline  # noqa: F401  line editing and history for input()
    except ImportError:
        pass
    shell = Shell()
    _install_signal_handlers()
    return shell.run()


if __name__ == "__main__":
    sys.exit(main())