"""Running commands and pipelines."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import threading
from collections.abc import Callable
from typing import IO, Any, Union

from minish.builtins import ShellExit, is_builtin, run_builtin
from minish.environment import Environment, ShellState
from minish.errors import print_error
from minish.parser import Command, Node, Pipeline
from minish.redirections import RedirectionError, apply_redirections
from minish.text import split_fields

Stream = Union[int, IO[Any], None]

_NOT_FOUND = 127
_SIGPIPE_STATUS = 128 + int(getattr(signal, "SIGPIPE", 13))


def find_command_path(name: str | None, env: Environment) -> str | None:
    """Find the program to run for *name*.

    A name holding ``/`` is used as it is; otherwise the directories of
    PATH are searched for an executable entry.
    """
    if not name:
        return None
    if "/" in name:
        return name
    path_env = env.get("PATH")
    if path_env is None:
        return None
    for directory in split_fields(path_env, ":"):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def _fileno(stream: int | IO[Any]) -> int:
    return stream if isinstance(stream, int) else stream.fileno()


def _run_builtin_to(args: list[str], state: ShellState, stdout: Stream) -> int:
    if stdout is None:
        return run_builtin(args, state)
    with open(
        _fileno(stdout), "w", encoding="utf-8", errors="surrogateescape", closefd=False
    ) as stream:
        return run_builtin(args, state, stream)


def _wait_process(process: subprocess.Popen) -> int:
    while True:
        try:
            code = process.wait()
        except KeyboardInterrupt:
            continue
        return 128 - code if code < 0 else code


def _launch(command: Command, state: ShellState, stdin: Stream, stdout: Stream) -> Callable[[], int]:
    """Start *command*; return a function that waits for its status."""
    if not command.args:
        return lambda: _NOT_FOUND
    name = command.args[0]
    if is_builtin(name):
        # Builtins run in the shell itself and do not apply redirections.
        status = _run_builtin_to(command.args, state, stdout)
        return lambda: status
    path = find_command_path(name, state.env)
    if path is None:
        print_error(name, "command not found")
        return lambda: _NOT_FOUND
    try:
        streams = apply_redirections(command.redirections)
    except RedirectionError as exc:
        print_error(exc.cmd, exc.message)
        return lambda: 1
    with streams:
        sys.stdout.flush()
        try:
            process = subprocess.Popen(
                command.args,
                executable=path,
                env=state.env.as_dict(),
                stdin=streams.stdin if streams.stdin is not None else stdin,
                stdout=streams.stdout if streams.stdout is not None else stdout,
            )
        except OSError as exc:
            print_error(name, exc.strerror or str(exc))
            return lambda: _NOT_FOUND
    return lambda: _wait_process(process)


def execute_command(
    command: Command, state: ShellState, stdin: Stream = None, stdout: Stream = None
) -> int:
    """Run a simple command and return its exit status.

    *stdin* and *stdout* are file descriptors or files, or None to keep
    the shell's own. A builtin changes *state* and may raise ShellExit.
    """
    return _launch(command, state, stdin, stdout)()


def _isolated(state: ShellState) -> ShellState:
    return ShellState(Environment(state.env.as_dict()), state.exit_code)


def _launch_in_thread(args: list[str], state: ShellState, stdout_fd: int | None) -> Callable[[], int]:
    outcome: list[int] = []

    def work() -> None:
        try:
            code = _run_builtin_to(args, state, stdout_fd)
        except ShellExit as exc:
            code = exc.code
        except BrokenPipeError:
            code = _SIGPIPE_STATUS
        finally:
            if stdout_fd is not None:
                os.close(stdout_fd)
        outcome.append(code)

    thread = threading.Thread(target=work, daemon=True)
    thread.start()

    def wait() -> int:
        thread.join()
        return outcome[0] if outcome else 1

    return wait


def _launch_stage(
    command: Command, state: ShellState, stdin_fd: int | None, stdout_fd: int | None
) -> Callable[[], int]:
    if command.args and is_builtin(command.args[0]):
        if stdin_fd is not None:
            os.close(stdin_fd)
        # A stage runs apart from the shell: its changes to state are lost.
        return _launch_in_thread(command.args, _isolated(state), stdout_fd)
    try:
        return _launch(command, state, stdin_fd, stdout_fd)
    finally:
        for fd in (stdin_fd, stdout_fd):
            if fd is not None:
                os.close(fd)


def _stages(node: Node) -> list[Command]:
    if isinstance(node, Command):
        return [node]
    return [*_stages(node.left), node.right]


def execute_pipeline(pipeline: Pipeline, state: ShellState) -> int:
    """Run every stage of *pipeline* at once; return the last one's status."""
    commands = _stages(pipeline)
    sys.stdout.flush()
    waiters: list[Callable[[], int]] = []
    read_fd: int | None = None
    for position, command in enumerate(commands):
        next_read: int | None = None
        write_fd: int | None = None
        if position < len(commands) - 1:
            try:
                next_read, write_fd = os.pipe()
            except OSError:
                if read_fd is not None:
                    os.close(read_fd)
                for wait in waiters:
                    wait()
                return 1
        waiters.append(_launch_stage(command, state, read_fd, write_fd))
        read_fd = next_read
    statuses = [wait() for wait in waiters]
    return statuses[-1]


def execute(node: Node | None, state: ShellState) -> int:
    """Run a command or pipeline; nothing to run gives status 0."""
    if node is None:
        return 0
    if isinstance(node, Pipeline):
        return execute_pipeline(node, state)
    return execute_command(node, state)