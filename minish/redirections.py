"""Opening the files and here-documents that redirect a command."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import BinaryIO, Optional

from minish.errors import ShellError
from minish.parser import Redirection, RedirectionKind

LineReader = Callable[[str], Optional[str]]

HEREDOC_PROMPT = "> "
_ENCODING = "utf-8"


class RedirectionError(ShellError):
    """Raised when the file of a redirection cannot be opened."""


def _prompt_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def open_input_file(filename: str) -> BinaryIO:
    """Open *filename* for reading as a command's standard input."""
    try:
        return open(filename, "rb")
    except OSError as exc:
        raise RedirectionError(filename, exc.strerror or str(exc)) from exc


def open_output_file(filename: str, append: bool = False) -> BinaryIO:
    """Open *filename* for writing, creating it with mode 0644.

    The file is truncated unless *append* is true.
    """
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    try:
        fd = os.open(filename, flags, 0o644)
    except OSError as exc:
        raise RedirectionError(filename, exc.strerror or str(exc)) from exc
    return os.fdopen(fd, "ab" if append else "wb")


def read_heredoc(delimiter: str, read_line: LineReader | None = None) -> str:
    """Read lines until one equals *delimiter* or input ends.

    Returns the lines read, each followed by a newline. *read_line*
    is called with the prompt and returns None at end of input.
    """
    reader = _prompt_line if read_line is None else read_line
    lines: list[str] = []
    while True:
        line = reader(HEREDOC_PROMPT)
        if line is None or line == delimiter:
            break
        lines.append(line + "\n")
    return "".join(lines)


def _heredoc_stream(delimiter: str, read_line: LineReader | None) -> BinaryIO:
    stream = tempfile.TemporaryFile()
    stream.write(read_heredoc(delimiter, read_line).encode(_ENCODING, "surrogateescape"))
    stream.seek(0)
    return stream


@dataclass
class RedirectedStreams:
    """The standard input and output a command gets from its redirections.

    A stream left as None is not redirected.
    """

    stdin: BinaryIO | None = None
    stdout: BinaryIO | None = None

    def replace_stdin(self, stream: BinaryIO) -> None:
        if self.stdin is not None:
            self.stdin.close()
        self.stdin = stream

    def replace_stdout(self, stream: BinaryIO) -> None:
        if self.stdout is not None:
            self.stdout.close()
        self.stdout = stream

    def close(self) -> None:
        for stream in (self.stdin, self.stdout):
            if stream is not None:
                stream.close()

    def __enter__(self) -> RedirectedStreams:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def apply_redirections(
    redirections: Iterable[Redirection], read_line: LineReader | None = None
) -> RedirectedStreams:
    """Open every redirection in order; later ones replace earlier ones.

    Every output file is opened (and so created or truncated) even when
    a later redirection replaces it. The first failure closes what was
    opened and raises RedirectionError.
    """
    streams = RedirectedStreams()
    try:
        for redirection in redirections:
            kind = redirection.kind
            if kind is RedirectionKind.INPUT:
                streams.replace_stdin(open_input_file(redirection.target))
            elif kind is RedirectionKind.OUTPUT:
                streams.replace_stdout(open_output_file(redirection.target, False))
            elif kind is RedirectionKind.APPEND:
                streams.replace_stdout(open_output_file(redirection.target, True))
            elif kind is RedirectionKind.HEREDOC:
                streams.replace_stdin(_heredoc_stream(redirection.target, read_line))
    except BaseException:
        streams.close()
        raise
    return streams