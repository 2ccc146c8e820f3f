"""Building commands and pipelines from a token list."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from minish.tokens import Token, TokenType


class RedirectionKind(Enum):
    INPUT = auto()
    OUTPUT = auto()
    APPEND = auto()
    HEREDOC = auto()


_KIND_OF_TOKEN = {
    TokenType.REDIR_IN: RedirectionKind.INPUT,
    TokenType.REDIR_OUT: RedirectionKind.OUTPUT,
    TokenType.REDIR_APPEND: RedirectionKind.APPEND,
    TokenType.REDIR_HEREDOC: RedirectionKind.HEREDOC,
}


@dataclass(frozen=True)
class Redirection:
    """A redirection of one command; for a heredoc the target is its delimiter."""

    kind: RedirectionKind
    target: str


@dataclass
class Command:
    """A simple command: its words and its redirections, in order."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)


@dataclass
class Pipeline:
    """Two stages joined by a pipe; longer pipelines nest on the left."""

    left: Union[Command, "Pipeline"]
    right: Command


Node = Union[Command, Pipeline]


class ParseError(ValueError):
    """Raised when the tokens do not form a valid command line."""


def _build_command(tokens: list[Token]) -> Command:
    command = Command()
    stream: Iterator[Token] = iter(tokens)
    for token in stream:
        if token.type is TokenType.WORD:
            command.args.append(token.value or "")
        elif token.is_redirection:
            target = next(stream, None)
            if target is None or target.type is not TokenType.WORD:
                raise ParseError("syntax error: redirection without a target")
            command.redirections.append(
                Redirection(_KIND_OF_TOKEN[token.type], target.value or "")
            )
    return command


def parse(tokens: Iterable[Token]) -> Node | None:
    """Parse *tokens* into a command or pipeline.

    Returns None when there is nothing before the end of input. Tokens
    after the first EOF are ignored. An empty stage, as in ``ls |``,
    becomes a command without arguments.
    """
    token_list = list(tokens)
    if not token_list or token_list[0].type is TokenType.EOF:
        return None
    segments: list[list[Token]] = [[]]
    for token in token_list:
        if token.type is TokenType.EOF:
            break
        if token.type is TokenType.PIPE:
            segments.append([])
        else:
            segments[-1].append(token)
    first, *rest = (_build_command(segment) for segment in segments)
    node: Node = first
    for command in rest:
        node = Pipeline(node, command)
    return node