"""Splitting an input line into shell tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    WORD = auto()
    PIPE = auto()
    REDIR_IN = auto()
    REDIR_OUT = auto()
    REDIR_APPEND = auto()
    REDIR_HEREDOC = auto()
    EOF = auto()


REDIRECTION_TYPES = frozenset(
    {
        TokenType.REDIR_IN,
        TokenType.REDIR_OUT,
        TokenType.REDIR_APPEND,
        TokenType.REDIR_HEREDOC,
    }
)

_OPERATORS = {
    "|": TokenType.PIPE,
    "<": TokenType.REDIR_IN,
    "<<": TokenType.REDIR_HEREDOC,
    ">": TokenType.REDIR_OUT,
    ">>": TokenType.REDIR_APPEND,
}


@dataclass(frozen=True)
class Token:
    """A token; operators carry an empty value and EOF carries None."""

    type: TokenType
    value: str | None = ""

    @property
    def is_redirection(self) -> bool:
        return self.type in REDIRECTION_TYPES


class TokenizeError(ValueError):
    """Raised when a line cannot be split into tokens."""


_TOKEN_RE = re.compile(
    r"""
      (?P<space>[ \t]+)
    | '(?P<single>[^']*)'
    | "(?P<double>[^"]*)"
    | (?P<op><<|>>|[|<>])
    | (?P<word>[^ \t|<>'"]+)
    """,
    re.VERBOSE,
)


def tokenize(line: str) -> list[Token]:
    """Split *line* into tokens, always ending with an EOF token.

    Quoted text becomes a word of its own without the quotes. An
    unterminated quote raises TokenizeError.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        match = _TOKEN_RE.match(line, pos)
        if match is None:
            raise TokenizeError(f"unclosed quote {line[pos]}")
        kind = match.lastgroup
        if kind == "op":
            tokens.append(Token(_OPERATORS[match.group("op")], ""))
        elif kind in ("single", "double", "word"):
            tokens.append(Token(TokenType.WORD, match.group(kind)))
        pos = match.end()
    tokens.append(Token(TokenType.EOF, None))
    return tokens