"""Expansion of ``$NAME`` and ``$?`` in words."""

from __future__ import annotations

import re

from minish.environment import ShellState

_NAME_RE = re.compile(r"[A-Za-z0-9_]*")


def expand_variable_at(text: str, pos: int, state: ShellState) -> tuple[str, int]:
    """Expand the variable whose ``$`` is at *pos*.

    Returns the replacement text and the position just past the
    reference. ``$?`` gives the last exit status, an unset variable
    gives an empty string, and a ``$`` not followed by a name stays.
    """
    if pos >= len(text) or text[pos] != "$":
        raise ValueError(f"no '$' at position {pos}")
    start = pos + 1
    if text.startswith("?", start):
        return str(state.exit_code), start + 1
    name = _NAME_RE.match(text, start).group()
    if not name:
        return "$", start
    value = state.env.get(name)
    return ("" if value is None else value), start + len(name)


def expand_variables(text: str, state: ShellState) -> str:
    """Return *text* with every variable reference expanded."""
    parts: list[str] = []
    pos = 0
    while True:
        dollar = text.find("$", pos)
        if dollar == -1:
            parts.append(text[pos:])
            return "".join(parts)
        parts.append(text[pos:dollar])
        value, pos = expand_variable_at(text, dollar, state)
        parts.append(value)