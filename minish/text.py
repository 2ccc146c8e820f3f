"""Small text helpers shared by the shell."""

from __future__ import annotations


def split_fields(text: str, sep: str) -> list[str]:
    """Split *text* on *sep*, dropping empty fields.

    Runs of separators, and separators at either end, produce no
    empty strings: ``"a::b:"`` split on ``":"`` gives ``["a", "b"]``.
    """
    if not sep:
        raise ValueError("separator must not be empty")
    return [field for field in text.split(sep) if field]