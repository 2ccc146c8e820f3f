"""The shell's ordered variable table and mutable session state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field


class Environment:
    """Ordered mapping of shell variables.

    New variables are appended; updating a variable keeps its position.
    """

    def __init__(self, entries: Iterable[str] | Mapping[str, str] | None = None) -> None:
        self._vars: dict[str, str] = {}
        if entries is None:
            return
        if isinstance(entries, Mapping):
            pairs: Iterable[tuple[str, str]] = entries.items()
        else:
            pairs = (
                tuple(entry.split("=", 1)) for entry in entries if "=" in entry
            )
        for key, value in pairs:
            # The first occurrence of a key wins, as lookups see it first.
            self._vars.setdefault(key, value)

    def get(self, key: str) -> str | None:
        """Return the value of *key*, or None if it is not set."""
        return self._vars.get(key)

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value*, appending it if it is new."""
        self._vars[key] = value

    def unset(self, key: str) -> None:
        """Remove *key*; a missing key is ignored."""
        self._vars.pop(key, None)

    def items(self) -> list[tuple[str, str]]:
        """Return ``(key, value)`` pairs in order."""
        return list(self._vars.items())

    def to_strings(self) -> list[str]:
        """Return ``KEY=VALUE`` strings in order, as a process environment."""
        return [f"{key}={value}" for key, value in self._vars.items()]

    def as_dict(self) -> dict[str, str]:
        """Return a copy of the variables as a plain dict."""
        return dict(self._vars)

    def __contains__(self, key: object) -> bool:
        return key in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self.to_strings()!r})"


@dataclass
class ShellState:
    """Variables and last exit status of a running shell."""

    env: Environment = field(default_factory=Environment)
    exit_code: int = 0