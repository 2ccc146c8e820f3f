"""A small interactive shell with pipes, redirections, variable expansion and built-in commands."""

__version__ = "0.1.0"
__all__ = [
    "builtins",
    "environment",
    "errors",
    "executor",
    "expansion",
    "parser",
    "redirections",
    "shell",
    "text",
    "tokens",
]