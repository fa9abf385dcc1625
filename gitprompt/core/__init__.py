"""Parsing, counting and formatting for the git prompt."""

__all__ = [
    "config",
    "diffstat",
    "formatter",
    "gitmeta",
    "stash",
    "status_parser",
    "summary",
]
