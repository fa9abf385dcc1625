"""Render a summary through a ``%x``-style prompt template."""

from __future__ import annotations

import re
from typing import Callable, Dict

from gitprompt.core.summary import RepositoryStatusSummary

DEFAULT_TEMPLATE = "[%n:%b]"
DEFAULT_DIRTY_MARKER = "+"
VCS_NAME = "git"

PLACEHOLDER = re.compile(r"%.", re.DOTALL)

_FIELDS: Dict[str, Callable[[RepositoryStatusSummary], object]] = {
    "b": lambda s: s.branch,
    "r": lambda s: s.remote,
    "u": lambda s: s.untracked,
    "a": lambda s: s.added,
    "d": lambda s: s.deleted,
    "s": lambda s: s.stashed,
    "x": lambda s: s.insertions,
    "y": lambda s: s.deletions,
    "M": lambda s: s.modified,
    "U": lambda s: s.unmerged,
    "R": lambda s: s.renamed,
}


def render(
    summary: RepositoryStatusSummary,
    template: str = DEFAULT_TEMPLATE,
    vcs_name: str = VCS_NAME,
    dirty_marker: str = DEFAULT_DIRTY_MARKER,
) -> str:
    """Substitute placeholders in a single left-to-right pass.

    Substituted values are never rescanned, and unknown placeholders are
    copied through unchanged.
    """

    def substitute(match: re.Match[str]) -> str:
        key = match.group(0)[1]
        if key == "%":
            return "%"
        if key == "n":
            return vcs_name
        if key == "m":
            return dirty_marker if summary.is_dirty else ""
        getter = _FIELDS.get(key)
        if getter is None:
            return match.group(0)
        return str(getter(summary))

    return PLACEHOLDER.sub(substitute, template)
