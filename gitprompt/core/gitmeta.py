"""Collect a repository status summary by running git."""

from __future__ import annotations

import dataclasses
import logging

from gitprompt.core import diffstat, stash, status_parser
from gitprompt.core.config import DEFAULT_HASH_LENGTH
from gitprompt.core.summary import RepositoryStatusSummary
from gitprompt.runners.git import CommandFailed, GitRunner

_LOG = logging.getLogger(__name__)


def tag_or_hash(runner: GitRunner, hash_length: int = DEFAULT_HASH_LENGTH) -> str:
    """Name a detached HEAD by its exact tag, falling back to a short hash."""

    try:
        tag = runner.run("describe", "--tags", "--exact-match").strip()
        if tag:
            return tag
    except CommandFailed as exc:
        _LOG.debug("no exact tag for HEAD: %s", exc)
    try:
        return runner.run("rev-parse", f"--short={hash_length}", "HEAD").strip()
    except CommandFailed as exc:
        _LOG.error("cannot name detached HEAD: %s", exc)
        return ""


def collect_summary(runner: GitRunner, hash_length: int = DEFAULT_HASH_LENGTH) -> RepositoryStatusSummary:
    status = status_parser.parse_porcelain(runner.run("status", "--porcelain", "--branch"))
    branch = status.header.branch
    if status.header.detached:
        branch = tag_or_hash(runner, hash_length)
    insertions, deletions = diffstat.count_diff(runner)
    summary = RepositoryStatusSummary(
        branch=branch,
        remote=status.header.remote,
        stashed=stash.count_stashes(runner),
        insertions=insertions,
        deletions=deletions,
        **dataclasses.asdict(status.counts),
    )
    for field in dataclasses.fields(summary):
        _LOG.debug("%-11s %s", field.name.capitalize() + ":", getattr(summary, field.name))
    return summary
