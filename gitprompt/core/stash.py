# SPDX-License-Identifier: Apache-2.0
"""Count stash entries from the repository's reflog file."""

from __future__ import annotations

import logging
import pathlib
from typing import Optional

from gitprompt.runners.git import CommandFailed, GitRunner

_LOG = logging.getLogger(__name__)

STASH_LOG = pathlib.Path("logs") / "refs" / "stash"


def count_stashes(runner: GitRunner) -> int:
    git_dir = resolve_git_dir(runner)
    if git_dir is None:
        return 0
    stash_log = git_dir / STASH_LOG
    try:
        text = stash_log.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return 0
    except OSError as exc:
        _LOG.info("cannot read %s: %s", stash_log, exc)
        return 0
    return sum(1 for line in text.splitlines() if line.strip())


def resolve_git_dir(runner: GitRunner) -> Optional[pathlib.Path]:
    """Return the shared metadata directory, or ``None`` outside a repository.

    Linked worktrees keep their own ``--git-dir`` but share ``refs/stash``
    and its reflog through the common directory.
    """

    try:
        output = runner.run("rev-parse", "--git-common-dir").strip()
    except CommandFailed as exc:
        _LOG.info("cannot resolve git directory: %s", exc)
        return None
    if not output:
        return None
    git_dir = pathlib.Path(output)
    if not git_dir.is_absolute():
        git_dir = pathlib.Path(runner.repo_dir) / git_dir
    return git_dir
