# SPDX-License-Identifier: Apache-2.0
"""Sum insertions and deletions from ``git diff --numstat``."""

from __future__ import annotations

import re
from typing import Tuple

from gitprompt.runners.git import GitRunner

WHITESPACE = re.compile(r"\s+")


def parse_numstat(text: str) -> Tuple[int, int]:
    insertions = deletions = 0
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        fields = WHITESPACE.split(line)
        insertions += _as_int(fields[0])
        if len(fields) > 1:
            deletions += _as_int(fields[1])
    return insertions, deletions


def count_diff(runner: GitRunner) -> Tuple[int, int]:
    """Return ``(insertions, deletions)`` for unstaged changes."""

    return parse_numstat(runner.run("diff", "--numstat"))


def _as_int(value: str) -> int:
    # binary files report "-" in both columns
    try:
        return int(value)
    except ValueError:
        return 0
