# SPDX-License-Identifier: Apache-2.0
"""Parse ``git status --porcelain --branch`` output."""

from __future__ import annotations

import collections
import logging
from typing import List

from gitprompt.core.summary import NO_REMOTE, BranchHeader, FileCounts, PorcelainStatus

_LOG = logging.getLogger(__name__)

HEADER_PREFIX = "##"
UNBORN_MARKERS = ("Initial commit on", "No commits yet on")


def parse_porcelain(text: str) -> PorcelainStatus:
    """Split porcelain status into a branch header and file counts.

    The category checks are independent, so one line can bump several
    counters (``??`` is both untracked and added, ``R `` is both untracked
    and added). Renames are folded into the untracked count.
    """

    header = BranchHeader(branch="")
    counts: collections.Counter[str] = collections.Counter()
    for line in _split_lines(text):
        if len(line) < 2:
            continue
        code = line[:2]
        _LOG.debug("%s %s", code, line[2:])
        if code == HEADER_PREFIX:
            header = parse_branch_header(line)
            continue
        if code == "??":
            counts["untracked"] += 1
        if code[1] == "M":
            counts["modified"] += 1
        if code[0] == "U":
            counts["unmerged"] += 1
        if code[1] == "D":
            counts["deleted"] += 1
        if "R" in code:
            counts["untracked"] += 1
        if code[0] != " ":
            counts["added"] += 1
    return PorcelainStatus(header=header, counts=FileCounts(**counts))


def parse_branch_header(line: str) -> BranchHeader:
    rest = line[len(HEADER_PREFIX):] if line.startswith(HEADER_PREFIX) else line
    if "no branch" in rest:
        return BranchHeader(branch="", detached=True)
    if any(marker in rest for marker in UNBORN_MARKERS):
        return BranchHeader(branch=rest.split(" ")[-1])

    trimmed = rest.strip()
    if "..." not in trimmed:
        return BranchHeader(branch=trimmed)

    branch, tracking = trimmed.split("...", 1)
    words = tracking.split(" ")
    if len(words) == 1:
        remote = words[0]
    else:
        divergence = " ".join(words[1:])
        remote = divergence.strip("[]")
        for token in divergence.split(", "):
            _LOG.debug("divergence: %s", token)
    return BranchHeader(branch=branch, remote=remote or NO_REMOTE)


def _split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines
