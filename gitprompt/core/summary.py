# SPDX-License-Identifier: Apache-2.0
"""Records describing a repository's working tree state."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

NO_REMOTE = "."
"""Remote descriptor used when the branch tracks nothing."""


@dataclass(frozen=True, slots=True)
class BranchHeader:
    """Branch information taken from the ``##`` line of porcelain status."""

    branch: str
    remote: str = NO_REMOTE
    detached: bool = False


@dataclass(frozen=True, slots=True)
class FileCounts:
    """Per-category file counts from porcelain status."""

    added: int = 0
    modified: int = 0
    deleted: int = 0
    renamed: int = 0
    unmerged: int = 0
    untracked: int = 0


@dataclass(frozen=True, slots=True)
class PorcelainStatus:
    header: BranchHeader
    counts: FileCounts = field(default_factory=FileCounts)


@dataclass(frozen=True, slots=True)
class RepositoryStatusSummary:
    """Everything the prompt formatter can show about a repository."""

    branch: str
    remote: str = NO_REMOTE
    added: int = 0
    modified: int = 0
    deleted: int = 0
    renamed: int = 0
    unmerged: int = 0
    untracked: int = 0
    stashed: int = 0
    insertions: int = 0
    deletions: int = 0

    @property
    def is_dirty(self) -> bool:
        return self.added > 0 or self.modified > 0 or self.deleted > 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the summary for JSON output."""

        payload = asdict(self)
        payload["dirty"] = self.is_dirty
        return payload
