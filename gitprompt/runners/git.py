# SPDX-License-Identifier: Apache-2.0
"""Run git subprocesses with a per-invocation deadline."""

from __future__ import annotations

import logging
import pathlib
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

_LOG = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """Base class for failures raised by :func:`run_command`."""


class CommandFailed(CommandError):
    """The command could not be started or exited with a non-zero status."""

    def __init__(self, cmd: Sequence[str], returncode: Optional[int], stderr: str = "") -> None:
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{' '.join(self.cmd)}: {detail}")


class CommandTimeout(CommandError):
    """The command did not finish before its deadline and was killed."""

    def __init__(self, cmd: Sequence[str], timeout: float) -> None:
        self.cmd = list(cmd)
        self.timeout = timeout
        super().__init__(f"{' '.join(self.cmd)}: timed out after {timeout:g}s")


def run_command(
    cmd: Sequence[str],
    cwd: str | pathlib.Path | None = None,
    timeout: Optional[float] = None,
) -> str:
    _LOG.debug("Command: %s", list(cmd))
    try:
        completed = subprocess.run(
            list(cmd),
            cwd=cwd,
            check=False,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise CommandTimeout(cmd, timeout or 0.0) from exc
    except OSError as exc:
        raise CommandFailed(cmd, None, str(exc)) from exc
    if completed.returncode != 0:
        raise CommandFailed(cmd, completed.returncode, completed.stderr or "")
    return completed.stdout


@dataclass(frozen=True)
class GitRunner:
    """Bind the git binary, repository directory and deadline together."""

    repo_dir: pathlib.Path
    timeout: Optional[float] = None
    binary: str = "git"

    def run(self, *args: str) -> str:
        return run_command([self.binary, "-C", str(self.repo_dir), *args], timeout=self.timeout)
