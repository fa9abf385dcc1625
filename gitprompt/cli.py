"""Command-line interface printing a one-line git status for shell prompts."""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from typing import List

from gitprompt import __version__
from gitprompt.core import config, formatter, gitmeta
from gitprompt.runners.git import CommandFailed, CommandTimeout, GitRunner

_LOG = logging.getLogger("gitprompt")

TIMEOUT_OUTPUT = "timeout"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gitprompt", description="Print a condensed git status for shell prompts")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log more detail to stderr (repeat for debug output)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--dir", type=pathlib.Path, default=None, help="Repository location (defaults to the current directory)")
    parser.add_argument("--timeout", type=int, default=None, metavar="MS", help=f"Deadline per git command in milliseconds (default {config.DEFAULT_TIMEOUT_MS}, 0 disables)")
    parser.add_argument("--format", default=None, metavar="TEMPLATE", help="Prompt template (default '[%%n:%%b]')")
    parser.add_argument("--config", type=pathlib.Path, default=None, help=f"YAML settings file (defaults to ${config.CONFIG_ENV})")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON instead of the template")
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    try:
        settings = config.load_settings(args.config or config.default_config_path()).with_overrides(
            repo_dir=args.dir,
            timeout_ms=args.timeout,
            template=args.format,
        )
    except config.ConfigError as exc:
        _LOG.error("invalid configuration: %s", exc)
        return 2

    runner = GitRunner(
        repo_dir=settings.repo_dir,
        timeout=settings.timeout_seconds,
        binary=settings.git_binary,
    )
    try:
        summary = gitmeta.collect_summary(runner, hash_length=settings.hash_length)
    except CommandTimeout as exc:
        _LOG.warning("%s", exc)
        print(TIMEOUT_OUTPUT)
        return 1
    except CommandFailed as exc:
        _LOG.error("%s", exc)
        return 1

    if args.json:
        print(json.dumps(summary.to_dict(), sort_keys=True))
    else:
        print(formatter.render(summary, settings.template, dirty_marker=settings.dirty_marker))
    return 0


def _configure_logging(verbosity: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    _LOG.handlers[:] = [handler]
    _LOG.setLevel(level)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
