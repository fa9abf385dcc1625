"""Entry point for `python -m gitprompt`."""

from __future__ import annotations

from gitprompt import cli


def main(argv: list[str] | None = None) -> int:
    return cli.main(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
